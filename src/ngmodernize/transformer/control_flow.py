"""Template control-flow migration: ``*ngIf`` / ``*ngFor`` / ``ngSwitch`` to blocks.

Every directive is resolved against the element that carries it. The
closing tag of that element is located with a nesting-depth counter over
tags of the same name, so nested blocks close where their element closes.
An element whose closing tag cannot be found is left untouched and logged.

    <li *ngFor="let item of items; let i = index">{{ i }}</li>

becomes

    @for (item of items; track item; let i = $index) {
      <li>{{ i }}</li>
    }
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ngmodernize.errors import TemplateStructureError
from ngmodernize.findings.models import TransformationRecord, TransformKind
from ngmodernize.log import ComponentLogger, get_logger
from ngmodernize.transformer.base import (
    TransformContext,
    find_closing,
    make_record,
    split_top_level,
)

VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "source", "track", "wbr",
    }
)

_TAG_START = re.compile(r"<(?P<closing>/)?(?P<name>[A-Za-z][\w:.-]*)")
_SCAN = re.compile(r"<!--|\{\{|@(?:if|for|switch|case|else\s+if)\s*\(|<")
_DIRECTIVE = re.compile(
    r"(?<=\s)(?P<attr>\*ngIf|\*ngFor|\*ngSwitchCase|\*ngSwitchDefault|\[ngSwitch\])"
    r"(?![\w.-])(?:\s*=\s*(?P<q>[\"'])(?P<value>.*?)(?P=q))?",
    re.S,
)
_BARE_CONTAINER = re.compile(r"<ng-container\s*>")

_IF_THEN = re.compile(r"then\s+(?P<then>[\w$]+)(?:\s+else\s+(?P<else>[\w$]+))?")
_IF_ELSE = re.compile(r"else\s+(?P<else>[\w$]+)")
_IF_ALIAS = re.compile(r"(?P<expr>.*\S)\s+as\s+(?P<alias>[\w$]+)", re.S)

_FOR_OF = re.compile(r"let\s+(?P<var>[\w$]+)\s+of\s+(?P<items>.+)", re.S)
_FOR_LET = re.compile(
    r"let\s+(?P<alias>[\w$]+)\s*=\s*(?P<ctx>index|first|last|even|odd|count)"
)
_FOR_AS = re.compile(r"(?P<ctx>index|first|last|even|odd|count)\s+as\s+(?P<alias>[\w$]+)")
_FOR_TRACK = re.compile(r"trackBy\s*:\s*(?P<fn>.+)", re.S)


@dataclass(frozen=True)
class Tag:
    name: str
    start: int  # index of "<"
    end: int  # index after ">"
    closing: bool
    self_closing: bool


def _scan_tag_end(text: str, i: int) -> Optional[int]:
    quote: Optional[str] = None
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == ">":
            return i + 1
        i += 1
    return None


def iter_tags(text: str, pos: int = 0) -> Iterator[Tag]:
    """Yield tags from *pos* on, skipping comments, interpolations and block headers."""
    i = pos
    while True:
        m = _SCAN.search(text, i)
        if m is None:
            return
        token = m.group(0)
        if token == "<!--":
            close = text.find("-->", m.end())
            if close == -1:
                return
            i = close + 3
            continue
        if token == "{{":
            close = text.find("}}", m.end())
            if close == -1:
                return
            i = close + 2
            continue
        if token.startswith("@"):
            close = find_closing(text, m.end() - 1)
            if close is None:
                return
            i = close + 1
            continue

        tm = _TAG_START.match(text, m.start())
        if tm is None:
            i = m.start() + 1
            continue
        end = _scan_tag_end(text, tm.end())
        if end is None:
            return
        yield Tag(
            name=tm.group("name"),
            start=m.start(),
            end=end,
            closing=bool(tm.group("closing")),
            self_closing=text[end - 2] == "/",
        )
        i = end


def find_element_close(text: str, tag: Tag) -> Optional[Tag]:
    """Closing tag that matches *tag*, counting nested tags of the same name."""
    depth = 1
    for other in iter_tags(text, tag.end):
        if other.name != tag.name:
            continue
        if other.closing:
            depth -= 1
            if depth == 0:
                return other
        elif not other.self_closing:
            depth += 1
    return None


def _next_directive(text: str, pos: int) -> Optional[Tuple[Tag, re.Match[str]]]:
    for tag in iter_tags(text, pos):
        if tag.closing:
            continue
        m = _DIRECTIVE.search(text, tag.start, tag.end)
        if m is not None:
            return tag, m
    return None


def _line_of(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def _block_indent(text: str, index: int) -> Optional[str]:
    """Indentation when the tag starts its own line, else None (inline)."""
    prefix = text[text.rfind("\n", 0, index) + 1 : index]
    return prefix if not prefix.strip() else None


def _wrap(header: str, body: str, indent: Optional[str], bare: bool) -> str:
    if bare or indent is None:
        return f"{header} {{{body}}}"
    shifted = re.sub(r"\n(?=[^\n])", "\n  ", body)
    return f"{header} {{\n{indent}  {shifted}\n{indent}}}"


def _outlet(template_ref: str) -> str:
    return f'<ng-container *ngTemplateOutlet="{template_ref}"></ng-container>'


def parse_if(value: str) -> Tuple[str, Optional[str], Optional[str]]:
    """``cond; then a else b`` -> (header expression, then ref, else ref)."""
    parts = [p.strip() for p in split_top_level(value, ";", angle=False)]
    if not parts:
        raise TemplateStructureError("empty *ngIf expression")
    cond, then_ref, else_ref = parts[0], None, None
    for part in parts[1:]:
        m = _IF_THEN.fullmatch(part)
        if m:
            then_ref = m.group("then")
            else_ref = m.group("else") or else_ref
            continue
        m = _IF_ELSE.fullmatch(part)
        if m:
            else_ref = m.group("else")
            continue
        raise TemplateStructureError(f"unsupported *ngIf clause {part!r}")

    alias = _IF_ALIAS.fullmatch(cond)
    if alias:
        cond = f"{alias.group('expr')}; as {alias.group('alias')}"
    return cond, then_ref, else_ref


def parse_for(value: str) -> str:
    """``let x of xs; let i = index; trackBy: fn`` -> the ``@for`` header."""
    parts = [p.strip() for p in split_top_level(value, ";,", angle=False)]
    m = _FOR_OF.fullmatch(parts[0]) if parts else None
    if m is None:
        raise TemplateStructureError(f"unsupported *ngFor expression {value!r}")
    var, items = m.group("var"), m.group("items").strip()
    track = var
    lets: List[str] = []
    for part in parts[1:]:
        lm = _FOR_LET.fullmatch(part) or _FOR_AS.fullmatch(part)
        if lm:
            lets.append(f"{lm.group('alias')} = ${lm.group('ctx')}")
            continue
        tm = _FOR_TRACK.fullmatch(part)
        if tm:
            track = f"{tm.group('fn').strip()}($index, {var})"
            continue
        raise TemplateStructureError(f"unsupported *ngFor clause {part!r}")

    header = f"{var} of {items}; track {track}"
    if lets:
        header += "; let " + ", ".join(lets)
    return header


def _rewrite(text: str, tag: Tag, m: re.Match[str]) -> str:
    attr = m.group("attr")
    value = (m.group("value") or "").strip()

    cut = m.start()
    while cut > tag.start and text[cut - 1].isspace():
        cut -= 1
    open_tag = text[tag.start : cut] + text[m.end() : tag.end]

    inner: Optional[str] = None
    close_tag = ""
    end = tag.end
    if not (tag.self_closing or tag.name.lower() in VOID_ELEMENTS):
        close = find_element_close(text, tag)
        if close is None:
            raise TemplateStructureError(
                f"<{tag.name}> at line {_line_of(text, tag.start)} has no closing tag"
            )
        inner = text[tag.end : close.start]
        close_tag = text[close.start : close.end]
        end = close.end

    bare = inner is not None and bool(_BARE_CONTAINER.fullmatch(open_tag))
    body = inner if bare else open_tag + (inner or "") + close_tag
    indent = _block_indent(text, tag.start)

    if attr == "[ngSwitch]":
        if inner is None:
            raise TemplateStructureError(
                f"[ngSwitch] on empty <{tag.name}> at line {_line_of(text, tag.start)}"
            )
        block = f"@switch ({value}) {{{inner}}}"
        replacement = block if bare else open_tag + block + close_tag
    elif attr == "*ngIf":
        cond, then_ref, else_ref = parse_if(value)
        if then_ref:
            body, bare = _outlet(then_ref), False
        replacement = _wrap(f"@if ({cond})", body, indent, bare)
        if else_ref:
            replacement += " " + _wrap("@else", _outlet(else_ref), indent, False)
    elif attr == "*ngFor":
        replacement = _wrap(f"@for ({parse_for(value)})", body, indent, bare)
    elif attr == "*ngSwitchCase":
        replacement = _wrap(f"@case ({value})", body, indent, bare)
    else:
        replacement = _wrap("@default", body, indent, bare)

    return text[: tag.start] + replacement + text[end:]


def migrate_template(
    text: str, log: Optional[ComponentLogger] = None, path: str = ""
) -> Tuple[str, int]:
    """Rewrite every resolvable directive; return (new text, rewrites done)."""
    log = log or get_logger("transformer")
    pos = 0
    count = 0
    while True:
        found = _next_directive(text, pos)
        if found is None:
            return text, count
        tag, m = found
        try:
            text = _rewrite(text, tag, m)
        except TemplateStructureError as exc:
            log.warning(
                "%s: %s; left unchanged",
                path,
                exc,
                payload={"path": path, "directive": m.group("attr")},
            )
            pos = tag.end
            continue
        count += 1
        pos = tag.start


def migrate_control_flow(
    content: str, ctx: TransformContext
) -> Optional[TransformationRecord]:
    after, count = migrate_template(content, ctx.log, ctx.file.path)
    if not count or after == content:
        return None
    return make_record(
        TransformKind.MIGRATE_CONTROL_FLOW,
        f"Migrated {count} structural directive(s) to block control flow",
        content,
        after,
    )
