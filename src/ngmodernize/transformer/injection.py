"""Constructor parameter injection -> ``inject()`` field initialisers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from ngmodernize.findings.models import TransformationRecord, TransformKind
from ngmodernize.transformer.base import (
    TransformContext,
    ensure_named_import,
    find_closing,
    line_indent,
    make_record,
    split_top_level,
)

_CONSTRUCTOR = re.compile(r"\bconstructor\s*\(")
_CLASS_OPEN = re.compile(r"\bclass\s+[\w$]+[^{;]*\{")
_DECORATOR = re.compile(r"@(?P<name>\w+)\s*\((?P<arg>[^()]*)\)\s*")
_PARAM = re.compile(
    r"(?:(?P<access>private|public|protected)\s+)?(?:(?P<readonly>readonly)\s+)?"
    r"(?P<name>[\w$]+)\s*(?P<optional>\?)?\s*:\s*(?P<type>.+)",
    re.S,
)
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")

# Parameter decorators that map onto inject() options.
_FLAG_DECORATORS = {
    "Optional": "optional",
    "Self": "self",
    "SkipSelf": "skipSelf",
    "Host": "host",
}


@dataclass(frozen=True)
class InjectedParam:
    name: str
    token: str
    access: str
    readonly: bool
    options: Tuple[str, ...] = ()

    def field(self, force_readonly: bool) -> str:
        modifiers = [self.access] if self.access else []
        if self.readonly or force_readonly:
            modifiers.append("readonly")
        opts = ""
        if self.options:
            opts = ", { " + ", ".join(f"{o}: true" for o in self.options) + " }"
        return f"{' '.join(modifiers + [self.name])} = inject({self.token}{opts});"


def parse_parameter(raw: str) -> Optional[InjectedParam]:
    """Return the injectable reading of a constructor parameter, or None.

    Only parameter properties (access modifier or ``readonly``) qualify, and
    only when an injection token can be named.
    """
    text = raw.strip()
    token: Optional[str] = None
    options: List[str] = []
    while True:
        m = _DECORATOR.match(text)
        if m is None:
            break
        name, arg = m.group("name"), m.group("arg").strip()
        if name == "Inject":
            token = arg
        elif name in _FLAG_DECORATORS:
            options.append(_FLAG_DECORATORS[name])
        else:
            return None
        text = text[m.end():]

    m = _PARAM.fullmatch(text)
    if m is None or not (m.group("access") or m.group("readonly")):
        return None
    if "=" in m.group("type"):
        return None  # default value: not a DI parameter

    if token is None:
        base = m.group("type").split("<", 1)[0].strip()
        if not _IDENTIFIER.fullmatch(base):
            return None
        token = base
    if m.group("optional") and "optional" not in options:
        options.append("optional")

    return InjectedParam(
        name=m.group("name"),
        token=token,
        access=m.group("access") or "",
        readonly=bool(m.group("readonly")),
        options=tuple(options),
    )


_WORD = re.compile(r"[A-Za-z_$][\w$]*")
_SUPER_CALL = re.compile(r"\bsuper\s*\(")
_SPACE = re.compile(r"\s*")

Edit = Tuple[int, int, str]


def _prev_char(code: str, i: int, lo: int) -> str:
    while i > lo and code[i - 1].isspace():
        i -= 1
    return code[i - 1] if i > lo else ""


def _next_char(code: str, i: int) -> str:
    j = _SPACE.match(code, i).end()
    return code[j] if j < len(code) else ""


def _skip_string(code: str, i: int) -> int:
    quote = code[i]
    i += 1
    while i < len(code):
        if code[i] == "\\":
            i += 2
            continue
        if code[i] == quote:
            return i + 1
        i += 1
    return i


def _collect_uses(code: str, names: Set[str], start: int, end: int, edits: List[Edit]) -> None:
    """Record a ``this.`` rewrite for each reference to *names* in code[start:end].

    Strings, comments, member accesses and object-literal keys are not
    references. Shorthand properties expand to ``name: this.name``. The
    ``${...}`` parts of template literals are scanned as code.
    """
    stack: List[str] = []
    i = start
    while i < end:
        ch = code[i]
        if code.startswith("//", i):
            nl = code.find("\n", i, end)
            i = end if nl == -1 else nl
        elif code.startswith("/*", i):
            close = code.find("*/", i + 2, end)
            i = end if close == -1 else close + 2
        elif ch in "'\"":
            i = _skip_string(code, i)
        elif ch == "`":
            i += 1
            while i < end and code[i] != "`":
                if code[i] == "\\":
                    i += 2
                elif code.startswith("${", i):
                    close = find_closing(code, i + 1)
                    if close is None:
                        return
                    _collect_uses(code, names, i + 2, close, edits)
                    i = close + 1
                else:
                    i += 1
            i += 1
        elif ch in "([{":
            stack.append(ch)
            i += 1
        elif ch in ")]}":
            if stack:
                stack.pop()
            i += 1
        else:
            m = _WORD.match(code, i)
            if m is None:
                i += 1
                continue
            word = m.group(0)
            i = m.end()
            if word not in names:
                continue
            before = _prev_char(code, m.start(), start)
            if before == "." and not code[:m.start()].rstrip().endswith("..."):
                continue
            after = _next_char(code, m.end())
            in_object = bool(stack) and stack[-1] == "{" and before in ("{", ",")
            if in_object and after == ":":
                continue
            if in_object and after in ("}", ","):
                edits.append((m.start(), m.end(), f"{word}: this.{word}"))
            else:
                edits.append((m.start(), m.end(), f"this.{word}"))


def _passes_to_super(body: str, edits: List[Edit]) -> bool:
    for call in _SUPER_CALL.finditer(body):
        close = find_closing(body, call.end() - 1)
        if close is None:
            continue
        if any(call.end() <= s < close for s, _, _ in edits):
            return True
    return False


def _apply(code: str, edits: List[Edit]) -> str:
    for s, e, text in sorted(edits, reverse=True):
        code = code[:s] + text + code[e:]
    return code


def _rewrite_first(content: str, force_readonly: bool) -> Optional[Tuple[str, List[str]]]:
    """Convert the first constructor that has injectable parameters."""
    for ctor in _CONSTRUCTOR.finditer(content):
        paren = ctor.end() - 1
        paren_close = find_closing(content, paren)
        if paren_close is None:
            continue
        params = split_top_level(content[paren + 1 : paren_close])
        parsed = [(raw, parse_parameter(raw)) for raw in params]
        injected = [p for _, p in parsed if p is not None]
        if not injected:
            continue

        brace = re.compile(r"\s*\{").match(content, paren_close + 1)
        if brace is None:
            continue
        body_open = brace.end() - 1
        body_close = find_closing(content, body_open)
        classes = list(_CLASS_OPEN.finditer(content, 0, ctor.start()))
        if body_close is None or not classes:
            continue
        class_brace = classes[-1].end() - 1

        body = content[body_open + 1 : body_close]
        edits: List[Edit] = []
        _collect_uses(body, {p.name for p in injected}, 0, len(body), edits)
        if _passes_to_super(body, edits):
            # Fields are not initialised before super() runs.
            continue
        body = _apply(body, edits)

        indent = line_indent(content, ctor.start())
        kept = [raw.strip() for raw, p in parsed if p is None]

        if not kept and not body.strip():
            start = content.rfind("\n", 0, ctor.start()) + 1
            end = body_close + 1
            if content.startswith("\n", end):
                end += 1
            # Collapse the blank lines that surrounded the removed constructor.
            if content.startswith("\n", end) and content[start - 2 : start] == "\n\n":
                end += 1
            content = content[:start] + content[end:]
        else:
            ctor_text = f"constructor({', '.join(kept)}) {{{body}}}"
            content = content[: ctor.start()] + ctor_text + content[body_close + 1 :]

        fields = "".join(f"\n{indent}{p.field(force_readonly)}" for p in injected)
        rest = content[class_brace + 1 :]
        sep = "" if re.match(r"\s*\}", rest) else "\n"
        content = content[: class_brace + 1] + fields + sep + rest
        return content, [p.token for p in injected]
    return None


def replace_constructor_injection(
    content: str, ctx: TransformContext
) -> Optional[TransformationRecord]:
    after = content
    tokens: List[str] = []
    while True:
        step = _rewrite_first(after, ctx.config.transform.inject_readonly)
        if step is None:
            break
        after, found = step
        tokens.extend(found)
    if not tokens:
        return None

    after = ensure_named_import(after, "inject", "@angular/core")
    return make_record(
        TransformKind.REPLACE_CONSTRUCTOR_INJECTION,
        "Replaced constructor injection with inject(): " + ", ".join(tokens),
        content,
        after,
    )
