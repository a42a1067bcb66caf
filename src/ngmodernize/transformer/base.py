"""Shared rule plumbing: context object, record helper, text scanning."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from ngmodernize.config.schema import ModernizeConfig
from ngmodernize.files.models import AnalyzedFile
from ngmodernize.findings.models import TransformationRecord, TransformKind
from ngmodernize.log import ComponentLogger

_QUOTES = "'\"`"
_PAIRS = {"(": ")", "[": "]", "{": "}"}


@dataclass(frozen=True)
class TransformContext:
    """What a rule may look at besides the current content."""

    file: AnalyzedFile
    config: ModernizeConfig
    log: ComponentLogger


RuleFn = Callable[[str, TransformContext], Optional[TransformationRecord]]


def make_record(
    kind: TransformKind, description: str, before: str, after: str
) -> TransformationRecord:
    return TransformationRecord(kind=kind, description=description, before=before, after=after)


def find_closing(text: str, open_index: int) -> Optional[int]:
    """Index of the bracket closing the one at *open_index*, or None.

    String literals are skipped so brackets inside quotes do not count.
    """
    opener = text[open_index]
    closer = _PAIRS[opener]
    depth = 0
    quote: Optional[str] = None
    i = open_index
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def split_top_level(text: str, separators: str = ",", angle: bool = True) -> List[str]:
    """Split *text* on *separators* that sit outside brackets and quotes.

    With *angle* set, ``<...>`` counts as a bracket pair (TypeScript generics).
    """
    openers, closers = ("([{<", ")]}>") if angle else ("([{", ")]}")
    parts: List[str] = []
    depth = 0
    quote: Optional[str] = None
    current: List[str] = []
    for ch in text:
        if quote:
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch in openers:
            depth += 1
        elif ch in closers and depth > 0:
            depth -= 1
        elif ch in separators and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return [p for p in parts if p.strip()]


def line_indent(text: str, index: int) -> str:
    """Leading whitespace of the line holding *index*."""
    start = text.rfind("\n", 0, index) + 1
    m = re.match(r"[ \t]*", text[start:])
    return m.group(0) if m else ""


def add_object_property(text: str, brace_index: int, entry: str) -> str:
    """Insert ``entry,`` as the first property of the object literal at *brace_index*."""
    close = find_closing(text, brace_index)
    if close is None:
        return text
    body = text[brace_index + 1 : close]
    if not body.strip():
        return f"{text[: brace_index + 1]} {entry} {text[close:]}"
    nl = re.match(r"[ \t]*\n([ \t]*)", body)
    insertion = f"\n{nl.group(1)}{entry}," if nl else f" {entry},"
    return text[: brace_index + 1] + insertion + text[brace_index + 1 :]


_NAMED_IMPORT = (
    r"import\s*\{{(?P<names>[^}}]*)\}}\s*from\s*(?P<q>['\"]){module}(?P=q)"
)


def ensure_named_import(text: str, name: str, module: str) -> str:
    """Make sure ``name`` is imported from *module*, adding it if needed."""
    pattern = re.compile(_NAMED_IMPORT.format(module=re.escape(module)))
    m = pattern.search(text)
    if m is None:
        return f"import {{ {name} }} from '{module}';\n{text}"

    names = m.group("names")
    imported = [n.split(" as ")[0].strip() for n in names.split(",")]
    if name in imported:
        return text

    core = names.rstrip()
    trail = names[len(core):]
    if core.endswith(","):
        merged = f"{core} {name},{trail}"
    else:
        merged = f"{core}, {name}{trail}"
    return text[: m.start("names")] + merged + text[m.end("names"):]
