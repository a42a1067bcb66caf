"""Service-only rules."""

from __future__ import annotations

import re
from typing import Optional

from ngmodernize.findings.models import TransformationRecord, TransformKind
from ngmodernize.transformer.base import (
    TransformContext,
    add_object_property,
    find_closing,
    make_record,
)

_INJECTABLE_EMPTY = re.compile(r"@Injectable\s*\(\s*\)")
_INJECTABLE_METADATA = re.compile(r"@Injectable\s*\(\s*\{")
_PROVIDED_IN = re.compile(r"\bprovidedIn\s*:")


def provide_in_root(
    content: str, ctx: TransformContext
) -> Optional[TransformationRecord]:
    """Make ``@Injectable`` services tree-shakable with ``providedIn: 'root'``.

    Services that already name any ``providedIn`` scope are left alone.
    """
    m = _INJECTABLE_METADATA.search(content)
    if m is not None:
        brace = m.end() - 1
        close = find_closing(content, brace)
        if close is None or _PROVIDED_IN.search(content, brace, close):
            return None
        after = add_object_property(content, brace, "providedIn: 'root'")
    else:
        m = _INJECTABLE_EMPTY.search(content)
        if m is None:
            return None
        after = content[: m.start()] + "@Injectable({\n  providedIn: 'root'\n})" + content[m.end():]

    if after == content:
        return None
    return make_record(
        TransformKind.CONVERT_TO_STANDALONE,
        "Registered service with providedIn: 'root'",
        content,
        after,
    )
