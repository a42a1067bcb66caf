"""NgModule descriptors are flagged for manual migration, never rewritten."""

from __future__ import annotations

import re
from typing import Optional

from ngmodernize.findings.models import TransformationRecord, TransformKind
from ngmodernize.transformer.base import TransformContext, make_record

_NGMODULE = re.compile(r"@NgModule\s*\(")


def flag_module_wrapper(
    content: str, ctx: TransformContext
) -> Optional[TransformationRecord]:
    """Emit one no-op placeholder per file.

    A file that already carries a placeholder from an earlier pass gets no
    second one.
    """
    if any(
        r.kind == TransformKind.REMOVE_LEGACY_MODULE_WRAPPER
        for r in ctx.file.transformations
    ):
        return None

    m = _NGMODULE.search(content)
    where = f" (@NgModule at line {content.count(chr(10), 0, m.start()) + 1})" if m else ""
    return make_record(
        TransformKind.REMOVE_LEGACY_MODULE_WRAPPER,
        "Module wrapper needs manual migration to standalone components "
        "and bootstrapApplication()" + where,
        content,
        content,
    )
