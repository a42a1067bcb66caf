"""Component-only rules: standalone marker and typed reactive forms."""

from __future__ import annotations

import re
from typing import List, Optional

from ngmodernize.findings.models import TransformationRecord, TransformKind
from ngmodernize.transformer.base import (
    TransformContext,
    add_object_property,
    ensure_named_import,
    find_closing,
    make_record,
)

_COMPONENT_METADATA = re.compile(r"@Component\s*\(\s*\{")
_STANDALONE = re.compile(r"\bstandalone\s*:")

_UNTYPED_FORM_GROUP = re.compile(r"\bFormGroup\s*\(\s*\)")
_UNTYPED_FORM_CONTROL = re.compile(r"\bFormControl\s*\(\s*\)")


def add_standalone_marker(
    content: str, ctx: TransformContext
) -> Optional[TransformationRecord]:
    m = _COMPONENT_METADATA.search(content)
    if m is None:
        return None
    brace = m.end() - 1
    close = find_closing(content, brace)
    if close is None or _STANDALONE.search(content, brace, close):
        return None

    after = add_object_property(content, brace, "standalone: true")
    if after == content:
        return None
    return make_record(
        TransformKind.CONVERT_TO_STANDALONE,
        "Marked component as standalone",
        content,
        after,
    )


def add_form_generics(
    content: str, ctx: TransformContext
) -> Optional[TransformationRecord]:
    cfg = ctx.config.transform
    after = content
    typed: List[str] = []

    after, groups = _UNTYPED_FORM_GROUP.subn(f"FormGroup<{cfg.form_group_type}>()", after)
    if groups:
        typed.append(f"{groups} FormGroup")
    after, controls = _UNTYPED_FORM_CONTROL.subn(
        f"FormControl<{cfg.form_control_type}>()", after
    )
    if controls:
        typed.append(f"{controls} FormControl")
    if not typed:
        return None

    if groups and re.search(r"\bAbstractControl\b", cfg.form_group_type):
        after = ensure_named_import(after, "AbstractControl", "@angular/forms")
    return make_record(
        TransformKind.ADD_FORM_GENERICS,
        "Added type arguments to " + " and ".join(typed),
        content,
        after,
    )
