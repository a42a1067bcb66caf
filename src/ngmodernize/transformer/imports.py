"""Import-path rewriting shared by every script pipeline."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from ngmodernize.findings.models import TransformationRecord, TransformKind
from ngmodernize.transformer.base import TransformContext, make_record

IMPORT_REWRITES: List[Tuple[str, str]] = [
    ("@angular/http", "@angular/common/http"),
    ("rxjs/operators", "rxjs"),
    ("rxjs/Observable", "rxjs"),
    ("rxjs/Subject", "rxjs"),
    ("rxjs/BehaviorSubject", "rxjs"),
    ("rxjs/ReplaySubject", "rxjs"),
    ("rxjs/Subscription", "rxjs"),
]

_COMPILED = [
    (re.compile(rf"(from\s+)(['\"]){re.escape(old)}\2"), old, new)
    for old, new in IMPORT_REWRITES
]


def update_import_paths(
    content: str, ctx: TransformContext
) -> Optional[TransformationRecord]:
    after = content
    moved: List[str] = []
    for pattern, old, new in _COMPILED:
        after, count = pattern.subn(rf"\g<1>\g<2>{new}\g<2>", after)
        if count:
            moved.append(f"{old} -> {new}")
    if not moved:
        return None
    return make_record(
        TransformKind.UPDATE_IMPORT_PATH,
        "Updated import paths: " + ", ".join(moved),
        content,
        after,
    )
