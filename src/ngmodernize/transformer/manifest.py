"""Atomic ``package.json`` rewrite: bump target versions, drop obsolete packages."""

from __future__ import annotations

import json
from typing import List, Optional

from ngmodernize.findings.models import TransformationRecord, TransformKind
from ngmodernize.scanner.manifest import DEPENDENCY_SECTIONS, parse_manifest
from ngmodernize.transformer.base import TransformContext, make_record


def update_dependencies(
    content: str, ctx: TransformContext
) -> Optional[TransformationRecord]:
    """Raises ManifestError when the manifest cannot be parsed."""
    cfg = ctx.config.manifest
    data = parse_manifest(content)

    updated: List[str] = []
    removed: List[str] = []
    for section in DEPENDENCY_SECTIONS:
        deps = data.get(section)
        if not isinstance(deps, dict):
            continue
        for name, target in cfg.target_versions.items():
            if name in deps and deps[name] != target:
                deps[name] = target
                updated.append(f"{name}@{target}")
        for name in cfg.obsolete_packages:
            if name in deps:
                del deps[name]
                removed.append(name)

    if not updated and not removed:
        return None

    after = json.dumps(data, indent=2, ensure_ascii=False)
    if content.endswith("\n"):
        after += "\n"

    parts = []
    if updated:
        parts.append("updated " + ", ".join(updated))
    if removed:
        parts.append("removed " + ", ".join(removed))
    return make_record(
        TransformKind.UPDATE_DEPENDENCY_VERSION,
        "Dependencies: " + "; ".join(parts),
        content,
        after,
    )
