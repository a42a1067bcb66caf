"""File classifier: assign a FileType from path conventions, then content.

Naming conventions always win. Content is only inspected for ``.ts`` files
that carry no convention and for extensionless files.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from ngmodernize.files.models import FileType

MANIFEST_NAME = "package.json"
WORKSPACE_CONFIG_NAMES = frozenset({"angular.json", ".angular-cli.json"})

_STYLE_EXTENSIONS = frozenset({".css", ".scss", ".sass", ".less"})
_SCRIPT_EXTENSIONS = frozenset({".ts"})

# Checked in order; routing first so ``app-routing.module.ts`` is a routing file.
_NAME_CONVENTIONS = (
    (re.compile(r"[.-]routing\."), FileType.ROUTING_DESCRIPTOR),
    (re.compile(r"\.component\."), FileType.UI_COMPONENT),
    (re.compile(r"\.service\."), FileType.SERVICE),
    (re.compile(r"\.module\."), FileType.MODULE_DESCRIPTOR),
)

_CONTENT_MARKERS = (
    (re.compile(r"@Component\s*\("), FileType.UI_COMPONENT),
    (re.compile(r"@NgModule\s*\("), FileType.MODULE_DESCRIPTOR),
    (re.compile(r"@Injectable\s*\("), FileType.SERVICE),
)


def _by_content(content: str) -> FileType:
    for pattern, file_type in _CONTENT_MARKERS:
        if pattern.search(content):
            return file_type
    return FileType.OTHER


def classify(path: str, content: str = "") -> FileType:
    """Return exactly one FileType for *path* / *content*; never raises."""
    normalised = (path or "").replace("\\", "/")
    name = PurePosixPath(normalised).name
    if not name:
        return FileType.OTHER

    if name == MANIFEST_NAME:
        return FileType.DEPENDENCY_MANIFEST
    if name in WORKSPACE_CONFIG_NAMES or (name.startswith("tsconfig") and name.endswith(".json")):
        return FileType.OTHER

    suffix = PurePosixPath(name).suffix.lower()
    if suffix == ".html":
        return FileType.TEMPLATE
    if suffix in _STYLE_EXTENSIONS:
        return FileType.OTHER

    if suffix in _SCRIPT_EXTENSIONS:
        for pattern, file_type in _NAME_CONVENTIONS:
            if pattern.search(name):
                return file_type
        return _by_content(content or "")

    if not suffix:
        return _by_content(content or "")

    return FileType.OTHER
