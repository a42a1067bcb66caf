"""Project file discovery: expand the fixed glob set into (path, content) pairs."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ngmodernize.errors import DiscoveryError
from ngmodernize.files.models import SourceFile
from ngmodernize.log import ComponentLogger, get_logger

SOURCE_PATTERNS = (
    "src/**/*.ts",
    "src/**/*.html",
    "src/**/*.css",
    "src/**/*.scss",
)
MANIFEST_FILES = ("package.json", "angular.json", "tsconfig.json")

_SKIP_PARTS = frozenset({"node_modules", "dist", ".angular"})


def _iter_candidates(root: Path) -> List[Path]:
    found: dict[str, Path] = {}
    for pattern in SOURCE_PATTERNS:
        for path in root.glob(pattern):
            if not path.is_file():
                continue
            rel = path.relative_to(root)
            if _SKIP_PARTS.intersection(rel.parts):
                continue
            found.setdefault(rel.as_posix(), path)
    for name in MANIFEST_FILES:
        path = root / name
        if path.is_file():
            found.setdefault(name, path)
    return [found[key] for key in sorted(found)]


def discover(project_root: Path, log: Optional[ComponentLogger] = None) -> List[SourceFile]:
    """Return every matching file under *project_root*, fully read.

    Raises DiscoveryError when the root does not exist or nothing matches.
    Files that cannot be read or decoded are logged and left out.
    """
    log = log or get_logger("discovery")
    root = Path(project_root)
    if not root.is_dir():
        raise DiscoveryError(f"Project path does not exist or is not a directory: {root}")

    files: List[SourceFile] = []
    for path in _iter_candidates(root):
        rel = path.relative_to(root).as_posix()
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Cannot read %s: %s", rel, exc, payload={"path": rel})
            continue
        files.append(SourceFile(path=rel, content=content))

    if not files:
        raise DiscoveryError(f"No Angular source or manifest files found under {root}")

    log.debug("Discovered %d files", len(files), payload={"count": len(files)})
    return files
