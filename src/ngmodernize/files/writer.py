"""Write migrated content back to disk, with optional backups and rollback."""

from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ngmodernize.errors import BackupError
from ngmodernize.files.models import AnalyzedFile

BACKUP_DIRNAME = ".ngmodernize-backup"
STAMP_FORMAT = "%Y%m%d-%H%M%S"

ConfirmFn = Callable[[AnalyzedFile], bool]


class FileWriter:
    """Callable writer collaborator used by the coordinator in migrate mode.

    Returns True when the file was written, False when *confirm* declined.
    I/O errors propagate so the coordinator can mark the records failed.
    """

    def __init__(
        self,
        project_root: Path,
        *,
        backup: bool = True,
        confirm: Optional[ConfirmFn] = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.backup = backup
        self.confirm = confirm
        self.backup_dir = (
            self.project_root / BACKUP_DIRNAME / datetime.now().strftime(STAMP_FORMAT)
        )
        self.written: list[str] = []

    def __call__(self, file: AnalyzedFile) -> bool:
        if self.confirm is not None and not self.confirm(file):
            return False

        target = self.project_root / file.path
        if self.backup and target.exists():
            backup_path = self.backup_dir / file.path
            # Within one backup the first copy is the pre-migration original.
            if not backup_path.exists():
                backup_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(target, backup_path)

        target.write_text(file.content, encoding="utf-8")
        self.written.append(file.path)
        return True


def list_backups(project_root: Path) -> List[str]:
    """Backup stamps under *project_root*, oldest first."""
    backup_root = Path(project_root) / BACKUP_DIRNAME
    if not backup_root.is_dir():
        return []
    return sorted(p.name for p in backup_root.iterdir() if p.is_dir())


def restore_backup(project_root: Path, stamp: Optional[str] = None) -> Tuple[str, List[str]]:
    """Copy a backup tree back over the project.

    Uses the newest backup when *stamp* is None. The backup itself is kept,
    so the same rollback can be repeated. Returns the stamp that was
    restored and the restored paths (POSIX, relative to the project root).

    Raises BackupError when there is no backup or *stamp* is unknown.
    """
    root = Path(project_root)
    stamps = list_backups(root)
    if not stamps:
        raise BackupError(f"No backups found under {root / BACKUP_DIRNAME}")
    if stamp is None:
        stamp = stamps[-1]
    elif stamp not in stamps:
        raise BackupError(f"Unknown backup {stamp!r} (available: {', '.join(stamps)})")

    source = root / BACKUP_DIRNAME / stamp
    restored: List[str] = []
    for path in sorted(source.rglob("*")):
        if not path.is_file():
            continue
        rel = path.relative_to(source)
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, target)
        restored.append(rel.as_posix())
    return stamp, restored
