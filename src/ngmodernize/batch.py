"""Batch mode: find Angular projects under a directory and run them in turn."""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from ngmodernize.findings.models import ProjectReport
from ngmodernize.log import ComponentLogger, get_logger

WORKSPACE_FILES = ("angular.json", ".angular-cli.json")


def is_angular_project(directory: Path, core_package: str = "@angular/core") -> bool:
    """A ``package.json`` depending on *core_package* next to a workspace file."""
    manifest = directory / "package.json"
    if not manifest.is_file():
        return False
    if not any((directory / name).is_file() for name in WORKSPACE_FILES):
        return False
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return False
    if not isinstance(data, dict):
        return False
    for section in ("dependencies", "devDependencies"):
        deps = data.get(section)
        if isinstance(deps, dict) and core_package in deps:
            return True
    return False


def find_angular_projects(
    directory: Path,
    skip_dirs: Iterable[str] = ("node_modules", "dist", "build", ".git"),
) -> List[Path]:
    """Every Angular project root under *directory*, sorted."""
    skip = set(skip_dirs)
    found: List[Path] = []
    for current, dirnames, _ in os.walk(directory):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        path = Path(current)
        if is_angular_project(path):
            found.append(path)
    return sorted(found)


@dataclass
class BatchOutcome:
    project: Path
    report: Optional[ProjectReport] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_batch(
    projects: List[Path],
    run_one: Callable[[Path], ProjectReport],
    *,
    delay_seconds: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
    log: Optional[ComponentLogger] = None,
) -> List[BatchOutcome]:
    """Run *run_one* for each project, sequentially, pausing between them.

    A failing project is recorded and the batch moves on.
    """
    log = log or get_logger("batch")
    outcomes: List[BatchOutcome] = []
    for index, project in enumerate(projects):
        log.info(
            "[%d/%d] %s", index + 1, len(projects), project, payload={"project": str(project)}
        )
        try:
            outcomes.append(BatchOutcome(project=project, report=run_one(project)))
        except Exception as exc:
            log.error("%s: %s", project, exc, payload={"project": str(project)})
            outcomes.append(BatchOutcome(project=project, error=str(exc)))
        if delay_seconds > 0 and index < len(projects) - 1:
            sleep(delay_seconds)
    return outcomes
