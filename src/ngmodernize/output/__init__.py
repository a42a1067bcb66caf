"""Report renderers: terminal, JSON, Markdown, HTML."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from ngmodernize.findings.models import ProjectReport
from ngmodernize.output import html, json_report, markdown

REPORT_EXTENSIONS = {"json": "json", "markdown": "md", "html": "html"}

_RENDERERS = {
    "json": json_report.render,
    "markdown": markdown.render,
    "html": html.render,
}


def render(report: ProjectReport, fmt: str) -> str:
    """Render *report* as a string in a file format (json, markdown, html)."""
    try:
        renderer = _RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown report format: {fmt}") from None
    return renderer(report)


def write_report(
    report: ProjectReport, directory: Path, formats: Iterable[str]
) -> List[Path]:
    """Write ``migration-report-<timestamp>.<ext>`` files; return their paths."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    written: List[Path] = []
    for fmt in formats:
        path = directory / f"migration-report-{stamp}.{REPORT_EXTENSIONS.get(fmt, fmt)}"
        path.write_text(render(report, fmt), encoding="utf-8")
        written.append(path)
    return written


__all__ = ["REPORT_EXTENSIONS", "render", "write_report"]
