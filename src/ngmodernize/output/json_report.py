"""JSON reporter: machine-readable migration report."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from ngmodernize import __version__
from ngmodernize.findings.models import FileDetail, ProjectReport


def _detail_dict(detail: FileDetail) -> Dict[str, Any]:
    return {
        "path": detail.path,
        "type": detail.file.type.value,
        "processing_ms": detail.processing_ms,
        **({"error": detail.error} if detail.error else {}),
        "issues": [
            {
                "rule": i.rule_id,
                "kind": i.kind.value,
                "severity": i.severity.value,
                "message": i.message,
                "suggestion": i.suggestion,
                "line": i.line_number,
                "match": i.matched_text,
            }
            for i in detail.issues
        ],
        "transformations": [
            {
                "kind": t.kind.value,
                "description": t.description,
                "status": t.status.value,
                "diff": t.unified_diff(detail.path),
            }
            for t in detail.transformations
        ],
    }


def to_dict(report: ProjectReport) -> Dict[str, Any]:
    """Convert a ProjectReport to a JSON-serialisable dict."""
    s = report.summary
    files: List[Dict[str, Any]] = [_detail_dict(d) for d in report.file_details]
    return {
        "version": "1.0",
        "tool": f"ngmodernize {__version__}",
        "project": report.project_path,
        "mode": report.options.mode.value,
        "current_version": report.current_version,
        "target_version": report.target_version,
        **({"backend": report.backend} if report.backend else {}),
        "summary": {
            "total_files": s.total_files,
            "modified_files": s.modified_files,
            "total_issues": s.total_issues,
            "applied_transformations": s.applied_transformations,
            "failed_transformations": s.failed_transformations,
            "pending_transformations": s.pending_transformations,
            "skipped_transformations": s.skipped_transformations,
            "issues_by_severity": s.issues_by_severity,
        },
        "recommendations": report.recommendations,
        "errors": report.errors,
        "files": files,
        "execution_ms": report.execution_ms,
    }


def render(report: ProjectReport) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
