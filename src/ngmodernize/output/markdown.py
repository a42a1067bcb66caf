"""Markdown reporter."""

from __future__ import annotations

from typing import List

from ngmodernize.findings.models import ProjectReport


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def render(report: ProjectReport) -> str:
    s = report.summary
    lines: List[str] = [
        "# Angular migration report",
        "",
        f"- **Project:** `{report.project_path}`",
        f"- **Mode:** {report.options.mode.value}",
        f"- **Angular:** {report.current_version or 'unknown'} -> {report.target_version or 'unknown'}",
    ]
    if report.backend:
        lines.append(f"- **Backend:** {report.backend}")
    lines += [
        "",
        "## Summary",
        "",
        "| Files | Modified | Issues | Applied | Pending | Skipped | Failed |",
        "|---:|---:|---:|---:|---:|---:|---:|",
        f"| {s.total_files} | {s.modified_files} | {s.total_issues} "
        f"| {s.applied_transformations} | {s.pending_transformations} "
        f"| {s.skipped_transformations} | {s.failed_transformations} |",
    ]

    if report.recommendations:
        lines += ["", "## Recommendations", ""]
        lines += [f"- {r}" for r in report.recommendations]

    issues = [(d.path, i) for d in report.file_details for i in d.issues]
    if issues:
        lines += [
            "",
            "## Issues",
            "",
            "| Severity | Rule | File | Line | Message |",
            "|---|---|---|---:|---|",
        ]
        for path, issue in issues:
            line = str(issue.line_number) if issue.line_number else "-"
            lines.append(
                f"| {issue.severity.value} | {issue.rule_id} | `{path}` | {line} "
                f"| {_cell(issue.message)} |"
            )

    modified = report.modified_details
    if modified:
        lines += ["", "## Transformations", ""]
        for detail in modified:
            lines.append(f"### `{detail.path}`")
            lines.append("")
            for record in detail.transformations:
                lines.append(f"- **{record.kind.value}** ({record.status.value}): {record.description}")
                diff = record.unified_diff(detail.path)
                if diff:
                    lines += ["", "```diff", diff.rstrip("\n"), "```", ""]

    if report.errors:
        lines += ["", "## Errors", ""]
        lines += [f"- {e}" for e in report.errors]

    lines += ["", f"_Generated in {report.execution_ms:.0f} ms._", ""]
    return "\n".join(lines)
