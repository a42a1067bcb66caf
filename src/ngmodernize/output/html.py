"""Self-contained HTML reporter."""

from __future__ import annotations

from html import escape
from typing import List

from ngmodernize.findings.models import ProjectReport

_STYLE = """
body { font-family: system-ui, sans-serif; margin: 2rem; color: #222; }
table { border-collapse: collapse; margin: 1rem 0; }
th, td { border: 1px solid #ccc; padding: .3rem .6rem; text-align: left; }
.error { color: #b00020; } .warning { color: #b36b00; }
.info { color: #00599c; } .suggestion { color: #2e7d32; }
pre { background: #f6f8fa; padding: .8rem; overflow-x: auto; }
"""


def render(report: ProjectReport) -> str:
    s = report.summary
    out: List[str] = [
        "<!DOCTYPE html>",
        '<html lang="en"><head><meta charset="utf-8">',
        "<title>Angular migration report</title>",
        f"<style>{_STYLE}</style></head><body>",
        "<h1>Angular migration report</h1>",
        f"<p>Project <code>{escape(report.project_path)}</code>, "
        f"mode <strong>{escape(report.options.mode.value)}</strong>, "
        f"Angular {escape(report.current_version or 'unknown')} &rarr; "
        f"{escape(report.target_version or 'unknown')}</p>",
    ]
    if report.backend:
        out.append(f"<p>Backend: {escape(report.backend)}</p>")

    out += [
        "<h2>Summary</h2><table>",
        "<tr><th>Files</th><th>Modified</th><th>Issues</th><th>Applied</th>"
        "<th>Pending</th><th>Skipped</th><th>Failed</th></tr>",
        f"<tr><td>{s.total_files}</td><td>{s.modified_files}</td><td>{s.total_issues}</td>"
        f"<td>{s.applied_transformations}</td><td>{s.pending_transformations}</td>"
        f"<td>{s.skipped_transformations}</td><td>{s.failed_transformations}</td></tr>",
        "</table>",
    ]

    if report.recommendations:
        out.append("<h2>Recommendations</h2><ul>")
        out += [f"<li>{escape(r)}</li>" for r in report.recommendations]
        out.append("</ul>")

    issues = [(d.path, i) for d in report.file_details for i in d.issues]
    if issues:
        out.append("<h2>Issues</h2><table>")
        out.append("<tr><th>Severity</th><th>Rule</th><th>File</th><th>Line</th><th>Message</th></tr>")
        for path, issue in issues:
            sev = issue.severity.value
            out.append(
                f'<tr><td class="{sev}">{sev}</td><td>{escape(issue.rule_id)}</td>'
                f"<td>{escape(path)}</td><td>{issue.line_number or '-'}</td>"
                f"<td>{escape(issue.message)}</td></tr>"
            )
        out.append("</table>")

    if report.modified_details:
        out.append("<h2>Transformations</h2>")
        for detail in report.modified_details:
            out.append(f"<h3>{escape(detail.path)}</h3>")
            for record in detail.transformations:
                out.append(
                    f"<p><strong>{escape(record.kind.value)}</strong> "
                    f"({escape(record.status.value)}): {escape(record.description)}</p>"
                )
                diff = record.unified_diff(detail.path)
                if diff:
                    out.append(f"<pre>{escape(diff)}</pre>")

    if report.errors:
        out.append("<h2>Errors</h2><ul>")
        out += [f"<li>{escape(e)}</li>" for e in report.errors]
        out.append("</ul>")

    out.append("</body></html>")
    return "\n".join(out)
