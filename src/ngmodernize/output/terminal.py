"""Rich terminal reporter: summary panel, issue table, optional diffs."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from ngmodernize.findings.models import ProjectReport, Severity

_SEVERITY_STYLE = {
    Severity.ERROR: "bold white on red",
    Severity.WARNING: "bold black on yellow",
    Severity.INFO: "bold black on bright_cyan",
    Severity.SUGGESTION: "bold white on green",
}


def _severity_pill(severity: Severity) -> Text:
    return Text(f" {severity.value.upper()} ", style=_SEVERITY_STYLE.get(severity, ""))


def render(
    report: ProjectReport,
    *,
    show_diff: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print a migration report to the terminal using Rich."""
    console = console or Console(stderr=True)

    issues = [(d.path, i) for d in report.file_details for i in d.issues]
    console.print()
    if not issues:
        console.print("[bold green]No migration issues found.[/bold green]")
    else:
        table = Table(
            title="Migration Issues",
            show_lines=False,
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Severity", justify="center", width=12)
        table.add_column("Rule", style="cyan", min_width=20)
        table.add_column("File", style="magenta")
        table.add_column("Line", justify="right", style="green")
        table.add_column("Message")
        for path, issue in issues:
            table.add_row(
                _severity_pill(issue.severity),
                issue.rule_id,
                path,
                str(issue.line_number) if issue.line_number else "-",
                issue.message,
            )
        console.print(table)

    if report.modified_details:
        changes = Table(title="Transformations", title_style="bold", border_style="dim")
        changes.add_column("File", style="magenta")
        changes.add_column("Kind", style="cyan")
        changes.add_column("Status")
        changes.add_column("Description")
        for detail in report.modified_details:
            for record in detail.transformations:
                changes.add_row(
                    detail.path, record.kind.value, record.status.value, record.description
                )
        console.print(changes)

    if show_diff:
        for detail in report.modified_details:
            for record in detail.transformations:
                diff = record.unified_diff(detail.path)
                if diff:
                    console.print(Syntax(diff, "diff", theme="ansi_dark"))

    _print_summary(console, report)


def _print_summary(console: Console, report: ProjectReport) -> None:
    s = report.summary
    console.print()
    console.print(f"[dim]Mode:[/dim]          {report.options.mode.value}")
    console.print(
        f"[dim]Angular:[/dim]       {report.current_version or 'unknown'} -> "
        f"{report.target_version or 'unknown'}"
    )
    if report.backend:
        console.print(f"[dim]Backend:[/dim]       {report.backend}")
    console.print(f"[dim]Files:[/dim]         {s.total_files}")
    console.print(f"[dim]Issues:[/dim]        {s.total_issues}")
    console.print(f"[dim]Modified:[/dim]      {s.modified_files}")
    console.print(
        f"[dim]Changes:[/dim]       {s.applied_transformations} applied, "
        f"{s.pending_transformations} pending, {s.skipped_transformations} skipped, "
        f"{s.failed_transformations} failed"
    )
    console.print(f"[dim]Duration:[/dim]      {report.execution_ms:.0f}ms")

    if report.recommendations:
        console.print()
        console.print("[bold]Recommendations[/bold]")
        for rec in report.recommendations:
            console.print(f"  • {rec}")
    for err in report.errors:
        console.print(f"[yellow]! {err}[/yellow]")
