"""ngmodernize CLI: Typer application with migrate, analyze, batch, interactive, rollback and init."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from ngmodernize import __version__
from ngmodernize.config.schema import MigrationMode, ModernizeConfig
from ngmodernize.files.models import AnalyzedFile
from ngmodernize.findings.models import ProjectReport

app = typer.Typer(
    name="ngmodernize",
    help="Migrate legacy Angular projects to modern Angular idioms.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_MODES = " | ".join(m.value for m in MigrationMode)


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _confirm_write(file: AnalyzedFile) -> bool:
    console.print(f"[bold]{file.path}[/bold]")
    for record in file.transformations:
        if not record.is_noop:
            console.print(f"  • {record.description}")
    return typer.confirm(f"Apply changes to {file.path}?", default=True)


def _load(
    path: Path,
    config: Optional[str],
    mode: Optional[str],
    *,
    auto_apply: Optional[bool] = None,
    backup: Optional[bool] = None,
    report: Optional[bool] = None,
    fmt: Optional[str] = None,
    exclude: Optional[str] = None,
    include: Optional[str] = None,
    verbose: bool = False,
) -> ModernizeConfig:
    """Config file + env, then CLI flags on top."""
    from ngmodernize.config.loader import load_config
    from ngmodernize.config.schema import REPORT_FORMATS, validate_options
    from ngmodernize.errors import ConfigError

    try:
        cfg = load_config(path, config)
        opts = cfg.migration
        if mode is not None:
            opts.mode = MigrationMode.parse(mode)
        if auto_apply is not None:
            opts.auto_apply = auto_apply
        if backup is not None:
            opts.backup = backup
        if report is not None:
            opts.generate_report = report
        opts.exclude.extend(_split(exclude))
        opts.include.extend(_split(include))
        opts.verbose = opts.verbose or verbose
        validate_options(opts)
        if fmt is not None:
            if fmt not in REPORT_FORMATS:
                raise ConfigError(f"Invalid format: {fmt} (expected one of: {', '.join(REPORT_FORMATS)})")
            cfg.output.format = fmt  # type: ignore[assignment]
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    return cfg


def _attach_backend(report: ProjectReport, root: Path) -> None:
    from ngmodernize.backends import backend_recommendations, detect_backend

    if report.backend is not None:
        return
    report.backend = detect_backend(root)
    report.recommendations.extend(backend_recommendations(report.backend))


def _run_project(root: Path, cfg: ModernizeConfig) -> ProjectReport:
    """Run the coordinator for one project. Raises ModernizeError on fatal errors."""
    from ngmodernize.coordinator import run
    from ngmodernize.files.writer import FileWriter
    from ngmodernize.output import write_report

    opts = cfg.migration
    writer = None
    if opts.mode == MigrationMode.MIGRATE:
        writer = FileWriter(
            root,
            backup=opts.backup,
            confirm=None if opts.auto_apply else _confirm_write,
        )

    def reporter(report: ProjectReport) -> None:
        _attach_backend(report, root)
        for written in write_report(report, root / cfg.output.directory, cfg.output.report_formats):
            console.print(f"[dim]Report written to {written}[/dim]")

    report = run(root, opts, config=cfg, writer=writer, reporter=reporter)
    _attach_backend(report, root)
    return report


def _emit(report: ProjectReport, cfg: ModernizeConfig) -> None:
    from ngmodernize.output import render, terminal

    if cfg.output.format == "terminal":
        show_diff = (
            cfg.output.show_diff
            or cfg.migration.mode == MigrationMode.DRY_RUN
            or cfg.migration.verbose
        )
        terminal.render(report, show_diff=show_diff, console=console)
    else:
        print(render(report, cfg.output.format))


def _execute(root: Path, cfg: ModernizeConfig) -> None:
    from ngmodernize.errors import ModernizeError
    from ngmodernize.log import setup_logging

    setup_logging(cfg.migration.verbose, console=console)
    try:
        report = _run_project(root, cfg)
    except ModernizeError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    _emit(report, cfg)


# ── migrate ───────────────────────────────────────────────────────────────────


@app.command()
def migrate(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Angular project root"),
    mode: str = typer.Option("migrate", "--mode", "-m", help=f"Mode: {_MODES}"),
    auto_apply: bool = typer.Option(False, "--auto-apply", help="Write changes without asking"),
    backup: Optional[bool] = typer.Option(None, "--backup/--no-backup", help="Back up files before writing"),
    report: Optional[bool] = typer.Option(None, "--report/--no-report", help="Write report files"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output: terminal | json | markdown | html"),
    exclude: Optional[str] = typer.Option(None, "--exclude", help="Comma-separated path substrings to skip"),
    include: Optional[str] = typer.Option(None, "--include", help="Comma-separated path substrings to keep"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .ngmodernize.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Analyze and rewrite a project (or preview with --mode dry-run)."""
    cfg = _load(
        path, config, mode,
        auto_apply=auto_apply or None, backup=backup, report=report, fmt=format,
        exclude=exclude, include=include, verbose=verbose,
    )
    _execute(path, cfg)


# ── analyze ───────────────────────────────────────────────────────────────────


@app.command()
def analyze(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Angular project root"),
    report: Optional[bool] = typer.Option(None, "--report/--no-report", help="Write report files"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output: terminal | json | markdown | html"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .ngmodernize.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Report migration issues without changing any file."""
    cfg = _load(path, config, MigrationMode.ANALYZE.value, report=report, fmt=format, verbose=verbose)
    _execute(path, cfg)


# ── batch ─────────────────────────────────────────────────────────────────────


@app.command()
def batch(
    directory: Path = typer.Option(Path("."), "--directory", "-d", help="Directory holding Angular projects"),
    mode: str = typer.Option("migrate", "--mode", "-m", help=f"Mode: {_MODES}"),
    auto_apply: bool = typer.Option(False, "--auto-apply", help="Write changes without asking"),
    backup: Optional[bool] = typer.Option(None, "--backup/--no-backup", help="Back up files before writing"),
    report: Optional[bool] = typer.Option(None, "--report/--no-report", help="Write report files per project"),
    delay: Optional[float] = typer.Option(None, "--delay", help="Seconds to wait between projects"),
    exclude: Optional[str] = typer.Option(None, "--exclude", help="Comma-separated path substrings to skip"),
    include: Optional[str] = typer.Option(None, "--include", help="Comma-separated path substrings to keep"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .ngmodernize.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Run every Angular project found under a directory, one after another."""
    from rich.table import Table

    from ngmodernize.batch import find_angular_projects, run_batch
    from ngmodernize.log import setup_logging

    base = _load(directory, config, mode, verbose=verbose)
    setup_logging(base.migration.verbose, console=console)

    if not directory.is_dir():
        console.print(f"[bold red]Error:[/bold red] not a directory: {directory}")
        raise typer.Exit(code=1)
    projects = find_angular_projects(directory, base.batch.skip_dirs)
    if not projects:
        console.print(f"[yellow]No Angular projects found under {directory}[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"[bold]Found {len(projects)} Angular project(s)[/bold]")

    def run_one(project: Path) -> ProjectReport:
        cfg = _load(
            project, config, mode,
            auto_apply=auto_apply or None, backup=backup, report=report,
            exclude=exclude, include=include, verbose=verbose,
        )
        return _run_project(project, cfg)

    outcomes = run_batch(
        projects,
        run_one,
        delay_seconds=base.batch.delay_seconds if delay is None else delay,
    )

    table = Table(title="Batch Results", title_style="bold", border_style="dim")
    table.add_column("Project", style="magenta")
    table.add_column("Files", justify="right")
    table.add_column("Issues", justify="right")
    table.add_column("Modified", justify="right")
    table.add_column("Status")
    for outcome in outcomes:
        if outcome.report is not None:
            s = outcome.report.summary
            table.add_row(
                str(outcome.project), str(s.total_files), str(s.total_issues),
                str(s.modified_files), "[green]ok[/green]",
            )
        else:
            table.add_row(str(outcome.project), "-", "-", "-", f"[red]{outcome.error}[/red]")
    console.print(table)

    if not all(o.ok for o in outcomes):
        raise typer.Exit(code=1)


# ── interactive ───────────────────────────────────────────────────────────────


@app.command()
def interactive() -> None:
    """Ask for the project, mode and options, then run."""
    path = Path(typer.prompt("Angular project path", default="."))
    mode = typer.prompt(f"Mode ({_MODES})", default=MigrationMode.DRY_RUN.value)
    auto_apply = False
    if mode.strip().lower() == MigrationMode.MIGRATE.value:
        auto_apply = typer.confirm("Apply every change without asking per file?", default=False)
    report = typer.confirm("Write report files?", default=True)
    exclude = typer.prompt("Exclude patterns (comma-separated)", default="", show_default=False)

    cfg = _load(
        path, None, mode,
        auto_apply=auto_apply or None, report=report, exclude=exclude,
    )
    _execute(path, cfg)


# ── rollback ──────────────────────────────────────────────────────────────────


@app.command()
def rollback(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Angular project root"),
    backup: Optional[str] = typer.Option(None, "--backup", "-b", help="Backup timestamp (default: newest)"),
    list_only: bool = typer.Option(False, "--list", help="List available backups and exit"),
) -> None:
    """Restore project files from a backup written by migrate."""
    from ngmodernize.errors import BackupError
    from ngmodernize.files.writer import list_backups, restore_backup

    if list_only:
        stamps = list_backups(path)
        if not stamps:
            console.print(f"[yellow]No backups found in {path}[/yellow]")
            raise typer.Exit(code=1)
        for stamp in stamps:
            print(stamp)
        return

    try:
        stamp, restored = restore_backup(path, backup)
    except BackupError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(code=1) from exc
    for rel in restored:
        console.print(f"  [dim]{rel}[/dim]")
    console.print(f"[green]✓[/green] Restored {len(restored)} file(s) from backup {stamp}")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Angular project root"),
) -> None:
    """Generate a starter .ngmodernize.toml in the project root."""
    from ngmodernize.config.defaults import DEFAULT_TOML
    from ngmodernize.config.loader import CONFIG_FILENAME

    config_path = path / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"ngmodernize {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """ngmodernize: Angular 5 to Angular 20 migration assistant."""
