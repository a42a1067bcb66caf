"""Migration coordinator: discover, classify, detect, transform, aggregate.

Files are processed one after another; each one runs to completion before
the next starts. Per-file failures are caught at the file boundary and
recorded on the report. Configuration and discovery errors propagate.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ngmodernize.config.schema import (
    MigrationMode,
    MigrationOptions,
    ModernizeConfig,
    validate_options,
)
from ngmodernize.errors import ManifestError
from ngmodernize.files.classifier import classify
from ngmodernize.files.discovery import discover
from ngmodernize.files.models import AnalyzedFile, FileType, SourceFile
from ngmodernize.findings.aggregator import recommend, summarize
from ngmodernize.findings.models import FileDetail, ProjectReport, TransformStatus
from ngmodernize.log import ComponentLogger, get_logger
from ngmodernize.rules.registry import RuleRegistry, build_registry
from ngmodernize.scanner.detector import detect
from ngmodernize.scanner.manifest import declared_dependencies, parse_manifest
from ngmodernize.transformer.engine import run_pipeline

Writer = Callable[[AnalyzedFile], bool]
Reporter = Callable[[ProjectReport], None]


def is_selected(path: str, options: MigrationOptions) -> bool:
    """Include/exclude substring filter for the transform step."""
    if any(pattern in path for pattern in options.exclude):
        return False
    if options.include and not any(pattern in path for pattern in options.include):
        return False
    return True


def _write(
    file: AnalyzedFile, writer: Writer, log: ComponentLogger
) -> Tuple[AnalyzedFile, Optional[str]]:
    try:
        written = writer(file)
    except Exception as exc:
        log.error("%s: write failed: %s", file.path, exc, payload={"path": file.path})
        return file.with_record_status(TransformStatus.FAILED), f"write failed: {exc}"
    status = TransformStatus.APPLIED if written else TransformStatus.SKIPPED
    log.debug("%s: %s", file.path, status.value, payload={"path": file.path})
    return file.with_record_status(status), None


def process_file(
    source: SourceFile,
    options: MigrationOptions,
    config: ModernizeConfig,
    registry: RuleRegistry,
    writer: Optional[Writer],
    log: ComponentLogger,
) -> FileDetail:
    """Run one file through every stage and return its report entry."""
    start = time.perf_counter()
    errors: List[str] = []

    file = AnalyzedFile(path=source.path, content=source.content)
    file = file.with_type(classify(file.path, file.content))

    try:
        issues = detect(file, registry, config, log=log.child("detector"))
    except Exception as exc:
        log.warning(
            "%s: detection failed: %s", file.path, exc, payload={"path": file.path}
        )
        issues = []
        errors.append(f"detection failed: {exc}")
    file = file.with_issues(issues)

    if options.mode != MigrationMode.ANALYZE and is_selected(file.path, options):
        result = run_pipeline(file, config, log=log.child("transformer"))
        if result.error:
            errors.append(result.error)
        file = file.with_transformations(result.records)
        if (
            options.mode == MigrationMode.MIGRATE
            and writer is not None
            and file.content != file.original_content
        ):
            file, write_error = _write(file, writer, log)
            if write_error:
                errors.append(write_error)
    else:
        file = file.skip_transform()

    elapsed = (time.perf_counter() - start) * 1000
    return FileDetail(
        file=file.reported(),
        processing_ms=round(elapsed, 2),
        error="; ".join(errors) or None,
    )


def _current_version(details: List[FileDetail], config: ModernizeConfig) -> Optional[str]:
    for detail in details:
        if detail.file.type != FileType.DEPENDENCY_MANIFEST or "/" in detail.path:
            continue
        try:
            deps = declared_dependencies(parse_manifest(detail.file.original_content))
        except ManifestError:
            return None
        return deps.get(config.manifest.core_package)
    return None


def run(
    project_path: Path,
    options: MigrationOptions,
    *,
    config: Optional[ModernizeConfig] = None,
    registry: Optional[RuleRegistry] = None,
    writer: Optional[Writer] = None,
    reporter: Optional[Reporter] = None,
    log: Optional[ComponentLogger] = None,
) -> ProjectReport:
    """Process every discovered file of *project_path* and build the report.

    Raises ConfigError for invalid options and DiscoveryError when the
    project root is missing or holds no matching file.
    """
    start = time.perf_counter()
    log = log or get_logger("coordinator")
    options = validate_options(options)
    config = config or ModernizeConfig(migration=options)
    root = Path(project_path)

    sources = discover(root, log=log.child("discovery"))
    registry = registry or build_registry(config, root)
    log.info(
        "Processing %d file(s) in %s mode",
        len(sources),
        options.mode.value,
        payload={"project": str(root), "files": len(sources), "mode": options.mode.value},
    )

    details = [
        process_file(source, options, config, registry, writer, log) for source in sources
    ]

    report = ProjectReport(project_path=str(root), options=options)
    report.file_details = details
    report.summary = summarize(details)
    report.recommendations = recommend(details)
    report.errors = [f"{d.path}: {d.error}" for d in details if d.error]
    report.current_version = _current_version(details, config)
    report.target_version = config.manifest.target_version
    report.execution_ms = round((time.perf_counter() - start) * 1000, 2)

    log.info(
        "%d issue(s), %d modified file(s)",
        report.summary.total_issues,
        report.summary.modified_files,
        payload={
            "issues": report.summary.total_issues,
            "modified": report.summary.modified_files,
            "errors": len(report.errors),
        },
    )

    if options.generate_report and reporter is not None:
        reporter(report)
    return report
