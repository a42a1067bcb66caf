"""Fold per-file results into project-level counters and recommendations."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from ngmodernize.files.models import FileType
from ngmodernize.findings.models import (
    SEVERITY_ORDER,
    FileDetail,
    Summary,
    TransformStatus,
)

_CONTROL_FLOW_RULES = frozenset({"LEGACY_NG_IF", "LEGACY_NG_FOR", "LEGACY_NG_SWITCH"})
_FORM_RULES = frozenset({"UNTYPED_FORM_GROUP", "UNTYPED_FORM_CONTROL"})
_HTTP_RULES = frozenset({"LEGACY_HTTP_MODULE", "HTTP_CLIENT_MODULE", "DEPRECATED_HTTP_IMPORT"})


def summarize(details: Iterable[FileDetail]) -> Summary:
    """Single accumulation step over every file's final record."""
    summary = Summary()
    statuses: Counter = Counter()
    severities: Counter = Counter()

    for detail in details:
        summary.total_files += 1
        if detail.file.transformations:
            summary.modified_files += 1
        summary.total_issues += len(detail.file.issues)
        severities.update(issue.severity.value for issue in detail.file.issues)
        statuses.update(record.status for record in detail.file.transformations)

    summary.applied_transformations = statuses[TransformStatus.APPLIED]
    summary.failed_transformations = statuses[TransformStatus.FAILED]
    summary.pending_transformations = statuses[TransformStatus.PENDING]
    summary.skipped_transformations = statuses[TransformStatus.SKIPPED]
    summary.issues_by_severity = {
        sev.value: severities[sev.value] for sev in sorted(SEVERITY_ORDER, key=SEVERITY_ORDER.get)
    }
    return summary


def _files_with(details: List[FileDetail], rule_ids: frozenset) -> int:
    return sum(1 for d in details if any(i.rule_id in rule_ids for i in d.file.issues))


def recommend(details: Iterable[FileDetail]) -> List[str]:
    """Project-wide advice derived from patterns across files."""
    details = list(details)
    out: List[str] = []

    modules = sum(1 for d in details if d.file.type == FileType.MODULE_DESCRIPTOR)
    if modules:
        out.append(
            f"Legacy module wrapper detected across {modules} file(s): move to "
            "standalone components and bootstrapApplication()"
        )

    templates = _files_with(details, _CONTROL_FLOW_RULES)
    if templates:
        out.append(
            f"{templates} template(s) use *ngIf/*ngFor/ngSwitch: migrate all templates "
            "to the built-in control flow (@if, @for, @switch)"
        )

    forms = _files_with(details, _FORM_RULES)
    if forms:
        out.append(f"Add strict types to reactive forms in {forms} file(s)")

    injection = _files_with(details, frozenset({"CONSTRUCTOR_INJECTION"}))
    if injection:
        out.append(f"Replace constructor injection with inject() in {injection} file(s)")

    if _files_with(details, _HTTP_RULES):
        out.append("Switch HTTP setup to provideHttpClient() from @angular/common/http")

    if _files_with(details, frozenset({"ROUTER_MODULE_FOR_ROOT"})):
        out.append("Register routes with provideRouter() instead of RouterModule.forRoot()")

    if _files_with(details, frozenset({"CORE_VERSION_MISMATCH"})):
        out.append(
            "Upgrade Angular one major version at a time and run the official "
            "update schematics between steps"
        )

    if _files_with(details, frozenset({"OBSOLETE_PACKAGE"})):
        out.append("Remove obsolete packages from package.json before upgrading")

    return out
