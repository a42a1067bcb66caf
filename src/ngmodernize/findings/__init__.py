"""Issue, transformation and report models."""

from ngmodernize.findings.models import (
    FileDetail,
    IssueKind,
    MigrationIssue,
    ProjectReport,
    Severity,
    Summary,
    TransformationRecord,
    TransformKind,
    TransformStatus,
)

__all__ = [
    "FileDetail",
    "IssueKind",
    "MigrationIssue",
    "ProjectReport",
    "Severity",
    "Summary",
    "TransformKind",
    "TransformStatus",
    "TransformationRecord",
]
