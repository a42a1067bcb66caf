"""Issue, transformation, and report data models."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from ngmodernize.config.schema import MigrationOptions
    from ngmodernize.files.models import AnalyzedFile


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUGGESTION = "suggestion"

    @property
    def rank(self) -> int:
        """0 for the most severe level."""
        return SEVERITY_ORDER[self]


SEVERITY_ORDER: Dict[Severity, int] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
    Severity.SUGGESTION: 3,
}


class IssueKind(str, Enum):
    DEPRECATED_API = "deprecated-api"
    MISSING_MODERNIZATION_MARKER = "missing-modernization-marker"
    UNTYPED_CONSTRUCT = "untyped-construct"
    VERSION_INCOMPATIBILITY = "version-incompatibility"
    BACKEND_INTEGRATION_NOTE = "backend-integration-note"


class TransformKind(str, Enum):
    CONVERT_TO_STANDALONE = "convert-to-standalone-equivalent"
    REPLACE_CONSTRUCTOR_INJECTION = "replace-constructor-injection"
    MIGRATE_CONTROL_FLOW = "migrate-control-flow-directive"
    ADD_FORM_GENERICS = "add-generic-type-to-form-construct"
    UPDATE_IMPORT_PATH = "update-import-path"
    UPDATE_DEPENDENCY_VERSION = "update-dependency-version"
    REMOVE_LEGACY_MODULE_WRAPPER = "remove-legacy-module-wrapper"


class TransformStatus(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class MigrationIssue:
    """A detected idiom that needs migration attention."""

    rule_id: str
    kind: IssueKind
    severity: Severity
    message: str
    suggestion: str = ""
    line_number: Optional[int] = None  # 1-based, None for file-level issues
    matched_text: Optional[str] = None


@dataclass(frozen=True)
class TransformationRecord:
    """One proposed or applied rewrite, with full-content snapshots."""

    kind: TransformKind
    description: str
    before: str
    after: str
    status: TransformStatus = TransformStatus.PENDING

    @property
    def is_noop(self) -> bool:
        return self.before == self.after

    def unified_diff(self, path: str = "file") -> str:
        return "".join(
            difflib.unified_diff(
                self.before.splitlines(keepends=True),
                self.after.splitlines(keepends=True),
                fromfile=f"a/{path}",
                tofile=f"b/{path}",
            )
        )


@dataclass
class FileDetail:
    """Per-file entry of a ProjectReport."""

    file: "AnalyzedFile"
    processing_ms: float = 0.0
    error: Optional[str] = None

    @property
    def path(self) -> str:
        return self.file.path

    @property
    def issues(self) -> List[MigrationIssue]:
        return list(self.file.issues)

    @property
    def transformations(self) -> List[TransformationRecord]:
        return list(self.file.transformations)


@dataclass
class Summary:
    total_files: int = 0
    modified_files: int = 0
    total_issues: int = 0
    applied_transformations: int = 0
    failed_transformations: int = 0
    pending_transformations: int = 0
    skipped_transformations: int = 0
    issues_by_severity: Dict[str, int] = field(default_factory=dict)


@dataclass
class ProjectReport:
    """Complete result of one coordinator run."""

    project_path: str
    options: "MigrationOptions"
    summary: Summary = field(default_factory=Summary)
    file_details: List[FileDetail] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    current_version: Optional[str] = None
    target_version: Optional[str] = None
    backend: Optional[str] = None
    execution_ms: float = 0.0

    @property
    def all_issues(self) -> List[MigrationIssue]:
        return [issue for d in self.file_details for issue in d.file.issues]

    @property
    def modified_details(self) -> List[FileDetail]:
        return [d for d in self.file_details if d.file.transformations]
