"""Data models for discovered and analyzed source files."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from ngmodernize.findings.models import MigrationIssue, TransformationRecord, TransformStatus


class FileType(str, Enum):
    UI_COMPONENT = "ui-component"
    SERVICE = "service"
    MODULE_DESCRIPTOR = "module-descriptor"
    TEMPLATE = "template"
    DEPENDENCY_MANIFEST = "dependency-manifest"
    ROUTING_DESCRIPTOR = "routing-descriptor"
    OTHER = "other"


class FileStage(str, Enum):
    UNCLASSIFIED = "unclassified"
    CLASSIFIED = "classified"
    DETECTED = "detected"
    TRANSFORMED = "transformed"
    TRANSFORM_SKIPPED = "transform-skipped"
    REPORTED = "reported"


@dataclass(frozen=True)
class SourceFile:
    """A (path, content) pair produced by discovery."""

    path: str  # POSIX path relative to the project root
    content: str


@dataclass(frozen=True)
class AnalyzedFile:
    """One unit of work, passed by value from stage to stage.

    Stages never mutate a file; they return a new one via the ``with_*``
    helpers so the stage history is explicit in the data flow.
    """

    path: str
    type: FileType = FileType.OTHER
    content: str = ""
    issues: Tuple[MigrationIssue, ...] = ()
    transformations: Tuple[TransformationRecord, ...] = ()
    stage: FileStage = FileStage.UNCLASSIFIED

    def with_type(self, file_type: FileType) -> "AnalyzedFile":
        return replace(self, type=file_type, stage=FileStage.CLASSIFIED)

    def with_issues(self, issues) -> "AnalyzedFile":
        return replace(self, issues=self.issues + tuple(issues), stage=FileStage.DETECTED)

    def with_transformations(self, records) -> "AnalyzedFile":
        """Append *records* and move ``content`` to the last record's ``after``."""
        records = tuple(records)
        content = records[-1].after if records else self.content
        return replace(
            self,
            content=content,
            transformations=self.transformations + records,
            stage=FileStage.TRANSFORMED,
        )

    def skip_transform(self) -> "AnalyzedFile":
        return replace(self, stage=FileStage.TRANSFORM_SKIPPED)

    def reported(self) -> "AnalyzedFile":
        return replace(self, stage=FileStage.REPORTED)

    @property
    def original_content(self) -> str:
        """Content before the first transformation of this pass."""
        return self.transformations[0].before if self.transformations else self.content

    def with_record_status(self, status: TransformStatus) -> "AnalyzedFile":
        """Stamp *status* on every record; no-op placeholders stay pending when applied."""
        records = tuple(
            r if (r.is_noop and status == TransformStatus.APPLIED) else replace(r, status=status)
            for r in self.transformations
        )
        return replace(self, transformations=records)
