"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Optional

from ngmodernize.errors import ConfigError


class MigrationMode(str, Enum):
    ANALYZE = "analyze"
    MIGRATE = "migrate"
    DRY_RUN = "dry-run"

    @classmethod
    def parse(cls, value: "str | MigrationMode") -> "MigrationMode":
        """Accept ``dry-run`` and ``dry_run`` spellings; raise ConfigError otherwise."""
        if isinstance(value, cls):
            return value
        normalised = str(value).strip().lower().replace("_", "-")
        for mode in cls:
            if mode.value == normalised:
                return mode
        valid = ", ".join(m.value for m in cls)
        raise ConfigError(f"Invalid mode {value!r} (expected one of: {valid})")


ReportFormat = Literal["terminal", "json", "markdown", "html"]
REPORT_FORMATS = ("terminal", "json", "markdown", "html")


@dataclass
class MigrationOptions:
    mode: MigrationMode = MigrationMode.ANALYZE
    exclude: List[str] = field(default_factory=list)  # substring patterns
    include: List[str] = field(default_factory=list)  # empty = everything
    generate_report: bool = False
    backup: bool = True
    auto_apply: bool = False  # migrate mode: write without asking
    verbose: bool = False


def validate_options(options: MigrationOptions) -> MigrationOptions:
    """Normalise the mode and reject contradictory include/exclude lists."""
    options.mode = MigrationMode.parse(options.mode)
    conflicts = sorted(set(options.include) & set(options.exclude))
    if conflicts:
        raise ConfigError(
            f"Pattern(s) both included and excluded: {', '.join(conflicts)}"
        )
    return options


DEFAULT_TARGET_VERSIONS: Dict[str, str] = {
    "@angular/core": "^20.0.0",
    "@angular/common": "^20.0.0",
    "@angular/compiler": "^20.0.0",
    "@angular/platform-browser": "^20.0.0",
    "@angular/platform-browser-dynamic": "^20.0.0",
    "@angular/router": "^20.0.0",
    "@angular/forms": "^20.0.0",
    "@angular/animations": "^20.0.0",
    "@angular/cli": "^20.0.0",
    "@angular/compiler-cli": "^20.0.0",
    "@angular-devkit/build-angular": "^20.0.0",
    "typescript": "^5.8.0",
    "rxjs": "^7.8.0",
    "zone.js": "^0.15.0",
}

DEFAULT_OBSOLETE_PACKAGES: List[str] = ["@angular/http", "rxjs-compat"]


@dataclass
class ManifestConfig:
    core_package: str = "@angular/core"
    expected_major: str = "20"
    target_versions: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_TARGET_VERSIONS)
    )
    obsolete_packages: List[str] = field(
        default_factory=lambda: list(DEFAULT_OBSOLETE_PACKAGES)
    )

    @property
    def target_version(self) -> str:
        return self.target_versions.get(self.core_package, f"^{self.expected_major}.0.0")


@dataclass
class TransformConfig:
    form_group_type: str = "Record<string, AbstractControl>"
    form_control_type: str = "string | null"
    inject_readonly: bool = False  # emit `private readonly x = inject(X)`


@dataclass
class RulesConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    format: ReportFormat = "terminal"
    directory: str = "migration-reports"
    report_formats: List[str] = field(default_factory=lambda: ["html", "json", "markdown"])
    show_diff: bool = False


@dataclass
class BatchConfig:
    delay_seconds: float = 0.0
    skip_dirs: List[str] = field(
        default_factory=lambda: ["node_modules", "dist", "build", ".git"]
    )


@dataclass
class ModernizeConfig:
    version: str = "1.0"
    migration: MigrationOptions = field(default_factory=MigrationOptions)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    transform: TransformConfig = field(default_factory=TransformConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    source: Optional[str] = None  # path the config was loaded from
