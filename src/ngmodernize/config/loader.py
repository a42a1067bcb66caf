"""Load and merge configuration from .ngmodernize.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ngmodernize.config.schema import (
    REPORT_FORMATS,
    BatchConfig,
    ManifestConfig,
    MigrationOptions,
    ModernizeConfig,
    OutputConfig,
    RulesConfig,
    TransformConfig,
    validate_options,
)
from ngmodernize.errors import ConfigError

CONFIG_FILENAME = ".ngmodernize.toml"


def find_config_file(project_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = project_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _merge_env_overrides(cfg: ModernizeConfig) -> None:
    """Apply NGMODERNIZE_* environment variable overrides."""
    if val := os.environ.get("NGMODERNIZE_MODE"):
        cfg.migration.mode = val  # type: ignore[assignment]  # validated below
    if val := os.environ.get("NGMODERNIZE_EXCLUDE"):
        cfg.migration.exclude.extend(_split_list(val))
    if val := os.environ.get("NGMODERNIZE_INCLUDE"):
        cfg.migration.include.extend(_split_list(val))
    if val := os.environ.get("NGMODERNIZE_DISABLE_RULES"):
        cfg.rules.disable.extend(_split_list(val))
    if val := os.environ.get("NGMODERNIZE_REPORT_FORMAT"):
        if val in REPORT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def load_config(
    project_root: Path,
    config_override: Optional[str] = None,
) -> ModernizeConfig:
    """Load, validate, and return a ModernizeConfig."""
    config_path = find_config_file(project_root, config_override)

    if config_path is None:
        cfg = ModernizeConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = ModernizeConfig(
                version=str(raw.get("version", "1.0")),
                migration=_build_section(raw, MigrationOptions, "migration"),
                manifest=_build_section(raw, ManifestConfig, "manifest"),
                transform=_build_section(raw, TransformConfig, "transform"),
                rules=_build_section(raw, RulesConfig, "rules"),
                output=_build_section(raw, OutputConfig, "output"),
                batch=_build_section(raw, BatchConfig, "batch"),
                source=str(config_path),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid value in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    validate_options(cfg.migration)
    if cfg.output.format not in REPORT_FORMATS:
        raise ConfigError(f"Invalid output format: {cfg.output.format}")
    return cfg
