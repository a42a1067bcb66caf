"""Configuration loading, schema, and defaults."""

from ngmodernize.config.loader import load_config
from ngmodernize.config.schema import (
    MigrationMode,
    MigrationOptions,
    ModernizeConfig,
    validate_options,
)
from ngmodernize.errors import ConfigError

__all__ = [
    "ConfigError",
    "MigrationMode",
    "MigrationOptions",
    "ModernizeConfig",
    "load_config",
    "validate_options",
]
