"""Rule engine: models, registry, built-in rules."""

from ngmodernize.rules.models import Rule
from ngmodernize.rules.registry import RuleRegistry, build_registry

__all__ = ["Rule", "RuleRegistry", "build_registry"]
