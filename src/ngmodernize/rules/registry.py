"""Rule registry: loads built-in and custom rules, applies config filters."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ngmodernize.config.schema import ModernizeConfig
from ngmodernize.errors import ConfigError
from ngmodernize.files.models import FileType
from ngmodernize.findings.models import IssueKind, Severity
from ngmodernize.rules.models import Rule

CUSTOM_RULES_DIRNAME = ".ngmodernize-rules"


class RuleRegistry:
    """Central store for all detection rules."""

    def __init__(self) -> None:
        self._rules: Dict[str, Rule] = {}

    # ---- registration ----

    def register(self, rule: Rule) -> None:
        self._rules[rule.id] = rule

    def register_many(self, rules: list[Rule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._rules.get(rule_id)

    def enabled_rules(self) -> List[Rule]:
        return [r for r in self._rules.values() if r.enabled]

    def rules_for(self, file_type: FileType) -> List[Rule]:
        """Enabled rules dispatched to *file_type*, in registration order."""
        return [r for r in self.enabled_rules() if r.applies_to(file_type)]

    # ---- config filtering ----

    def apply_config(self, config: ModernizeConfig) -> None:
        """Enable / disable rules based on config.rules."""
        enable_list = config.rules.enable
        disable_list = config.rules.disable

        for rule in self._rules.values():
            # If an explicit enable-list exists, only those are enabled
            if enable_list:
                rule.enabled = rule.id in enable_list
            # Disable list always takes precedence
            if rule.id in disable_list:
                rule.enabled = False

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            try:
                rule = Rule(
                    id=entry["id"],
                    kind=IssueKind(entry.get("kind", IssueKind.DEPRECATED_API.value)),
                    severity=Severity(entry.get("severity", Severity.INFO.value)),
                    pattern=entry["pattern"],
                    message=entry.get("message", entry["id"]),
                    suggestion=entry.get("suggestion", ""),
                    file_types=tuple(
                        FileType(t) for t in entry.get("file_types", [FileType.OTHER.value])
                    ),
                    unless=entry.get("unless"),
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise ConfigError(f"Invalid custom rule in {path}: {exc}") from exc
            self.register(rule)
            count += 1
        return count


def build_registry(
    config: Optional[ModernizeConfig] = None,
    project_root: Optional[Path] = None,
) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry."""
    from ngmodernize.rules.builtin import ALL_BUILTIN_RULES

    config = config or ModernizeConfig()
    registry = RuleRegistry()
    # Fresh copies: apply_config toggles ``enabled`` in place.
    registry.register_many([_copy(rule) for rule in ALL_BUILTIN_RULES])

    if project_root is not None:
        registry.load_custom_rules(Path(project_root) / CUSTOM_RULES_DIRNAME)

    registry.apply_config(config)

    # Force-compile patterns now (not inside the hot loop)
    for rule in registry.enabled_rules():
        _ = rule.compiled_pattern
        _ = rule.compiled_unless

    return registry


def _copy(rule: Rule) -> Rule:
    return Rule(
        id=rule.id,
        kind=rule.kind,
        severity=rule.severity,
        pattern=rule.pattern,
        message=rule.message,
        suggestion=rule.suggestion,
        file_types=rule.file_types,
        unless=rule.unless,
        flags=rule.flags,
        enabled=rule.enabled,
    )
