"""Pattern detector: run role-specific rules over one classified file.

The detector never changes ``file.content``. Regex rules fire once per
non-overlapping match; the dependency manifest is inspected structurally
(see :mod:`ngmodernize.scanner.manifest`).
"""

from __future__ import annotations

from typing import List, Optional

from ngmodernize.config.schema import ModernizeConfig
from ngmodernize.files.models import AnalyzedFile, FileType
from ngmodernize.findings.models import MigrationIssue
from ngmodernize.log import ComponentLogger, get_logger
from ngmodernize.rules.models import Rule
from ngmodernize.rules.registry import RuleRegistry, build_registry
from ngmodernize.scanner.manifest import STRUCTURED_RULE_IDS, inspect_manifest


def line_number_at(content: str, offset: int) -> int:
    """1-based line of character *offset* in *content*."""
    return content.count("\n", 0, offset) + 1


def _apply_rule(rule: Rule, content: str) -> List[MigrationIssue]:
    guard = rule.compiled_unless
    if guard is not None and guard.search(content):
        return []

    issues: List[MigrationIssue] = []
    for m in rule.compiled_pattern.finditer(content):
        if m.end() == m.start():
            continue
        issues.append(
            MigrationIssue(
                rule_id=rule.id,
                kind=rule.kind,
                severity=rule.severity,
                message=rule.render(rule.message, m),
                suggestion=rule.render(rule.suggestion, m),
                line_number=line_number_at(content, m.start()),
                matched_text=m.group(0),
            )
        )
    return issues


def detect(
    file: AnalyzedFile,
    registry: Optional[RuleRegistry] = None,
    config: Optional[ModernizeConfig] = None,
    log: Optional[ComponentLogger] = None,
) -> List[MigrationIssue]:
    """Return every issue found in *file*, in rule-registration order."""
    config = config or ModernizeConfig()
    registry = registry or build_registry(config)
    log = log or get_logger("detector")

    issues: List[MigrationIssue] = []
    if file.type == FileType.DEPENDENCY_MANIFEST:
        issues.extend(inspect_manifest(file.content, registry, config.manifest))

    for rule in registry.rules_for(file.type):
        if rule.id in STRUCTURED_RULE_IDS:
            continue
        issues.extend(_apply_rule(rule, file.content))

    log.debug(
        "%s: %d issue(s)",
        file.path,
        len(issues),
        payload={"path": file.path, "type": file.type.value, "issues": len(issues)},
    )
    return issues
