"""Structured inspection of ``package.json`` dependency manifests."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

from ngmodernize.config.schema import ManifestConfig
from ngmodernize.errors import ManifestError
from ngmodernize.findings.models import MigrationIssue
from ngmodernize.rules.builtin.manifest import (
    CORE_VERSION_MISMATCH,
    MANIFEST_PARSE_ERROR,
    OBSOLETE_PACKAGE,
)
from ngmodernize.rules.models import Rule
from ngmodernize.rules.registry import RuleRegistry

DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")

STRUCTURED_RULE_IDS = frozenset(
    {CORE_VERSION_MISMATCH.id, OBSOLETE_PACKAGE.id, MANIFEST_PARSE_ERROR.id}
)

_RANGE_PREFIX = re.compile(r"^[\s^~>=<v]+")


def parse_manifest(content: str) -> Dict[str, Any]:
    """Parse manifest text into a dict. Raises ManifestError."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"invalid JSON at line {exc.lineno}: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise ManifestError("top-level value is not an object")
    return data


def declared_dependencies(data: Dict[str, Any]) -> Dict[str, str]:
    """Merged view of ``dependencies`` and ``devDependencies``."""
    merged: Dict[str, str] = {}
    for section in DEPENDENCY_SECTIONS:
        deps = data.get(section)
        if isinstance(deps, dict):
            for name, version in deps.items():
                merged.setdefault(name, str(version))
    return merged


def major_version(spec: str) -> Optional[str]:
    """``"^5.2.0"`` -> ``"5"``; None when no leading number can be read."""
    stripped = _RANGE_PREFIX.sub("", spec)
    m = re.match(r"\d+", stripped)
    return m.group(0) if m else None


def _line_of(rule: Rule, content: str, package: str) -> Optional[int]:
    pattern = re.compile(rule.pattern.format(package=re.escape(package)))
    m = pattern.search(content)
    if m is None:
        return None
    return content.count("\n", 0, m.start()) + 1


def _issue(rule: Rule, content: str, **values: str) -> MigrationIssue:
    package = values.get("package")
    return MigrationIssue(
        rule_id=rule.id,
        kind=rule.kind,
        severity=rule.severity,
        message=rule.message.format(**values),
        suggestion=rule.suggestion.format(**values),
        line_number=_line_of(rule, content, package) if package else None,
        matched_text=package,
    )


def inspect_manifest(
    content: str,
    registry: RuleRegistry,
    config: ManifestConfig,
) -> List[MigrationIssue]:
    """Version and obsolete-package checks for one manifest."""
    enabled = {r.id: r for r in registry.enabled_rules() if r.id in STRUCTURED_RULE_IDS}

    try:
        data = parse_manifest(content)
    except ManifestError as exc:
        rule = enabled.get(MANIFEST_PARSE_ERROR.id)
        if rule is None:
            return []
        return [
            MigrationIssue(
                rule_id=rule.id,
                kind=rule.kind,
                severity=rule.severity,
                message=rule.message.format(error=exc),
                suggestion=rule.suggestion.format(error=exc),
            )
        ]

    deps = declared_dependencies(data)
    issues: List[MigrationIssue] = []

    rule = enabled.get(CORE_VERSION_MISMATCH.id)
    core = config.core_package
    if rule is not None and core in deps:
        if major_version(deps[core]) != config.expected_major:
            issues.append(
                _issue(
                    rule,
                    content,
                    package=core,
                    version=deps[core],
                    expected=config.expected_major,
                )
            )

    rule = enabled.get(OBSOLETE_PACKAGE.id)
    if rule is not None:
        for name in config.obsolete_packages:
            if name in deps:
                issues.append(
                    _issue(
                        rule,
                        content,
                        package=name,
                        version=deps[name],
                        expected=config.expected_major,
                    )
                )

    return issues
