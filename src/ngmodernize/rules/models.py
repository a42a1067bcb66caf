"""Rule data model: pattern stored as string, compiled at load time."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ngmodernize.files.models import FileType
from ngmodernize.findings.models import IssueKind, Severity


@dataclass
class Rule:
    """A single detection rule.

    ``pattern`` is stored as a raw string so the rule remains serialisable.
    The compiled regex is built lazily on first access via ``compiled_pattern``.

    ``message`` and ``suggestion`` are ``str.format`` templates; they receive
    ``match`` (the full matched text) plus every named group of the pattern.
    When ``unless`` is set, the rule stays silent for any file whose content
    matches it anywhere (the "already modern" guard).
    """

    id: str
    kind: IssueKind
    severity: Severity
    pattern: str
    message: str
    suggestion: str = ""
    file_types: Tuple[FileType, ...] = ()
    unless: Optional[str] = None
    flags: int = 0
    enabled: bool = True

    # --- cached compiled objects (not serialised) ---
    _compiled_pattern: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )
    _compiled_unless: Optional[re.Pattern[str]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        if self._compiled_pattern is None:
            self._compiled_pattern = re.compile(self.pattern, self.flags)
        return self._compiled_pattern

    @property
    def compiled_unless(self) -> Optional[re.Pattern[str]]:
        if self.unless is None:
            return None
        if self._compiled_unless is None:
            self._compiled_unless = re.compile(self.unless, self.flags)
        return self._compiled_unless

    def applies_to(self, file_type: FileType) -> bool:
        return file_type in self.file_types

    def render(self, template: str, m: re.Match[str]) -> str:
        """Fill *template* from the match; malformed templates come back as written."""
        values = {k: (v or "") for k, v in m.groupdict().items()}
        try:
            return template.format(match=m.group(0), **values)
        except (KeyError, IndexError, ValueError):
            return template
