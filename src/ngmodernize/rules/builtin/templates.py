"""Template rules: structural directives and pipes."""

from ngmodernize.files.models import FileType
from ngmodernize.findings.models import IssueKind, Severity
from ngmodernize.rules.models import Rule

_ATTR_VALUE = r"""(?:"[^"]*"|'[^']*')"""

LEGACY_NG_IF = Rule(
    id="LEGACY_NG_IF",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.SUGGESTION,
    pattern=rf"\*ngIf={_ATTR_VALUE}",
    message="Legacy structural directive {match}",
    suggestion="Replace with the block syntax: @if",
    file_types=(FileType.TEMPLATE,),
)

LEGACY_NG_FOR = Rule(
    id="LEGACY_NG_FOR",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.SUGGESTION,
    pattern=rf"\*ngFor={_ATTR_VALUE}",
    message="Legacy structural directive {match}",
    suggestion="Replace with the block syntax: @for",
    file_types=(FileType.TEMPLATE,),
)

LEGACY_NG_SWITCH = Rule(
    id="LEGACY_NG_SWITCH",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.SUGGESTION,
    pattern=rf"\*ngSwitch(?:Case|Default)\b(?:={_ATTR_VALUE})?|\[ngSwitch\]={_ATTR_VALUE}",
    message="Legacy switch directive {match}",
    suggestion="Replace with the block syntax: @switch",
    file_types=(FileType.TEMPLATE,),
)

DEPRECATED_PIPE_ASYNC = Rule(
    id="DEPRECATED_PIPE_ASYNC",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.INFO,
    pattern=r"\|\s*async\b",
    message="Pipe `async` in template",
    suggestion="Consider signals (toSignal) instead of subscribing through the async pipe",
    file_types=(FileType.TEMPLATE,),
)

DEPRECATED_PIPE_JSON = Rule(
    id="DEPRECATED_PIPE_JSON",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.INFO,
    pattern=r"\|\s*json\b",
    message="Pipe `json` in template",
    suggestion="The json pipe is a debugging aid; remove it from production templates",
    file_types=(FileType.TEMPLATE,),
)

ALL_TEMPLATE_RULES = [
    LEGACY_NG_IF,
    LEGACY_NG_FOR,
    LEGACY_NG_SWITCH,
    DEPRECATED_PIPE_ASYNC,
    DEPRECATED_PIPE_JSON,
]
