"""General rules: obsolete import paths in any script file."""

from ngmodernize.files.models import FileType
from ngmodernize.findings.models import IssueKind, Severity
from ngmodernize.rules.models import Rule

_SCRIPT_TYPES = (
    FileType.UI_COMPONENT,
    FileType.SERVICE,
    FileType.MODULE_DESCRIPTOR,
    FileType.ROUTING_DESCRIPTOR,
    FileType.OTHER,
)

DEPRECATED_HTTP_IMPORT = Rule(
    id="DEPRECATED_HTTP_IMPORT",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.WARNING,
    pattern=r"from\s+(?P<q>['\"])@angular/http(?P=q)",
    message="Obsolete import: @angular/http",
    suggestion="Import from @angular/common/http instead",
    file_types=_SCRIPT_TYPES,
)

RXJS_DEEP_IMPORT = Rule(
    id="RXJS_DEEP_IMPORT",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.WARNING,
    pattern=(
        r"from\s+(?P<q>['\"])rxjs/(?P<sub>operators|Observable|Subject|BehaviorSubject"
        r"|ReplaySubject|Subscription|observable/of|observable/throw)(?P=q)"
    ),
    message="Obsolete import: rxjs/{sub}",
    suggestion="Import from 'rxjs' directly",
    file_types=_SCRIPT_TYPES,
)

RXJS_PATCH_IMPORT = Rule(
    id="RXJS_PATCH_IMPORT",
    kind=IssueKind.VERSION_INCOMPATIBILITY,
    severity=Severity.WARNING,
    pattern=r"import\s+(?P<q>['\"])rxjs/add/(?P<what>[\w/]+)(?P=q)",
    message="Prototype-patching import rxjs/add/{what}",
    suggestion="Remove the patch import and use pipeable operators",
    file_types=_SCRIPT_TYPES,
)

ALL_IMPORT_RULES = [DEPRECATED_HTTP_IMPORT, RXJS_DEEP_IMPORT, RXJS_PATCH_IMPORT]
