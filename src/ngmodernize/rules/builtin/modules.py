"""Module and routing descriptor rules."""

from ngmodernize.files.models import FileType
from ngmodernize.findings.models import IssueKind, Severity
from ngmodernize.rules.models import Rule

NGMODULE_DECLARATION = Rule(
    id="NGMODULE_DECLARATION",
    kind=IssueKind.MISSING_MODERNIZATION_MARKER,
    severity=Severity.WARNING,
    pattern=r"@NgModule\s*\(",
    message="NgModule declared; migration to standalone components recommended",
    suggestion="Move declarations to standalone components and bootstrap with bootstrapApplication()",
    file_types=(FileType.MODULE_DESCRIPTOR, FileType.ROUTING_DESCRIPTOR),
)

LEGACY_HTTP_MODULE = Rule(
    id="LEGACY_HTTP_MODULE",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.WARNING,
    pattern=r"\bHttpModule\b",
    message="Obsolete module HttpModule",
    suggestion="Use HttpClient with provideHttpClient()",
    file_types=(FileType.MODULE_DESCRIPTOR,),
)

HTTP_CLIENT_MODULE = Rule(
    id="HTTP_CLIENT_MODULE",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.WARNING,
    pattern=r"\bHttpClientModule\b",
    message="HttpClientModule is deprecated",
    suggestion="Replace with provideHttpClient() in the application providers",
    file_types=(FileType.MODULE_DESCRIPTOR,),
)

ROUTER_MODULE_FOR_ROOT = Rule(
    id="ROUTER_MODULE_FOR_ROOT",
    kind=IssueKind.MISSING_MODERNIZATION_MARKER,
    severity=Severity.INFO,
    pattern=r"RouterModule\.forRoot\s*\(",
    message="Routes registered through RouterModule.forRoot",
    suggestion="Register routes with provideRouter(routes) in bootstrapApplication()",
    file_types=(FileType.ROUTING_DESCRIPTOR, FileType.MODULE_DESCRIPTOR),
)

ALL_MODULE_RULES = [
    NGMODULE_DECLARATION,
    LEGACY_HTTP_MODULE,
    HTTP_CLIENT_MODULE,
    ROUTER_MODULE_FOR_ROOT,
]
