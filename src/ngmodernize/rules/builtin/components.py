"""Component and service rules: injection style, standalone marker, forms."""

from ngmodernize.files.models import FileType
from ngmodernize.findings.models import IssueKind, Severity
from ngmodernize.rules.models import Rule

# A parameter list that may contain one level of nested parens (``@Inject(TOKEN)``)
# and at least one access-modifier parameter.
_PARAMS = r"(?:[^()]|\([^()]*\))*"

CONSTRUCTOR_INJECTION = Rule(
    id="CONSTRUCTOR_INJECTION",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.SUGGESTION,
    pattern=(
        r"constructor\s*\("
        rf"(?={_PARAMS}?\b(?:private|public|protected|readonly)\s)"
        rf"(?P<params>{_PARAMS})\)"
    ),
    message="Constructor parameter injection; migrate to the inject() function",
    suggestion="Declare fields instead, e.g. `private svc = inject(MyService);`",
    file_types=(FileType.UI_COMPONENT, FileType.SERVICE),
)

NGMODULE_IN_COMPONENT = Rule(
    id="NGMODULE_IN_COMPONENT",
    kind=IssueKind.MISSING_MODERNIZATION_MARKER,
    severity=Severity.INFO,
    pattern=r"@NgModule\s*\(",
    message="Component file declares an @NgModule; it can become a standalone component",
    suggestion="Add `standalone: true` and import dependencies on the component directly",
    file_types=(FileType.UI_COMPONENT,),
)

COMPONENT_NOT_STANDALONE = Rule(
    id="COMPONENT_NOT_STANDALONE",
    kind=IssueKind.MISSING_MODERNIZATION_MARKER,
    severity=Severity.INFO,
    pattern=r"@Component\s*\(",
    unless=r"\bstandalone\s*:",
    message="Component is not marked standalone",
    suggestion="Add `standalone: true` to the @Component metadata",
    file_types=(FileType.UI_COMPONENT,),
)

UNTYPED_FORM_GROUP = Rule(
    id="UNTYPED_FORM_GROUP",
    kind=IssueKind.UNTYPED_CONSTRUCT,
    severity=Severity.WARNING,
    pattern=r"\bFormGroup\s*\(\s*\)",
    message="Untyped FormGroup construction",
    suggestion="Give the group a type argument: `FormGroup<MyFormShape>()`",
    file_types=(FileType.UI_COMPONENT,),
)

UNTYPED_FORM_CONTROL = Rule(
    id="UNTYPED_FORM_CONTROL",
    kind=IssueKind.UNTYPED_CONSTRUCT,
    severity=Severity.WARNING,
    pattern=r"\bFormControl\s*\(\s*\)",
    message="Untyped FormControl construction",
    suggestion="Give the control a type argument: `FormControl<string | null>()`",
    file_types=(FileType.UI_COMPONENT,),
)

SERVICE_NOT_PROVIDED_IN_ROOT = Rule(
    id="SERVICE_NOT_PROVIDED_IN_ROOT",
    kind=IssueKind.MISSING_MODERNIZATION_MARKER,
    severity=Severity.INFO,
    pattern=r"@Injectable\s*\(",
    unless=r"\bprovidedIn\s*:",
    message="Service is not tree-shakable (no providedIn)",
    suggestion="Add `providedIn: 'root'` to the @Injectable metadata",
    file_types=(FileType.SERVICE,),
)

HARDCODED_BACKEND_URL = Rule(
    id="HARDCODED_BACKEND_URL",
    kind=IssueKind.BACKEND_INTEGRATION_NOTE,
    severity=Severity.INFO,
    pattern=r"(?P<quote>['\"`])(?P<url>https?://[^'\"`\s]+)(?P=quote)",
    message="Hard-coded backend URL {url}",
    suggestion="Move backend URLs into environment configuration or an injection token",
    file_types=(FileType.SERVICE,),
)

ALL_COMPONENT_RULES = [
    CONSTRUCTOR_INJECTION,
    NGMODULE_IN_COMPONENT,
    COMPONENT_NOT_STANDALONE,
    UNTYPED_FORM_GROUP,
    UNTYPED_FORM_CONTROL,
    SERVICE_NOT_PROVIDED_IN_ROOT,
    HARDCODED_BACKEND_URL,
]
