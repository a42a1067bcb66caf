"""Dependency-manifest rules.

These are evaluated structurally by the manifest inspector, not by the
regex loop; ``pattern`` only locates the package key for line numbers.
Message templates receive ``package``, ``version`` and ``expected``.
"""

from ngmodernize.files.models import FileType
from ngmodernize.findings.models import IssueKind, Severity
from ngmodernize.rules.models import Rule

PACKAGE_KEY_PATTERN = r"(?P<q>\")(?P<package>{package})(?P=q)\s*:"

CORE_VERSION_MISMATCH = Rule(
    id="CORE_VERSION_MISMATCH",
    kind=IssueKind.VERSION_INCOMPATIBILITY,
    severity=Severity.ERROR,
    pattern=PACKAGE_KEY_PATTERN,
    message="{package} is at {version}; expected major version {expected}",
    suggestion="Upgrade {package} step by step to {expected}.x",
    file_types=(FileType.DEPENDENCY_MANIFEST,),
)

OBSOLETE_PACKAGE = Rule(
    id="OBSOLETE_PACKAGE",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.WARNING,
    pattern=PACKAGE_KEY_PATTERN,
    message="Obsolete dependency {package} ({version})",
    suggestion="Remove {package} and migrate to its modern replacement",
    file_types=(FileType.DEPENDENCY_MANIFEST,),
)

MANIFEST_PARSE_ERROR = Rule(
    id="MANIFEST_PARSE_ERROR",
    kind=IssueKind.DEPRECATED_API,
    severity=Severity.ERROR,
    pattern=r"\A",
    message="package.json could not be parsed: {error}",
    suggestion="Check the JSON syntax of the manifest",
    file_types=(FileType.DEPENDENCY_MANIFEST,),
)

ALL_MANIFEST_RULES = [CORE_VERSION_MISMATCH, OBSOLETE_PACKAGE, MANIFEST_PARSE_ERROR]
