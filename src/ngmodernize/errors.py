"""Exception hierarchy shared by every ngmodernize layer."""


class ModernizeError(Exception):
    """Base class for all ngmodernize errors."""


class ConfigError(ModernizeError):
    """Raised when config is malformed, unreadable, or inconsistent."""


class DiscoveryError(ModernizeError):
    """Raised when the project root is missing or holds no matching files."""


class ManifestError(ModernizeError):
    """Raised when a dependency manifest cannot be parsed."""


class TemplateStructureError(ModernizeError):
    """Raised when a template element has no matching closing tag."""


class BackupError(ModernizeError):
    """Raised when a requested backup does not exist or cannot be restored."""
