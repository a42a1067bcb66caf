"""Scanner: pattern detector and manifest inspection."""

from ngmodernize.scanner.detector import detect, line_number_at
from ngmodernize.scanner.manifest import inspect_manifest, major_version, parse_manifest

__all__ = [
    "detect",
    "inspect_manifest",
    "line_number_at",
    "major_version",
    "parse_manifest",
]
