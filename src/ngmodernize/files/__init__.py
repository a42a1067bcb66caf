"""File layer: models, classification, discovery, and the disk writer."""

from ngmodernize.files.classifier import classify
from ngmodernize.files.discovery import discover
from ngmodernize.files.models import AnalyzedFile, FileStage, FileType, SourceFile
from ngmodernize.files.writer import FileWriter

__all__ = [
    "AnalyzedFile",
    "FileStage",
    "FileType",
    "FileWriter",
    "SourceFile",
    "classify",
    "discover",
]
