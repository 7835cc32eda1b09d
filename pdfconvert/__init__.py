"""Render, shrink and inspect pdf files with Ghostscript."""

from pdfconvert.config import PdfConvertConfig, load_config
from pdfconvert.converter import PdfConvert, PdfInfo, ShrinkResult
from pdfconvert.errors import (
    GhostscriptError,
    GhostscriptNotFoundError,
    MaterializationError,
    NoTemporaryFileError,
    PageCountError,
    PageImageError,
    PdfConvertError,
    PdfVersionError,
    ShrinkError,
)
from pdfconvert.source import SessionState, SourceKind

__version__ = "0.1.0"

__all__ = [
    "GhostscriptError",
    "GhostscriptNotFoundError",
    "MaterializationError",
    "NoTemporaryFileError",
    "PageCountError",
    "PageImageError",
    "PdfConvert",
    "PdfConvertConfig",
    "PdfConvertError",
    "PdfInfo",
    "PdfVersionError",
    "SessionState",
    "ShrinkError",
    "ShrinkResult",
    "SourceKind",
    "load_config",
]
