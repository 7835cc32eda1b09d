"""Conversion session: page images, shrinking, version and page count."""

from pdfconvert.converter.converter import PdfConvert
from pdfconvert.converter.models import PdfInfo, ShrinkResult

__all__ = [
    "PdfConvert",
    "PdfInfo",
    "ShrinkResult",
]
