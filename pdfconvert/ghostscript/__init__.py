"""Ghostscript discovery, command construction, execution and output parsing."""

from pdfconvert.ghostscript.binary import BUNDLED_DIR, resolve_ghostscript
from pdfconvert.ghostscript.commands import (
    page_count_args,
    page_image_args,
    postscript_path,
    shrink_args,
)
from pdfconvert.ghostscript.parsing import (
    DEFAULT_PDF_VERSION,
    PDF_VERSION_PATTERN,
    VERSION_SCAN_BYTES,
    parse_page_count,
    parse_pdf_version,
)
from pdfconvert.ghostscript.runner import run_ghostscript

__all__ = [
    "BUNDLED_DIR",
    "DEFAULT_PDF_VERSION",
    "PDF_VERSION_PATTERN",
    "VERSION_SCAN_BYTES",
    "page_count_args",
    "page_image_args",
    "parse_page_count",
    "parse_pdf_version",
    "postscript_path",
    "resolve_ghostscript",
    "run_ghostscript",
    "shrink_args",
]
