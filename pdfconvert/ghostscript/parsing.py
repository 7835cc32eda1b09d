"""Parsers for Ghostscript output and pdf headers."""

from __future__ import annotations

import re

# the dot is deliberately unescaped: it matches any single character
PDF_VERSION_PATTERN = re.compile(r"%PDF-[0-9].[0-9]")

DEFAULT_PDF_VERSION = "1.4"

# bytes 0..1024 inclusive
VERSION_SCAN_BYTES = 1025


def parse_pdf_version(header: str, fallback: str = DEFAULT_PDF_VERSION) -> str:
    """Return the version from the first ``%PDF-x.y`` tag, else ``fallback``."""
    found = PDF_VERSION_PATTERN.findall(header)
    if found:
        parts = found[0].split("-")
        if len(parts) == 2:
            return parts[1].strip()
    return fallback


def parse_page_count(stdout: str) -> int | None:
    """Strip every non-digit from ``stdout`` and read what is left.

    Returns None instead of raising when no digits remain.
    """
    digits = re.sub(r"\D", "", stdout)
    if not digits:
        return None
    return int(digits)
