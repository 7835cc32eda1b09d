"""Argument lists for each Ghostscript invocation.

Builders return the arguments only; the runner prepends the binary.
"""

from __future__ import annotations

import os
from pathlib import Path

_COMMON_FLAGS = [
    "-dQUIET",
    "-dPARANOIDSAFER",
    "-dBATCH",
    "-dNOPAUSE",
    "-dNOPROMPT",
]

_GREY_FLAGS = [
    "-sProcessColorModel=DeviceGray",
    "-sColorConversionStrategy=Gray",
    "-dOverrideICC",
]


def page_image_args(
    input_path: str | Path,
    output_path: str | Path,
    page: int,
    resolution: int,
) -> list[str]:
    """Render one page to a 24-bit PNG."""
    return [
        *_COMMON_FLAGS,
        "-sDEVICE=png16m",
        "-dTextAlphaBits=4",
        "-dGraphicsAlphaBits=4",
        f"-r{resolution}",
        f"-dFirstPage={page}",
        f"-dLastPage={page}",
        f"-sOutputFile={output_path}",
        os.fspath(input_path),
    ]


def shrink_args(
    input_path: str | Path,
    output_path: str | Path,
    dpi: int,
    pdf_version: str,
    grey_scale: bool = False,
) -> list[str]:
    """Rewrite a pdf with /screen settings and images downsampled to ``dpi``."""
    return [
        *_COMMON_FLAGS,
        "-sDEVICE=pdfwrite",
        f"-dCompatibilityLevel={pdf_version}",
        "-dPDFSETTINGS=/screen",
        "-dEmbedAllFonts=true",
        "-dSubsetFonts=true",
        "-dAutoRotatePages=/None",
        "-dColorImageDownsampleType=/Bicubic",
        f"-dColorImageResolution={dpi}",
        "-dGrayImageDownsampleType=/Bicubic",
        f"-dGrayImageResolution={dpi}",
        "-dMonoImageDownsampleType=/Subsample",
        f"-dMonoImageResolution={dpi}",
        *(_GREY_FLAGS if grey_scale else []),
        f"-sOutputFile={output_path}",
        os.fspath(input_path),
    ]


def postscript_path(path: str | Path) -> str:
    """Format a filesystem path as the body of a PostScript string literal.

    Backslashes become ``/`` before ``(`` and ``)`` are escaped, so the only
    backslashes left in the result are the escapes added here. Swapping the
    two steps would turn ``\\(`` into ``/(``.
    """
    text = os.fspath(path).replace("\\", "/")
    return text.replace("(", "\\(").replace(")", "\\)")


def page_count_args(input_path: str | Path) -> list[str]:
    """Run a one-line PostScript program that prints the page count."""
    script = f"({postscript_path(input_path)}) (r) file runpdfbegin pdfpagecount = quit"
    return ["-dNODISPLAY", "-dNOSAFER", "-q", "-c", script]
