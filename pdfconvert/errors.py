"""Exception hierarchy for pdfconvert.

Every public operation catches failures at its boundary and re-raises them
wrapped in one of these, prefixed with a short description of the stage that
failed. The original exception is kept as ``__cause__``.
"""

from __future__ import annotations


class PdfConvertError(Exception):
    """Base error: a prefixed message plus the underlying cause."""

    prefix = "pdf conversion failed"
    operation = "convert"

    def __init__(self, cause: Exception | str | None = None) -> None:
        message = self.prefix if cause is None else f"{self.prefix}: {cause}"
        super().__init__(message)
        if isinstance(cause, BaseException):
            self.__cause__ = cause


class MaterializationError(PdfConvertError):
    """The source could not be written to a local temp file."""

    prefix = "Unable to materialize pdf"
    operation = "materialize"

    def __init__(self, cause: Exception | str | None = None, prefix: str | None = None) -> None:
        if prefix is not None:
            self.prefix = prefix
        super().__init__(cause)


class NoTemporaryFileError(PdfConvertError):
    prefix = "No temporary pdf file!"
    operation = "precondition"


class GhostscriptNotFoundError(PdfConvertError):
    prefix = "Ghostscript executable not found"
    operation = "resolve"

    def __init__(self, searched: list[str]) -> None:
        self.searched = searched
        super().__init__(f"searched {', '.join(searched) or 'nothing'}")


class GhostscriptError(PdfConvertError):
    """Ghostscript could not be spawned or exited nonzero."""

    prefix = "Ghostscript failed"
    operation = "ghostscript"

    def __init__(
        self,
        command: list[str],
        cause: Exception | str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(cause)


class PageImageError(PdfConvertError):
    prefix = "Unable to process image from page"
    operation = "convert_page_to_image"


class ShrinkError(PdfConvertError):
    prefix = "Unable to shrink pdf"
    operation = "shrink"


class PdfVersionError(PdfConvertError):
    prefix = "Failed to retrieve pdf version"
    operation = "get_pdf_version"


class PageCountError(PdfConvertError):
    prefix = "Unable to get page count"
    operation = "get_page_count"
