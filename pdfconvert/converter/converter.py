"""PdfConvert: page rendering, shrinking and inspection through Ghostscript."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from functools import cached_property
from pathlib import Path

import httpx

from pdfconvert.config.loader import apply_overrides
from pdfconvert.config.models import PdfConvertConfig
from pdfconvert.converter.models import PdfInfo, ShrinkResult
from pdfconvert.errors import (
    NoTemporaryFileError,
    PageCountError,
    PageImageError,
    PdfConvertError,
    PdfVersionError,
    ShrinkError,
)
from pdfconvert.ghostscript import (
    VERSION_SCAN_BYTES,
    page_count_args,
    page_image_args,
    parse_page_count,
    parse_pdf_version,
    resolve_ghostscript,
    run_ghostscript,
    shrink_args,
)
from pdfconvert.source import (
    PdfSource,
    SessionState,
    SourceMaterializer,
    create_temp_file,
    remove_temp_file,
)

logger = logging.getLogger(__name__)


def _read_header(path: Path, size: int) -> str:
    with open(path, "rb") as f:
        return f.read(size).decode("utf-8", errors="replace")


class PdfConvert:
    """One conversion session bound to one pdf source.

    The source is written to a temp file on the first operation and reused
    until :meth:`dispose`. Operations on a single instance must not overlap.
    """

    def __init__(
        self,
        source: PdfSource,
        config: PdfConvertConfig | None = None,
        *,
        ghostscript_path: str | None = None,
        resolution: int | None = None,
        http_client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self.config = apply_overrides(
            config or PdfConvertConfig(),
            ghostscript_path=ghostscript_path,
            resolution=resolution,
        )
        self._materializer = SourceMaterializer(source, http_client_factory=http_client_factory)

    @cached_property
    def ghostscript(self) -> str:
        return resolve_ghostscript(self.config.ghostscript)

    @property
    def state(self) -> SessionState:
        return self._materializer.state

    @property
    def temp_path(self) -> Path | None:
        return self._materializer.path

    async def __aenter__(self) -> PdfConvert:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.dispose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def convert_page_to_image(self, page: int, resolution: int | None = None) -> bytes:
        """Render a 1-based page to PNG bytes."""
        source = await self._source_path()
        dpi = self.config.conversion.resolution if resolution is None else resolution

        try:
            image = await asyncio.to_thread(create_temp_file, ".png")
            try:
                await run_ghostscript(
                    self.ghostscript, page_image_args(source, image, page, dpi)
                )
                return await asyncio.to_thread(image.read_bytes)
            finally:
                await asyncio.to_thread(remove_temp_file, image)
        except (PdfConvertError, OSError) as e:
            raise PageImageError(e) from e

    async def shrink(
        self,
        dpi: int | None = None,
        pdf_version: str | None = None,
        grey_scale: bool = False,
    ) -> bytes:
        """Recompress the pdf. Never returns more bytes than the source has."""
        result = await self.shrink_with_stats(dpi, pdf_version, grey_scale)
        return result.data

    async def shrink_with_stats(
        self,
        dpi: int | None = None,
        pdf_version: str | None = None,
        grey_scale: bool = False,
    ) -> ShrinkResult:
        source = await self._source_path()
        if dpi is None:
            dpi = self.config.conversion.shrink_dpi
        if pdf_version is None:
            pdf_version = await self.get_pdf_version()

        try:
            shrunken = await asyncio.to_thread(create_temp_file, ".pdf")
            try:
                await run_ghostscript(
                    self.ghostscript,
                    shrink_args(source, shrunken, dpi, pdf_version, grey_scale),
                )
                original_size = source.stat().st_size
                shrunken_size = shrunken.stat().st_size

                if shrunken_size >= original_size:
                    logger.warning(
                        "Shrunken pdf is not smaller (%d >= %d bytes), keeping original",
                        shrunken_size,
                        original_size,
                    )
                    data = await asyncio.to_thread(source.read_bytes)
                    return ShrinkResult(
                        data=data,
                        original_size=original_size,
                        shrunken_size=shrunken_size,
                        used_original=True,
                    )

                data = await asyncio.to_thread(shrunken.read_bytes)
                return ShrinkResult(
                    data=data,
                    original_size=original_size,
                    shrunken_size=shrunken_size,
                )
            finally:
                await asyncio.to_thread(remove_temp_file, shrunken)
        except (PdfConvertError, OSError) as e:
            raise ShrinkError(e) from e

    async def get_pdf_version(self) -> str:
        """Read the ``%PDF-x.y`` tag from the first kilobyte."""
        try:
            source = await self._source_path()
            header = await asyncio.to_thread(_read_header, source, VERSION_SCAN_BYTES)
        except (PdfConvertError, OSError) as e:
            raise PdfVersionError(e) from e
        return parse_pdf_version(header, self.config.conversion.fallback_pdf_version)

    async def get_page_count(self) -> int | None:
        """Count pages via Ghostscript. None when its output holds no digits."""
        source = await self._source_path()

        try:
            result = await run_ghostscript(self.ghostscript, page_count_args(source))
        except PdfConvertError as e:
            raise PageCountError(e) from e

        count = parse_page_count(result.stdout)
        if count is None:
            logger.warning("Ghostscript printed no page count: %r", result.stdout[:200])
        return count

    async def get_info(self) -> PdfInfo:
        return PdfInfo(
            version=await self.get_pdf_version(),
            page_count=await self.get_page_count(),
        )

    async def dispose(self) -> None:
        """Remove the session's temp file. Safe to call more than once."""
        await self._materializer.dispose()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _source_path(self) -> Path:
        path = await self._materializer.ensure()
        if path is None:
            raise NoTemporaryFileError()
        return path
