"""Writes a pdf source (bytes, local path or URL) to a single temp file."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

import httpx

from pdfconvert.errors import MaterializationError
from pdfconvert.source.models import PdfSource, SessionState, SourceKind, detect_source_kind
from pdfconvert.source.tempfiles import create_temp_file, remove_temp_file

logger = logging.getLogger(__name__)


class SourceMaterializer:
    """Owns at most one temp file holding a byte-exact copy of the source.

    ``ensure()`` is idempotent while materialized. ``dispose()`` removes the
    file and clears the reference; a later ``ensure()`` materializes again.
    """

    def __init__(
        self,
        source: PdfSource,
        *,
        http_client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self.kind = detect_source_kind(source)
        self._source = source
        self._client_factory = http_client_factory or httpx.AsyncClient
        self._path: Path | None = None
        self._state = SessionState.UNMATERIALIZED
        self._lock = asyncio.Lock()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def path(self) -> Path | None:
        return self._path

    async def ensure(self) -> Path:
        """Materialize the source if that has not happened yet."""
        if self._path is not None:
            return self._path

        async with self._lock:
            # another caller may have finished while we waited
            if self._path is not None:
                return self._path

            try:
                path = await asyncio.to_thread(create_temp_file, ".pdf")
            except OSError as e:
                raise MaterializationError(e, prefix="Unable to open tmp file") from e

            try:
                if self.kind is SourceKind.URL:
                    await self._fetch(path)
                elif self.kind is SourceKind.PATH:
                    await self._copy(path)
                else:
                    await self._write(path)
            except BaseException:
                # a partial copy must never be mistaken for a materialized source
                await asyncio.to_thread(remove_temp_file, path)
                raise

            self._path = path
            self._state = SessionState.MATERIALIZED
            logger.debug("Materialized %s source into %s", self.kind.value, path)
            return path

    async def dispose(self) -> None:
        """Remove the temp file. Calling it again is a no-op."""
        if self._path is None:
            return
        path, self._path = self._path, None
        self._state = SessionState.DISPOSED
        await asyncio.to_thread(remove_temp_file, path)

    # ------------------------------------------------------------------
    # Per-kind writers
    # ------------------------------------------------------------------

    async def _fetch(self, path: Path) -> None:
        url = str(self._source)
        try:
            async with self._client_factory() as client:
                async with client.stream("GET", url, follow_redirects=True) as resp:
                    resp.raise_for_status()
                    f = await asyncio.to_thread(open, path, "wb")
                    try:
                        async for chunk in resp.aiter_bytes():
                            await asyncio.to_thread(f.write, chunk)
                    finally:
                        await asyncio.to_thread(f.close)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, OSError) as e:
            raise MaterializationError(
                e, prefix="Unable to fetch file from web location"
            ) from e

    async def _copy(self, path: Path) -> None:
        src = os.fspath(self._source)
        try:
            await asyncio.to_thread(shutil.copyfile, src, path)
        except OSError as e:
            raise MaterializationError(e, prefix="Unable to copy local file") from e

    async def _write(self, path: Path) -> None:
        data = bytes(self._source)
        try:
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as e:
            raise MaterializationError(e, prefix="Unable to write tmp file") from e
