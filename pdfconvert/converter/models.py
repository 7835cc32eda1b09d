"""Pydantic models for conversion results."""

from __future__ import annotations

from pydantic import BaseModel


class ShrinkResult(BaseModel):
    """Outcome of a shrink, including whether the original was kept."""

    data: bytes
    original_size: int
    shrunken_size: int
    used_original: bool = False

    @property
    def saved_bytes(self) -> int:
        return self.original_size - len(self.data)


class PdfInfo(BaseModel):
    """Version and page count of a pdf."""

    version: str
    page_count: int | None
