from typing import Literal

from pydantic import BaseModel, Field


class GhostscriptConfig(BaseModel):
    path: str | None = None
    executable: str | None = None


class ConversionConfig(BaseModel):
    resolution: int = Field(default=600, gt=0)
    shrink_dpi: int = Field(default=300, gt=0)
    fallback_pdf_version: str = "1.4"


class PdfConvertConfig(BaseModel):
    ghostscript: GhostscriptConfig = Field(default_factory=GhostscriptConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
