"""Source materialization: get a pdf onto disk exactly once per session."""

from pdfconvert.source.materializer import SourceMaterializer
from pdfconvert.source.models import (
    URL_PATTERN,
    PdfSource,
    SessionState,
    SourceKind,
    detect_source_kind,
)
from pdfconvert.source.tempfiles import (
    create_temp_file,
    remove_temp_file,
    sweep_temp_files,
    tracked_temp_files,
)

__all__ = [
    "PdfSource",
    "SessionState",
    "SourceKind",
    "SourceMaterializer",
    "URL_PATTERN",
    "create_temp_file",
    "detect_source_kind",
    "remove_temp_file",
    "sweep_temp_files",
    "tracked_temp_files",
]
