"""Source kinds and session lifecycle states."""

from __future__ import annotations

import os
import re
from enum import Enum

URL_PATTERN = re.compile(r"^https?://")

PdfSource = bytes | bytearray | memoryview | str | os.PathLike


class SourceKind(str, Enum):
    BYTES = "bytes"
    PATH = "path"
    URL = "url"


class SessionState(str, Enum):
    UNMATERIALIZED = "unmaterialized"
    MATERIALIZED = "materialized"
    DISPOSED = "disposed"


def detect_source_kind(source: object) -> SourceKind:
    """Classify a source value; raises TypeError for anything unsupported."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return SourceKind.BYTES
    if isinstance(source, str):
        return SourceKind.URL if URL_PATTERN.match(source) else SourceKind.PATH
    if isinstance(source, os.PathLike):
        return SourceKind.PATH
    raise TypeError(
        f"Unsupported pdf source {type(source).__name__!r}: "
        "expected bytes, a file path or an http(s) URL"
    )
