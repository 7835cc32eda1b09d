"""Locate the Ghostscript executable without touching PATH."""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path

from pdfconvert.config.models import GhostscriptConfig
from pdfconvert.errors import GhostscriptNotFoundError

logger = logging.getLogger(__name__)

# Shipped next to the package for Windows installs
BUNDLED_DIR = Path(__file__).resolve().parent.parent / "executables" / "ghostscript"

_WINDOWS_NAMES = ("gswin64c.exe", "gswin32c.exe", "gs.exe")
_POSIX_NAMES = ("gs",)
_PATH_NAMES = ("gs", "gswin64c", "gswin32c")


def _binary_names(platform: str) -> tuple[str, ...]:
    return _WINDOWS_NAMES if platform == "win32" else _POSIX_NAMES


def _first_in_dir(directory: Path, names: tuple[str, ...]) -> Path | None:
    for name in names:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def resolve_ghostscript(
    config: GhostscriptConfig | None = None,
    platform: str | None = None,
) -> str:
    """Return the path of the Ghostscript binary to invoke.

    Checks in order:
    1. config.executable (explicit binary)
    2. config.path (directory holding the binary)
    3. the bundled executables directory (Windows only)
    4. gs / gswin64c / gswin32c on PATH
    """
    config = config or GhostscriptConfig()
    platform = platform or sys.platform
    names = _binary_names(platform)
    searched: list[str] = []

    if config.executable:
        exe = Path(config.executable)
        if exe.is_file():
            return str(exe)
        found = shutil.which(config.executable)
        if found:
            return found
        searched.append(config.executable)

    if config.path:
        found_in_dir = _first_in_dir(Path(config.path), names)
        if found_in_dir is not None:
            return str(found_in_dir)
        logger.warning("No Ghostscript binary in configured path %s", config.path)
        searched.append(config.path)

    if platform == "win32":
        bundled = _first_in_dir(BUNDLED_DIR, names)
        if bundled is not None:
            return str(bundled)
        searched.append(str(BUNDLED_DIR))

    for name in _PATH_NAMES:
        found = shutil.which(name)
        if found:
            return found
    searched.append("PATH")

    raise GhostscriptNotFoundError(searched)
