"""Process-wide registry of temp files, swept on interpreter exit.

Explicit removal through :func:`remove_temp_file` is the normal path; the
``atexit`` sweep only catches files whose owner was never disposed.
"""

from __future__ import annotations

import atexit
import logging
import os
import tempfile
import threading
from pathlib import Path

logger = logging.getLogger(__name__)

_tracked: set[Path] = set()
_lock = threading.Lock()


def create_temp_file(suffix: str = "") -> Path:
    """Allocate a new, empty, uniquely named temp file and track it."""
    fd, name = tempfile.mkstemp(prefix="pdfconvert-", suffix=suffix)
    os.close(fd)
    path = Path(name)
    with _lock:
        _tracked.add(path)
    logger.debug("Allocated temp file %s", path)
    return path


def remove_temp_file(path: Path) -> None:
    """Delete a tracked temp file. A file that is already gone is fine."""
    with _lock:
        _tracked.discard(path)
    path.unlink(missing_ok=True)
    logger.debug("Removed temp file %s", path)


def tracked_temp_files() -> frozenset[Path]:
    with _lock:
        return frozenset(_tracked)


def sweep_temp_files() -> int:
    """Remove every still-tracked file. Returns the number removed."""
    with _lock:
        leftovers = list(_tracked)
        _tracked.clear()
    removed = 0
    for path in leftovers:
        try:
            path.unlink(missing_ok=True)
            removed += 1
        except OSError as e:
            logger.warning("Could not remove temp file %s at exit: %s", path, e)
    return removed


atexit.register(sweep_temp_files)
