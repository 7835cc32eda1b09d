"""Run Ghostscript off the event loop."""

from __future__ import annotations

import asyncio
import logging
import subprocess

from pdfconvert.errors import GhostscriptError

logger = logging.getLogger(__name__)


def _run_sync(command: list[str]) -> subprocess.CompletedProcess[str]:
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise GhostscriptError(command, e) from e

    if result.returncode != 0:
        stderr = (result.stderr or result.stdout or "").strip()
        raise GhostscriptError(
            command,
            f"exited {result.returncode}: {stderr[:500]}",
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result


async def run_ghostscript(binary: str, args: list[str]) -> subprocess.CompletedProcess[str]:
    """Invoke ``binary`` with ``args``; raise GhostscriptError on any failure.

    No timeout is applied: a hung process blocks the awaiting caller.
    """
    command = [binary, *args]
    logger.debug("Running %s", " ".join(command))
    return await asyncio.to_thread(_run_sync, command)
