"""Shared test fixtures for pdfconvert."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import patch

import pytest

from pdfconvert.config.models import GhostscriptConfig, PdfConvertConfig
from pdfconvert.errors import GhostscriptError


def build_pdf(
    pages: int = 1,
    version: str = "1.4",
    image_size: int | None = None,
) -> bytes:
    """Assemble a small but well-formed pdf with a correct xref table.

    With ``image_size`` set, every page draws one uncompressed RGB image of
    ``image_size`` x ``image_size`` pixels scaled to one inch.
    """
    objects: dict[int, bytes] = {}
    page_ids = [3 + 2 * i for i in range(pages)]
    image_id = 3 + 2 * pages

    objects[1] = b"<< /Type /Catalog /Pages 2 0 R >>"
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects[2] = f"<< /Type /Pages /Kids [{kids}] /Count {pages} >>".encode()

    for i, pid in enumerate(page_ids):
        content_id = pid + 1
        if image_size:
            content = b"q 72 0 0 72 100 600 cm /Im0 Do Q"
            resources = f"<< /XObject << /Im0 {image_id} 0 R >> >>"
        else:
            content = f"0 0 1 rg 72 72 {100 + i} 200 re f".encode()
            resources = "<< >>"
        objects[pid] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {content_id} 0 R /Resources {resources} >>"
        ).encode()
        objects[content_id] = (
            f"<< /Length {len(content)} >>\nstream\n".encode() + content + b"\nendstream"
        )

    if image_size:
        pixels = bytearray()
        for y in range(image_size):
            for x in range(image_size):
                pixels += bytes(((x * 255) // image_size, (y * 255) // image_size, (x ^ y) & 0xFF))
        objects[image_id] = (
            f"<< /Type /XObject /Subtype /Image /Width {image_size} /Height {image_size} "
            f"/ColorSpace /DeviceRGB /BitsPerComponent 8 /Length {len(pixels)} >>\nstream\n"
        ).encode() + bytes(pixels) + b"\nendstream"

    out = bytearray(f"%PDF-{version}\n".encode() + b"%\xe2\xe3\xcf\xd3\n")
    offsets: dict[int, int] = {}
    for num in sorted(objects):
        offsets[num] = len(out)
        out += f"{num} 0 obj\n".encode() + objects[num] + b"\nendobj\n"

    xref_at = len(out)
    size = max(objects) + 1
    out += f"xref\n0 {size}\n".encode() + b"0000000000 65535 f \n"
    for num in range(1, size):
        out += f"{offsets[num]:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


@dataclass
class FakeGhostscript:
    """Stands in for run_ghostscript: records calls and fakes outputs."""

    output: bytes = b"\x89PNG\r\n\x1a\nfake"
    stdout: str = "10\n"
    fail_with: str | None = None
    calls: list[list[str]] = field(default_factory=list)

    async def __call__(self, binary: str, args: list[str]) -> subprocess.CompletedProcess[str]:
        command = [binary, *args]
        self.calls.append(command)
        if self.fail_with is not None:
            raise GhostscriptError(command, self.fail_with, returncode=1, stderr=self.fail_with)
        for arg in args:
            if arg.startswith("-sOutputFile="):
                Path(arg.removeprefix("-sOutputFile=")).write_bytes(self.output)
        return subprocess.CompletedProcess(command, 0, stdout=self.stdout, stderr="")

    def flag_value(self, call: int, prefix: str) -> str | None:
        for arg in self.calls[call]:
            if arg.startswith(prefix):
                return arg.removeprefix(prefix)
        return None


@pytest.fixture
def sample_pdf() -> bytes:
    return build_pdf(pages=3, version="1.3")


@pytest.fixture
def pdf_file(tmp_path, sample_pdf) -> Path:
    path = tmp_path / "sample.pdf"
    path.write_bytes(sample_pdf)
    return path


@pytest.fixture
def gs_binary(tmp_path) -> Path:
    """An empty file that passes for a configured Ghostscript executable."""
    exe = tmp_path / "bin" / "gs"
    exe.parent.mkdir()
    exe.write_text("#!/bin/sh\n")
    return exe


@pytest.fixture
def gs_config(gs_binary) -> PdfConvertConfig:
    return PdfConvertConfig(ghostscript=GhostscriptConfig(executable=str(gs_binary)))


@pytest.fixture
def fake_gs():
    fake = FakeGhostscript()
    with patch("pdfconvert.converter.converter.run_ghostscript", new=fake):
        yield fake
