"""Tests for the pdfconvert CLI (conversion calls mocked)."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from pdfconvert.cli import app
from pdfconvert.config.loader import DEFAULT_CONFIG_TEMPLATE
from pdfconvert.converter import PdfConvert, PdfInfo, ShrinkResult
from pdfconvert.errors import GhostscriptError, PageImageError

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")


# ── info ─────────────────────────────────────────────────────────────


def test_info_prints_version_and_pages(pdf_file):
    info = PdfInfo(version="1.3", page_count=3)
    with patch.object(PdfConvert, "get_info", AsyncMock(return_value=info)):
        result = runner.invoke(app, ["info", str(pdf_file)])
    assert result.exit_code == 0
    assert "1.3" in result.output
    assert "3" in result.output


def test_info_unknown_page_count(pdf_file):
    info = PdfInfo(version="1.4", page_count=None)
    with patch.object(PdfConvert, "get_info", AsyncMock(return_value=info)):
        result = runner.invoke(app, ["info", str(pdf_file)])
    assert result.exit_code == 0
    assert "unknown" in result.output


# ── page ─────────────────────────────────────────────────────────────


def test_page_writes_png(pdf_file, tmp_path):
    mock = AsyncMock(return_value=b"\x89PNGdata")
    with patch.object(PdfConvert, "convert_page_to_image", mock):
        result = runner.invoke(app, ["page", str(pdf_file), "2", "-o", "out.png", "--dpi", "72"])
    assert result.exit_code == 0
    assert (tmp_path / "out.png").read_bytes() == b"\x89PNGdata"
    mock.assert_awaited_once_with(2, 72)


def test_page_error_exits_1(pdf_file):
    err = PageImageError(GhostscriptError(["gs"], "exited 1: no such page", returncode=1))
    with patch.object(PdfConvert, "convert_page_to_image", AsyncMock(side_effect=err)):
        result = runner.invoke(app, ["page", str(pdf_file), "9"])
    assert result.exit_code == 1
    assert "Unable to process image from page" in result.output


# ── shrink ───────────────────────────────────────────────────────────


def test_shrink_writes_smaller_pdf(pdf_file, tmp_path):
    stats = ShrinkResult(data=b"%PDF-small", original_size=1000, shrunken_size=10)
    mock = AsyncMock(return_value=stats)
    with patch.object(PdfConvert, "shrink_with_stats", mock):
        result = runner.invoke(
            app,
            ["shrink", str(pdf_file), "-o", "small.pdf", "--dpi", "72", "--pdf-version", "1.4", "--grey"],
        )
    assert result.exit_code == 0
    assert (tmp_path / "small.pdf").read_bytes() == b"%PDF-small"
    mock.assert_awaited_once_with(72, "1.4", True)
    assert "-99.0%" in result.output


def test_shrink_reports_no_reduction(pdf_file, tmp_path):
    stats = ShrinkResult(data=b"orig", original_size=4, shrunken_size=9, used_original=True)
    with patch.object(PdfConvert, "shrink_with_stats", AsyncMock(return_value=stats)):
        result = runner.invoke(app, ["shrink", str(pdf_file)])
    assert result.exit_code == 0
    assert "No reduction" in result.output
    assert (tmp_path / "shrunken.pdf").read_bytes() == b"orig"


def test_missing_source_exits_1(tmp_path):
    result = runner.invoke(app, ["info", str(tmp_path / "absent.pdf")])
    assert result.exit_code == 1
    assert "Error" in result.output


# ── config ───────────────────────────────────────────────────────────


def test_config_init_creates_file(tmp_path):
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 0
    assert (tmp_path / "pdfconvert.yaml").read_text() == DEFAULT_CONFIG_TEMPLATE


def test_config_init_refuses_overwrite(tmp_path):
    (tmp_path / "pdfconvert.yaml").write_text("log_level: debug\n")
    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_config_show_uses_config_flag(tmp_path):
    cfg = tmp_path / "custom.yaml"
    cfg.write_text("conversion:\n  resolution: 123\n")
    result = runner.invoke(app, ["--config", str(cfg), "config", "show"])
    assert result.exit_code == 0
    assert "123" in result.output


def test_invalid_config_exits_1(tmp_path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("conversion:\n  resolution: -5\n")
    result = runner.invoke(app, ["--config", str(cfg), "config", "show"])
    assert result.exit_code == 1
    assert "Invalid config" in result.output


def test_ghostscript_path_option_flows_into_config(tmp_path):
    result = runner.invoke(app, ["--ghostscript-path", "/opt/gs/bin", "config", "show"])
    assert result.exit_code == 0
    assert "/opt/gs/bin" in result.output
