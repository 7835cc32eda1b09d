"""CLI entry point for pdfconvert."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, TypeVar

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from pdfconvert.config import PdfConvertConfig, load_config
from pdfconvert.config.loader import DEFAULT_CONFIG_TEMPLATE
from pdfconvert.converter import PdfConvert
from pdfconvert.errors import PdfConvertError

T = TypeVar("T")

app = typer.Typer(
    name="pdfconvert",
    help="Render pdf pages to PNG, shrink pdfs and inspect them with Ghostscript.",
)

config_app = typer.Typer(help="Manage pdfconvert configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: PdfConvertConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _get_config() -> PdfConvertConfig:
    if _config is None:
        return load_config()
    return _config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=False, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to pdfconvert.yaml")
    ] = None,
    ghostscript_path: Annotated[
        str | None,
        typer.Option("--ghostscript-path", help="Directory holding the Ghostscript binary"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log at debug level")
    ] = False,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config, ghostscript_path=ghostscript_path)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _setup_logging("debug" if verbose else _config.log_level)


def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _run_session(source: str, work: Callable[[PdfConvert], Awaitable[T]]) -> T:
    """Run ``work`` against a fresh session and always dispose it."""

    async def _go() -> T:
        async with PdfConvert(source, _get_config()) as converter:
            return await work(converter)

    try:
        return asyncio.run(_go())
    except PdfConvertError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def info(
    source: str = typer.Argument(..., help="pdf file path or http(s) URL"),
) -> None:
    """Show the declared pdf version and page count."""
    pdf_info = _run_session(source, lambda c: c.get_info())

    table = Table(title=source)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("PDF version", pdf_info.version)
    table.add_row(
        "Pages",
        str(pdf_info.page_count) if pdf_info.page_count is not None else "[yellow]unknown[/yellow]",
    )
    rprint(table)


@app.command()
def page(
    source: str = typer.Argument(..., help="pdf file path or http(s) URL"),
    number: int = typer.Argument(1, help="1-based page number"),
    output: str | None = typer.Option(None, "--output", "-o", help="PNG file to write"),
    dpi: int | None = typer.Option(None, "--dpi", help="Resolution in dpi"),
) -> None:
    """Render one page to a PNG image."""
    image = _run_session(source, lambda c: c.convert_page_to_image(number, dpi))
    target = Path(output or f"page-{number}.png")
    target.write_bytes(image)
    rprint(f"[green]Written to[/green] {target} ({_format_size(len(image))})")


@app.command()
def shrink(
    source: str = typer.Argument(..., help="pdf file path or http(s) URL"),
    output: str | None = typer.Option(None, "--output", "-o", help="pdf file to write"),
    dpi: int | None = typer.Option(None, "--dpi", help="Image downsampling resolution"),
    pdf_version: str | None = typer.Option(
        None, "--pdf-version", help="Compatibility level, defaults to the source's version"
    ),
    grey: bool = typer.Option(False, "--grey", help="Convert to greyscale"),
) -> None:
    """Recompress a pdf; keeps the original if the result is not smaller."""
    result = _run_session(
        source, lambda c: c.shrink_with_stats(dpi, pdf_version, grey)
    )
    target = Path(output or "shrunken.pdf")
    target.write_bytes(result.data)

    if result.used_original:
        rprint(
            f"[yellow]No reduction[/yellow] (Ghostscript produced "
            f"{_format_size(result.shrunken_size)}); original written to {target}"
        )
        return
    pct = 100 * result.saved_bytes / result.original_size if result.original_size else 0
    rprint(
        f"[green]Written to[/green] {target}: "
        f"{_format_size(result.original_size)} -> {_format_size(len(result.data))} "
        f"([bold]-{pct:.1f}%[/bold])"
    )


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default pdfconvert.yaml in current directory."""
    target = Path("pdfconvert.yaml")
    if target.exists() and not force:
        rprint("[yellow]pdfconvert.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
