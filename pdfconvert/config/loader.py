"""Config resolution: YAML file, ${VAR} expansion, then keyword overrides."""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import PdfConvertConfig

logger = logging.getLogger(__name__)

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate files, highest priority first: CLI > project-local > user-global."""
    paths = [Path(cli_path)] if cli_path else []
    paths.append(Path("./pdfconvert.yaml"))
    paths.append(Path.home() / ".pdfconvert" / "config.yaml")
    return paths


def _read_config_file(path: Path) -> dict[str, Any] | None:
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")
    return _expand_env_vars(raw)


def apply_overrides(
    config: PdfConvertConfig,
    *,
    ghostscript_path: str | None = None,
    resolution: int | None = None,
    shrink_dpi: int | None = None,
) -> PdfConvertConfig:
    """Return a validated copy of ``config`` with the given values replaced.

    ``None`` leaves a setting alone. The input config is not modified.
    """
    data = config.model_dump()
    if ghostscript_path is not None:
        data["ghostscript"]["path"] = ghostscript_path
    if resolution is not None:
        data["conversion"]["resolution"] = resolution
    if shrink_dpi is not None:
        data["conversion"]["shrink_dpi"] = shrink_dpi
    return PdfConvertConfig.model_validate(data)


def load_config(
    cli_path: str | None = None,
    *,
    ghostscript_path: str | None = None,
    resolution: int | None = None,
    shrink_dpi: int | None = None,
) -> PdfConvertConfig:
    """Load the first non-empty config file found, then apply overrides.

    Raises ValueError naming the file when it holds bad YAML or bad values.
    """
    config = PdfConvertConfig()
    for path in config_search_paths(cli_path):
        if not path.exists():
            continue
        raw = _read_config_file(path)
        if raw is None:
            logger.debug("Config file %s is empty, skipping", path)
            continue
        try:
            config = PdfConvertConfig(**raw)
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s", path)
        break
    else:
        logger.debug("No config file found, using defaults")

    return apply_overrides(
        config,
        ghostscript_path=ghostscript_path,
        resolution=resolution,
        shrink_dpi=shrink_dpi,
    )


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings; unset vars become ""."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `pdfconvert config init`
DEFAULT_CONFIG_TEMPLATE = """\
# pdfconvert.yaml

# Ghostscript
ghostscript:
  path: null                   # directory holding gs / gswin64c.exe, e.g. "${GS_HOME}/bin"
  executable: null             # explicit binary, wins over path

# Conversion defaults
conversion:
  resolution: 600              # dpi for page images
  shrink_dpi: 300              # dpi for image downsampling when shrinking
  fallback_pdf_version: "1.4"  # used when no %PDF- header is found

# Logging
log_level: "info"              # debug | info | warn | error
"""
