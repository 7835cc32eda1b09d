from .loader import apply_overrides, load_config
from .models import ConversionConfig, GhostscriptConfig, PdfConvertConfig

__all__ = [
    "ConversionConfig",
    "GhostscriptConfig",
    "PdfConvertConfig",
    "apply_overrides",
    "load_config",
]
