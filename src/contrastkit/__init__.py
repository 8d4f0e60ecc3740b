"""contrastkit: color and cascade resolution for text contrast checks."""

from __future__ import annotations

__version__ = "0.4.0"

from contrastkit.analyzer import Analyzer, analyze_file, analyze_files  # noqa: E402
from contrastkit.cascade import find_best_declaration  # noqa: E402
from contrastkit.color import composite, mix, parse_color, to_hex  # noqa: E402
from contrastkit.config import ContrastConfig, load_config  # noqa: E402
from contrastkit.contrast import contrast_ratio, evaluate, relative_luminance  # noqa: E402
from contrastkit.errors import ContrastKitError  # noqa: E402
from contrastkit.pairing import analyze_elements  # noqa: E402
from contrastkit.properties import resolve_custom_property  # noqa: E402

__all__ = [
    "__version__",
    "Analyzer",
    "ContrastConfig",
    "ContrastKitError",
    "analyze_elements",
    "analyze_file",
    "analyze_files",
    "composite",
    "contrast_ratio",
    "evaluate",
    "find_best_declaration",
    "load_config",
    "mix",
    "parse_color",
    "relative_luminance",
    "resolve_custom_property",
    "to_hex",
]
