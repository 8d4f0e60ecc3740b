"""contrastkit model layer -- public type re-exports."""

from contrastkit.model.color import RgbaColor
from contrastkit.model.diagnostic import AnalysisError, ErrorKind
from contrastkit.model.element import (
    ElementNode,
    ElementTree,
    InlineStyle,
    Position,
    TreeBuilder,
)
from contrastkit.model.pair import (
    ColorInfo,
    ColorSource,
    ContrastPair,
    ContrastResult,
    FileAnalysis,
    FileStats,
    Level,
    Verdict,
)
from contrastkit.model.style import (
    COLOR_PROPERTIES,
    TRACKED_PROPERTIES,
    TYPOGRAPHY_PROPERTIES,
    Declaration,
    StyleRule,
)

__all__ = [
    # color
    "RgbaColor",
    # style
    "Declaration",
    "StyleRule",
    "COLOR_PROPERTIES",
    "TYPOGRAPHY_PROPERTIES",
    "TRACKED_PROPERTIES",
    # element
    "Position",
    "InlineStyle",
    "ElementNode",
    "ElementTree",
    "TreeBuilder",
    # pair
    "ColorSource",
    "ColorInfo",
    "ContrastPair",
    "Level",
    "Verdict",
    "ContrastResult",
    "FileStats",
    "FileAnalysis",
    # diagnostic
    "ErrorKind",
    "AnalysisError",
]
