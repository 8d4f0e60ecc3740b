"""Color parsing, conversion and blending."""

from contrastkit.color.mix import SUPPORTED_SPACES, composite, mix, resolve_weights
from contrastkit.color.named import NAMED_COLORS
from contrastkit.color.parser import parse_color, to_hex

__all__ = [
    "parse_color",
    "to_hex",
    "mix",
    "resolve_weights",
    "composite",
    "SUPPORTED_SPACES",
    "NAMED_COLORS",
]
