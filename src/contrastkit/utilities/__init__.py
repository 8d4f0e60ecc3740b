"""Utility-class resolution (Tailwind default palette)."""

from contrastkit.utilities.base import UtilityMatch, UtilityResolver
from contrastkit.utilities.palette import FONT_SIZES, FONT_WEIGHTS, PALETTE
from contrastkit.utilities.tailwind import SKIP_UTILITIES, TailwindResolver

__all__ = [
    "UtilityMatch",
    "UtilityResolver",
    "TailwindResolver",
    "PALETTE",
    "FONT_SIZES",
    "FONT_WEIGHTS",
    "SKIP_UTILITIES",
]
