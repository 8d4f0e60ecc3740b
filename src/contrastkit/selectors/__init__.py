"""Selector parsing, matching and specificity."""

from contrastkit.selectors.matcher import compile_selector, matches, matches_compound, specificity
from contrastkit.selectors.parser import (
    Combinator,
    Compound,
    Selector,
    normalize_selector,
    parse_selector,
)

__all__ = [
    "Combinator",
    "Compound",
    "Selector",
    "normalize_selector",
    "parse_selector",
    "compile_selector",
    "matches",
    "matches_compound",
    "specificity",
]
