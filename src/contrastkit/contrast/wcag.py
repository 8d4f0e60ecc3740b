"""WCAG 2.x relative luminance, contrast ratio and conformance levels."""

from __future__ import annotations

import re

from contrastkit.color import composite
from contrastkit.color.spaces import srgb_to_linear
from contrastkit.model.color import RgbaColor
from contrastkit.model.pair import ContrastPair, Level, Verdict

__all__ = [
    "AA_NORMAL",
    "AAA_NORMAL",
    "AA_LARGE",
    "AAA_LARGE",
    "relative_luminance",
    "contrast_ratio",
    "parse_font_size_px",
    "parse_font_weight",
    "is_large_text",
    "evaluate",
    "evaluate_colors",
]

AA_NORMAL = 4.5
AAA_NORMAL = 7.0
AA_LARGE = 3.0
AAA_LARGE = 4.5

BASE_FONT_SIZE_PX = 16.0

_FONT_SIZE_RE = re.compile(r"(\d+(?:\.\d+)?|\.\d+)\s*(px|pt|rem|em|%)?")
_WEIGHT_KEYWORDS = {"bold": 700, "bolder": 700, "normal": 400, "lighter": 400}
WHITE = RgbaColor(255, 255, 255)


def relative_luminance(color: RgbaColor) -> float:
    """Relative luminance of the color channels, ignoring alpha."""
    return (
        0.2126 * srgb_to_linear(color.r / 255)
        + 0.7152 * srgb_to_linear(color.g / 255)
        + 0.0722 * srgb_to_linear(color.b / 255)
    )


def _flatten(color: RgbaColor, other: RgbaColor) -> RgbaColor:
    if color.is_opaque:
        return color
    return composite(color, other if other.is_opaque else WHITE)


def contrast_ratio(foreground: RgbaColor, background: RgbaColor) -> float:
    """Contrast ratio in [1, 21], symmetric in its arguments.

    A translucent color is composited onto the other color when that one is
    opaque, and onto white when both are translucent.
    """
    l1 = relative_luminance(_flatten(foreground, background))
    l2 = relative_luminance(_flatten(background, foreground))
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def parse_font_size_px(value: str | None) -> float | None:
    """Convert a static font size to pixels; None when it is not static.

    Unitless values are pixels; rem, em and % assume a 16px base.
    """
    if not value:
        return None
    match = _FONT_SIZE_RE.fullmatch(value.strip().lower())
    if match is None:
        return None
    number = float(match.group(1))
    unit = match.group(2) or "px"
    if unit == "pt":
        return number * 4 / 3
    if unit in ("rem", "em"):
        return number * BASE_FONT_SIZE_PX
    if unit == "%":
        return number * BASE_FONT_SIZE_PX / 100
    return number


def parse_font_weight(value: str | None) -> int | None:
    if not value:
        return None
    text = value.strip().lower()
    if text.isdigit():
        return int(text)
    return _WEIGHT_KEYWORDS.get(text, 400)


def is_large_text(font_size_px: float | None, font_weight: int | None = None) -> bool:
    """WCAG large text: at least 18px, or at least 14px and bold.

    An unknown size is treated as normal text.
    """
    if font_size_px is None:
        return False
    if font_size_px >= 18:
        return True
    return font_size_px >= 14 and (font_weight or 400) >= 700


def evaluate_colors(
    foreground: RgbaColor,
    background: RgbaColor,
    font_size_px: float | None = None,
    font_weight: int | None = None,
) -> Verdict:
    ratio = contrast_ratio(foreground, background)
    large = is_large_text(font_size_px, font_weight)
    meets_aa = ratio >= (AA_LARGE if large else AA_NORMAL)
    meets_aaa = ratio >= (AAA_LARGE if large else AAA_NORMAL)

    if meets_aaa:
        level = Level.PASS
    elif meets_aa:
        level = Level.AAA_ONLY_FAIL
    else:
        level = Level.AA_FAIL
    return Verdict(ratio=ratio, meets_aa=meets_aa, meets_aaa=meets_aaa, level=level, large_text=large)


def evaluate(pair: ContrastPair) -> Verdict | None:
    """Evaluate a pair; None when either side is unresolved."""
    if pair.foreground.rgba is None or pair.background.rgba is None:
        return None
    return evaluate_colors(
        pair.foreground.rgba,
        pair.background.rgba,
        pair.font_size_px,
        pair.font_weight,
    )
