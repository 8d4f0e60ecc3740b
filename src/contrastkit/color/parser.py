"""Parse CSS color text into :class:`RgbaColor` values.

Functional notations (``rgb()``, ``hsl()``, ``oklab()``, ``oklch()``,
``lab()``, ``lch()`` and ``color-mix()``) are read from the value tree, so
nested functions and comma-separated arguments are handled the same way the
custom-property resolver sees them. Nothing in this module raises for bad
input; an unrecognized or unresolvable value parses to ``None``.
"""

from __future__ import annotations

import math
import re
from typing import Callable

from contrastkit.color import spaces
from contrastkit.color.mix import mix
from contrastkit.color.named import NAMED_COLORS
from contrastkit.errors import ValueSyntaxError
from contrastkit.model.color import RgbaColor
from contrastkit.values import ValueNode, parse_value, serialize, split_arguments, strip_space

__all__ = ["parse_color", "to_hex"]

_HEX_RE = re.compile(r"#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})")
_NUMBER_RE = re.compile(r"([+-]?(?:\d+\.?\d*|\.\d+))(%|deg|rad|grad|turn)?")

# Reference ranges that 100% maps to for percentage a/b/chroma components.
_OKLAB_AB_RANGE = 0.4
_LAB_AB_RANGE = 125.0
_LCH_CHROMA_RANGE = 150.0


def parse_color(value: str) -> RgbaColor | None:
    """Parse *value* into an RGBA color.

    ``transparent`` parses to ``None`` ("no color"), as does anything outside
    the supported syntaxes, including unresolved ``var()`` references.
    """
    text = value.strip().lower()
    if not text or text == "transparent":
        return None

    named = NAMED_COLORS.get(text)
    if named is not None:
        return _parse_hex(named)
    if text.startswith("#"):
        return _parse_hex(text)

    try:
        nodes = strip_space(parse_value(text))
    except ValueSyntaxError:
        return None
    if len(nodes) != 1 or nodes[0].kind != "function":
        return None

    handler = _FUNCTIONS.get(nodes[0].text)
    if handler is None:
        return None
    return handler(nodes[0])


def to_hex(color: RgbaColor) -> str:
    """Serialize *color* as ``#rrggbb``, or ``#rrggbbaa`` when it has alpha."""
    text = f"#{color.r:02x}{color.g:02x}{color.b:02x}"
    if color.a is not None:
        text += f"{spaces.round_half_up(color.a * 255):02x}"
    return text


# ---------------------------------------------------------------------------
# Hex
# ---------------------------------------------------------------------------


def _parse_hex(text: str) -> RgbaColor | None:
    match = _HEX_RE.fullmatch(text)
    if match is None:
        return None
    digits = match.group(1)
    if len(digits) <= 4:
        digits = "".join(ch * 2 for ch in digits)

    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    if len(digits) == 8:
        return RgbaColor(r, g, b, int(digits[6:8], 16) / 255)
    return RgbaColor(r, g, b)


# ---------------------------------------------------------------------------
# Component helpers
# ---------------------------------------------------------------------------


def _components(node: ValueNode) -> tuple[list[str], str | None] | None:
    """Return the three channel texts and the alpha text of a color function.

    Accepts the legacy comma syntax ``rgb(1, 2, 3[, a])`` and the modern
    space syntax ``rgb(1 2 3[ / a])``.
    """
    args = split_arguments(node.children)
    if len(args) > 1:
        if len(args) not in (3, 4) or any(len(arg) != 1 for arg in args):
            return None
        texts = [arg[0].text for arg in args]
        return texts[:3], (texts[3] if len(texts) == 4 else None)

    channels: list[str] = []
    alpha: str | None = None
    seen_slash = False
    for child in args[0]:
        if child.kind == "space":
            continue
        if child.kind == "slash":
            if seen_slash:
                return None
            seen_slash = True
            continue
        if child.kind not in ("number", "word"):
            return None
        if not seen_slash:
            channels.append(child.text)
        elif alpha is None:
            alpha = child.text
        else:
            return None

    if len(channels) != 3 or (seen_slash and alpha is None):
        return None
    return channels, alpha


def _number(text: str) -> tuple[float, str] | None:
    """Split a component into its numeric value and unit (``""`` if none)."""
    if text == "none":
        return (0.0, "")
    match = _NUMBER_RE.fullmatch(text)
    if match is None:
        return None
    return (float(match.group(1)), match.group(2) or "")


def _scalar(text: str, percent_of: float) -> float | None:
    """A bare number, or a percentage of *percent_of*."""
    parsed = _number(text)
    if parsed is None:
        return None
    number, unit = parsed
    if unit == "":
        return number
    if unit == "%":
        return number / 100 * percent_of
    return None


def _angle(text: str) -> float | None:
    """Convert a hue to degrees; a bare number is already in degrees."""
    parsed = _number(text)
    if parsed is None:
        return None
    number, unit = parsed
    if unit in ("", "deg"):
        return number
    if unit == "rad":
        return math.degrees(number)
    if unit == "grad":
        return number * 0.9
    if unit == "turn":
        return number * 360
    return None


def _with_alpha(color: RgbaColor, alpha_text: str | None) -> RgbaColor | None:
    if alpha_text is None:
        return color
    alpha = _scalar(alpha_text, 1.0)
    if alpha is None:
        return None
    return RgbaColor(color.r, color.g, color.b, min(1.0, max(0.0, alpha)))


# ---------------------------------------------------------------------------
# Functional notations
# ---------------------------------------------------------------------------


def _parse_rgb(node: ValueNode) -> RgbaColor | None:
    parts = _components(node)
    if parts is None:
        return None
    channels, alpha = parts
    values = [_scalar(text, 255.0) for text in channels]
    if any(v is None for v in values):
        return None
    r, g, b = (spaces.clamp_byte(v) for v in values)  # type: ignore[arg-type]
    return _with_alpha(RgbaColor(r, g, b), alpha)


def _parse_hsl(node: ValueNode) -> RgbaColor | None:
    parts = _components(node)
    if parts is None:
        return None
    (hue_text, sat_text, light_text), alpha = parts
    hue = _angle(hue_text)
    saturation = _scalar(sat_text, 100.0)
    lightness = _scalar(light_text, 100.0)
    if hue is None or saturation is None or lightness is None:
        return None
    return _with_alpha(spaces.hsl_to_rgb(hue, saturation, lightness), alpha)


def _lab_like(
    lightness_range: float,
    second_range: float,
    polar: bool,
    convert: Callable[[float, float, float], RgbaColor],
) -> Callable[[ValueNode], RgbaColor | None]:
    """Build a parser for oklab/oklch/lab/lch, which only use the space syntax."""

    def parse(node: ValueNode) -> RgbaColor | None:
        parts = _components(node)
        if parts is None or len(split_arguments(node.children)) > 1:
            return None
        (l_text, second_text, third_text), alpha = parts
        lightness = _scalar(l_text, lightness_range)
        second = _scalar(second_text, second_range)
        third = _angle(third_text) if polar else _scalar(third_text, second_range)
        if lightness is None or second is None or third is None:
            return None
        return _with_alpha(convert(lightness, second, third), alpha)

    return parse


def _mix_argument(nodes: tuple[ValueNode, ...]) -> tuple[RgbaColor, float | None] | None:
    """Parse ``<color> [<percentage>]`` in either order."""
    rest = list(nodes)
    percentage: float | None = None
    for index in (-1, 0):
        if len(rest) > 1 and rest[index].kind == "number" and rest[index].text.endswith("%"):
            percentage = _scalar(rest.pop(index).text, 100.0)
            break
    if percentage is None and any(n.kind == "number" and n.text.endswith("%") for n in rest):
        return None
    if percentage is not None and not 0 <= percentage <= 100:
        return None

    color = parse_color(serialize(rest))
    if color is None:
        return None
    return (color, percentage)


def _parse_color_mix(node: ValueNode) -> RgbaColor | None:
    args = split_arguments(node.children)
    if len(args) != 3:
        return None

    method = [n.text for n in args[0] if n.kind != "space"]
    if len(method) < 2 or method[0] != "in":
        return None
    # Hue interpolation is always along the shorter arc.
    if method[2:] not in ([], ["shorter", "hue"]):
        return None

    first = _mix_argument(args[1])
    second = _mix_argument(args[2])
    if first is None or second is None:
        return None
    return mix(method[1], first[0], first[1], second[0], second[1])


_FUNCTIONS: dict[str, Callable[[ValueNode], RgbaColor | None]] = {
    "rgb": _parse_rgb,
    "rgba": _parse_rgb,
    "hsl": _parse_hsl,
    "hsla": _parse_hsl,
    "oklab": _lab_like(1.0, _OKLAB_AB_RANGE, False, spaces.oklab_to_rgb),
    "oklch": _lab_like(1.0, _OKLAB_AB_RANGE, True, spaces.oklch_to_rgb),
    "lab": _lab_like(100.0, _LAB_AB_RANGE, False, spaces.lab_to_rgb),
    "lch": _lab_like(100.0, _LCH_CHROMA_RANGE, True, spaces.lch_to_rgb),
    "color-mix": _parse_color_mix,
}
