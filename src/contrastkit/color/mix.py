"""Weighted color blending: color-mix() interpolation and alpha compositing."""

from __future__ import annotations

from typing import Callable

from contrastkit.color import spaces
from contrastkit.model.color import RgbaColor

__all__ = ["SUPPORTED_SPACES", "resolve_weights", "mix", "composite"]

Triple = spaces.Triple


def _srgb_channels(color: RgbaColor) -> Triple:
    return (float(color.r), float(color.g), float(color.b))


def _srgb_from(r: float, g: float, b: float) -> RgbaColor:
    return RgbaColor(spaces.clamp_byte(r), spaces.clamp_byte(g), spaces.clamp_byte(b))


# space name -> (to coordinates, from coordinates, index of the hue coordinate)
_SPACES: dict[str, tuple[Callable[[RgbaColor], Triple], Callable[..., RgbaColor], int | None]] = {
    "srgb": (_srgb_channels, _srgb_from, None),
    "srgb-linear": (spaces.rgb_to_linear, spaces.linear_to_rgb, None),
    "oklab": (spaces.rgb_to_oklab, spaces.oklab_to_rgb, None),
    "oklch": (spaces.rgb_to_oklch, spaces.oklch_to_rgb, 2),
    "lab": (spaces.rgb_to_lab, spaces.lab_to_rgb, None),
    "lch": (spaces.rgb_to_lch, spaces.lch_to_rgb, 2),
    "hsl": (spaces.rgb_to_hsl, spaces.hsl_to_rgb, 0),
}

SUPPORTED_SPACES = frozenset(_SPACES)


def resolve_weights(p1: float | None, p2: float | None) -> tuple[float, float] | None:
    """Turn optional color-mix() percentages into weights summing to 1.

    Both omitted is 50/50; one omitted takes ``100 - p`` of the other; both
    given are normalized by their sum. A sum of zero or less fails.
    """
    if p1 is None and p2 is None:
        p1, p2 = 50.0, 50.0
    elif p2 is None:
        p2 = 100 - p1  # type: ignore[operator]
    elif p1 is None:
        p1 = 100 - p2
    total = p1 + p2  # type: ignore[operator]
    if total <= 0:
        return None
    return (p1 / total, p2 / total)  # type: ignore[operator]


def mix(
    space: str,
    c1: RgbaColor,
    p1: float | None,
    c2: RgbaColor,
    p2: float | None,
) -> RgbaColor | None:
    """Interpolate two colors in *space* with color-mix() percentage rules.

    Returns None for an unsupported space or percentages summing to zero.
    Hue coordinates travel the shorter arc. Alpha is interpolated linearly
    and only kept when either input carries one.
    """
    entry = _SPACES.get(space.lower())
    weights = resolve_weights(p1, p2)
    if entry is None or weights is None:
        return None
    w1, w2 = weights
    to_space, from_space, hue_index = entry

    a = to_space(c1)
    b = to_space(c2)
    coords = []
    for i in range(3):
        if i == hue_index:
            coords.append(spaces.lerp_hue(a[i], b[i], w2))
        else:
            coords.append(a[i] * w1 + b[i] * w2)

    result = from_space(*coords)
    if c1.a is None and c2.a is None:
        return result
    return RgbaColor(result.r, result.g, result.b, c1.alpha * w1 + c2.alpha * w2)


def composite(color: RgbaColor, behind: RgbaColor) -> RgbaColor:
    """Alpha-composite *color* over an opaque *behind* surface.

    ``c * a + behind * (1 - a)`` per channel; an opaque color is returned
    unchanged.
    """
    a = color.alpha
    if a >= 1:
        return color
    a = max(0.0, a)
    return RgbaColor(
        spaces.round_half_up(color.r * a + behind.r * (1 - a)),
        spaces.round_half_up(color.g * a + behind.g * (1 - a)),
        spaces.round_half_up(color.b * a + behind.b * (1 - a)),
    )
