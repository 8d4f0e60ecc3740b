"""Color-space conversions between sRGB and the spaces color-mix() supports.

All conversions go through linear-light sRGB. Constants follow the CSS Color
Module Level 4 sample code: sRGB companding (0.04045 / 0.0031308, exponent
2.4), Björn Ottosson's OKLab matrices, and CIE Lab with a D65 white point.
Conversions back to sRGB clamp each channel to 0-255.
"""

from __future__ import annotations

import math

from contrastkit.model.color import RgbaColor

Triple = tuple[float, float, float]

# D65 reference white, normalized to Y = 1.
XN = 0.95047
ZN = 1.08883
LAB_E = 0.008856
LAB_K = 903.3


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, like CSS serialization."""
    return math.floor(value + 0.5)


def clamp_byte(value: float) -> int:
    return round_half_up(min(255.0, max(0.0, value)))


def _cbrt(value: float) -> float:
    return math.copysign(abs(value) ** (1.0 / 3.0), value)


# ---------------------------------------------------------------------------
# sRGB <-> linear sRGB
# ---------------------------------------------------------------------------


def srgb_to_linear(channel: float) -> float:
    """Delinearize a gamma-encoded channel in 0-1."""
    if channel <= 0.04045:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def linear_to_srgb(channel: float) -> float:
    """Gamma-encode a linear-light channel in 0-1."""
    if channel <= 0.0031308:
        return 12.92 * channel
    return 1.055 * channel ** (1 / 2.4) - 0.055


def rgb_to_linear(color: RgbaColor) -> Triple:
    return (
        srgb_to_linear(color.r / 255),
        srgb_to_linear(color.g / 255),
        srgb_to_linear(color.b / 255),
    )


def linear_to_rgb(r: float, g: float, b: float) -> RgbaColor:
    return RgbaColor(
        clamp_byte(linear_to_srgb(r) * 255),
        clamp_byte(linear_to_srgb(g) * 255),
        clamp_byte(linear_to_srgb(b) * 255),
    )


# ---------------------------------------------------------------------------
# OKLab / OKLCH
# ---------------------------------------------------------------------------


def rgb_to_oklab(color: RgbaColor) -> Triple:
    r, g, b = rgb_to_linear(color)

    l_ = _cbrt(0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b)
    m_ = _cbrt(0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b)
    s_ = _cbrt(0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b)

    return (
        0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def oklab_to_rgb(lightness: float, a: float, b: float) -> RgbaColor:
    l_ = lightness + 0.3963377774 * a + 0.2158037573 * b
    m_ = lightness - 0.1055613458 * a - 0.0638541728 * b
    s_ = lightness - 0.0894841775 * a - 1.2914855480 * b

    l = l_ * l_ * l_
    m = m_ * m_ * m_
    s = s_ * s_ * s_

    return linear_to_rgb(
        +4.0767416621 * l - 3.3077115913 * m + 0.2309699292 * s,
        -1.2684380046 * l + 2.6097574011 * m - 0.3413193965 * s,
        -0.0041960863 * l - 0.7034186147 * m + 1.7076147010 * s,
    )


def rgb_to_oklch(color: RgbaColor) -> Triple:
    return to_polar(*rgb_to_oklab(color))


def oklch_to_rgb(lightness: float, chroma: float, hue: float) -> RgbaColor:
    return oklab_to_rgb(*from_polar(lightness, chroma, hue))


# ---------------------------------------------------------------------------
# CIE Lab / LCH (D65)
# ---------------------------------------------------------------------------


def rgb_to_lab(color: RgbaColor) -> Triple:
    r, g, b = rgb_to_linear(color)

    x = (0.4124564 * r + 0.3575761 * g + 0.1804375 * b) / XN
    y = 0.2126729 * r + 0.7151522 * g + 0.0721750 * b
    z = (0.0193339 * r + 0.1191920 * g + 0.9503041 * b) / ZN

    def f(t: float) -> float:
        return _cbrt(t) if t > LAB_E else (LAB_K * t + 16) / 116

    fx, fy, fz = f(x), f(y), f(z)
    return (116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz))


def lab_to_rgb(lightness: float, a: float, b: float) -> RgbaColor:
    fy = (lightness + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    fx3 = fx * fx * fx
    fz3 = fz * fz * fz

    x = (fx3 if fx3 > LAB_E else (116 * fx - 16) / LAB_K) * XN
    y = ((lightness + 16) / 116) ** 3 if lightness > LAB_K * LAB_E else lightness / LAB_K
    z = (fz3 if fz3 > LAB_E else (116 * fz - 16) / LAB_K) * ZN

    return linear_to_rgb(
        +3.2404542 * x - 1.5371385 * y - 0.4985314 * z,
        -0.9692660 * x + 1.8760108 * y + 0.0415560 * z,
        +0.0556434 * x - 0.2040259 * y + 1.0572252 * z,
    )


def rgb_to_lch(color: RgbaColor) -> Triple:
    return to_polar(*rgb_to_lab(color))


def lch_to_rgb(lightness: float, chroma: float, hue: float) -> RgbaColor:
    return lab_to_rgb(*from_polar(lightness, chroma, hue))


# ---------------------------------------------------------------------------
# HSL
# ---------------------------------------------------------------------------


def rgb_to_hsl(color: RgbaColor) -> Triple:
    """Return (hue degrees, saturation %, lightness %)."""
    r, g, b = color.r / 255, color.g / 255, color.b / 255
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        return (0.0, 0.0, lightness * 100)

    d = high - low
    saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
    if high == r:
        hue = ((g - b) / d + (6 if g < b else 0)) / 6
    elif high == g:
        hue = ((b - r) / d + 2) / 6
    else:
        hue = ((r - g) / d + 4) / 6
    return (hue * 360, saturation * 100, lightness * 100)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RgbaColor:
    """Convert hue in degrees and saturation/lightness in percent."""
    h = (hue % 360) / 360
    s = min(100.0, max(0.0, saturation)) / 100
    l = min(100.0, max(0.0, lightness)) / 100

    if s == 0:
        gray = clamp_byte(l * 255)
        return RgbaColor(gray, gray, gray)

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    return RgbaColor(
        clamp_byte(_hue_to_channel(p, q, h + 1 / 3) * 255),
        clamp_byte(_hue_to_channel(p, q, h) * 255),
        clamp_byte(_hue_to_channel(p, q, h - 1 / 3) * 255),
    )


# ---------------------------------------------------------------------------
# Polar helpers
# ---------------------------------------------------------------------------


def to_polar(lightness: float, a: float, b: float) -> Triple:
    """Rectangular (L, a, b) to (L, chroma, hue degrees in [0, 360))."""
    chroma = math.hypot(a, b)
    hue = math.degrees(math.atan2(b, a)) % 360
    return (lightness, chroma, hue)


def from_polar(lightness: float, chroma: float, hue: float) -> Triple:
    radians = math.radians(hue)
    return (lightness, chroma * math.cos(radians), chroma * math.sin(radians))


def lerp_hue(h1: float, h2: float, t: float) -> float:
    """Interpolate two hues in degrees along the shorter arc."""
    diff = h2 - h1
    if diff > 180:
        diff -= 360
    elif diff < -180:
        diff += 360
    return (h1 + diff * t) % 360
