"""Tailwind-style utility classes: ``text-*``, ``bg-*`` and font utilities."""

from __future__ import annotations

import re
from typing import Mapping, Sequence

from contrastkit.color import parse_color
from contrastkit.utilities.base import UtilityMatch
from contrastkit.utilities.palette import FONT_SIZES, FONT_WEIGHTS, PALETTE

__all__ = ["TailwindResolver", "SKIP_UTILITIES"]

# text-blue-500, bg-white, bg-black/50
_UTILITY_RE = re.compile(r"(text|bg)-([a-z]+(?:-\d+)?)(?:/(\d{1,3}))?")
# text-[#1a5276], bg-[rgb(26_82_118)], text-[color:var(--brand)]
_ARBITRARY_RE = re.compile(r"(text|bg)-\[(.+)\]")
_LENGTH_RE = re.compile(r"(length:)?[+-]?(\d+\.?\d*|\.\d+)(px|pt|r?em|%|vw|vh)?")

_PREFIXES = {"text": "color", "bg": "background-color"}

# text-/bg- utilities that do not set a color.
SKIP_UTILITIES = frozenset(
    {
        "text-left", "text-center", "text-right", "text-justify", "text-start", "text-end",
        "text-wrap", "text-nowrap", "text-balance", "text-pretty",
        "text-ellipsis", "text-clip",
        *FONT_SIZES,
        "bg-fixed", "bg-local", "bg-scroll",
        "bg-auto", "bg-cover", "bg-contain",
        "bg-center", "bg-top", "bg-bottom", "bg-left", "bg-right",
        "bg-repeat", "bg-no-repeat", "bg-repeat-x", "bg-repeat-y", "bg-repeat-round", "bg-repeat-space",
        "bg-clip-border", "bg-clip-padding", "bg-clip-content", "bg-clip-text",
        "bg-origin-border", "bg-origin-padding", "bg-origin-content",
        "bg-none",
    }
)


class TailwindResolver:
    """Resolve utility classes against a palette.

    Variant-prefixed classes (``hover:text-white``) never match; they do not
    describe the element's resting state.
    """

    def __init__(self, palette: Mapping[str, str] | None = None) -> None:
        self.palette: Mapping[str, str] = PALETTE if palette is None else palette

    def resolve_color(self, class_name: str) -> UtilityMatch | None:
        """Resolve one class to a ``color`` or ``background-color`` value."""
        if class_name in SKIP_UTILITIES:
            return None

        arbitrary = _ARBITRARY_RE.fullmatch(class_name)
        if arbitrary is not None:
            prefix, raw = arbitrary.groups()
            value = raw.replace("_", " ")
            if value.startswith("color:"):
                value = value[len("color:"):]
            elif _LENGTH_RE.fullmatch(value):
                return None
            return UtilityMatch(_PREFIXES[prefix], value, class_name)

        match = _UTILITY_RE.fullmatch(class_name)
        if match is None:
            return None
        prefix, name, opacity = match.groups()
        value = self.palette.get(name)
        if value is None:
            return None
        if opacity is not None:
            value = _with_opacity(value, int(opacity))
            if value is None:
                return None
        return UtilityMatch(_PREFIXES[prefix], value, class_name)

    def _last(self, classes: Sequence[str], prop: str) -> UtilityMatch | None:
        result: UtilityMatch | None = None
        for class_name in classes:
            match = self.resolve_color(class_name)
            if match is not None and match.property == prop:
                result = match
        return result

    def foreground(self, classes: Sequence[str]) -> UtilityMatch | None:
        """The last ``text-*`` color class wins."""
        return self._last(classes, "color")

    def background(self, classes: Sequence[str]) -> UtilityMatch | None:
        """The last ``bg-*`` color class wins."""
        return self._last(classes, "background-color")

    def font_size(self, classes: Sequence[str]) -> str | None:
        for class_name in classes:
            if class_name in FONT_SIZES:
                return FONT_SIZES[class_name]
            arbitrary = _ARBITRARY_RE.fullmatch(class_name)
            if arbitrary is not None and arbitrary.group(1) == "text":
                value = arbitrary.group(2)
                if _LENGTH_RE.fullmatch(value):
                    return value.removeprefix("length:")
        return None

    def font_weight(self, classes: Sequence[str]) -> str | None:
        for class_name in classes:
            if class_name in FONT_WEIGHTS:
                return FONT_WEIGHTS[class_name]
        return None


def _with_opacity(value: str, opacity: int) -> str | None:
    color = parse_color(value)
    if color is None or opacity > 100:
        return None
    return f"rgb({color.r} {color.g} {color.b} / {opacity / 100:g})"
