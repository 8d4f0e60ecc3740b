"""Color model: the canonical RGBA value produced by the color parser."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RgbaColor:
    """An sRGB color with 8-bit channels and an optional alpha.

    Attributes:
        r: Red channel, 0-255.
        g: Green channel, 0-255.
        b: Blue channel, 0-255.
        a: Alpha in 0.0-1.0, or None when the color is opaque.
    """

    r: int
    g: int
    b: int
    a: float | None = None

    @property
    def alpha(self) -> float:
        """Effective alpha; an absent alpha is fully opaque."""
        return 1.0 if self.a is None else self.a

    @property
    def is_opaque(self) -> bool:
        return self.alpha >= 1

    def opaque(self) -> RgbaColor:
        """Return the same channels with the alpha dropped."""
        if self.a is None:
            return self
        return RgbaColor(self.r, self.g, self.b)

    def __str__(self) -> str:
        if self.a is None:
            return f"rgb({self.r}, {self.g}, {self.b})"
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a:g})"
