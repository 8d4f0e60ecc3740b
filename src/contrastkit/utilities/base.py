"""Protocol for resolvers that map utility classes to style values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


@dataclass(frozen=True)
class UtilityMatch:
    """A utility class resolved to the declaration it stands for."""

    property: str
    value: str
    class_name: str


class UtilityResolver(Protocol):
    """Looks up colors and typography implied by an element's classes."""

    def foreground(self, classes: Sequence[str]) -> UtilityMatch | None: ...

    def background(self, classes: Sequence[str]) -> UtilityMatch | None: ...

    def font_size(self, classes: Sequence[str]) -> str | None: ...

    def font_weight(self, classes: Sequence[str]) -> str | None: ...
