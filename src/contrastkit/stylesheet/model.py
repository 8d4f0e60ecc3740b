"""Stylesheet model: the normalized result of reading one block of CSS."""

from __future__ import annotations

from dataclasses import dataclass, field

from contrastkit.model.style import StyleRule


@dataclass(frozen=True)
class Stylesheet:
    """Rules, custom properties and imports read from CSS text.

    ``rules`` keeps document order; ``custom_properties`` holds the ``--*``
    declarations of ``:root`` and ``html`` rules, later ones winning;
    ``imports`` lists local ``@import`` targets as written.
    """

    rules: tuple[StyleRule, ...] = ()
    custom_properties: dict[str, str] = field(default_factory=dict)
    imports: tuple[str, ...] = ()

    def __add__(self, other: Stylesheet) -> Stylesheet:
        return Stylesheet(
            rules=self.rules + other.rules,
            custom_properties={**self.custom_properties, **other.custom_properties},
            imports=self.imports + other.imports,
        )
