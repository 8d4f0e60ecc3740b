"""Style model: normalized declarations and rules fed to the cascade."""

from __future__ import annotations

from dataclasses import dataclass, field

# Properties the cascade tracks; everything else is dropped during normalization.
COLOR_PROPERTIES = frozenset({"color", "background-color", "background"})
TYPOGRAPHY_PROPERTIES = frozenset({"font-size", "font-weight"})
TRACKED_PROPERTIES = COLOR_PROPERTIES | TYPOGRAPHY_PROPERTIES


@dataclass(frozen=True)
class Declaration:
    """A single tracked declaration.

    ``resolved_value`` is None until custom properties have been substituted;
    it stays None only when a ``var()`` reference cannot be resolved.
    """

    property: str
    raw_value: str
    resolved_value: str | None = None

    @property
    def value(self) -> str:
        """The value to interpret: resolved when available, else raw."""
        return self.resolved_value if self.resolved_value is not None else self.raw_value


@dataclass(frozen=True)
class StyleRule:
    """One simple selector paired with its tracked declarations.

    Selector lists are expanded into one rule per selector and nested rules
    are flattened into a full selector string before a rule is created.
    """

    selector: str
    declarations: tuple[Declaration, ...] = field(default_factory=tuple)
    ignored: bool = False
