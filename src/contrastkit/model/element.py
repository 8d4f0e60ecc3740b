"""Element model: an arena-backed tree of rendered elements.

Elements address their parent by index into the owning :class:`ElementTree`
instead of holding a reference, so the tree has a single owner and ancestor
walks are plain index lookups.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class Position:
    """1-based source location of an element's start tag."""

    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class InlineStyle:
    """Tracked properties read from an element's ``style`` attribute."""

    color: str | None = None
    background_color: str | None = None
    font_size: str | None = None
    font_weight: str | None = None

    def is_empty(self) -> bool:
        return not (self.color or self.background_color or self.font_size or self.font_weight)


@dataclass(frozen=True)
class ElementNode:
    """A single element of the parsed document."""

    index: int
    tag_name: str
    classes: tuple[str, ...] = ()
    id: str | None = None
    inline: InlineStyle = field(default_factory=InlineStyle)
    has_text_content: bool = False
    ignored: bool = False
    position: Position = field(default_factory=Position)
    parent: int | None = None

    def has_class(self, name: str) -> bool:
        return name in self.classes

    @property
    def label(self) -> str:
        """Short CSS-like label, e.g. ``p#intro.lead``."""
        label = self.tag_name
        if self.id:
            label += f"#{self.id}"
        for cls in self.classes:
            label += f".{cls}"
        return label


@dataclass(frozen=True)
class ElementTree:
    """Owns every element of a document in document order."""

    elements: tuple[ElementNode, ...] = ()

    def __post_init__(self) -> None:
        for position, element in enumerate(self.elements):
            if element.index != position:
                raise ValueError(
                    f"Element {element.tag_name!r} has index {element.index}, expected {position}"
                )
            if element.parent is not None and not 0 <= element.parent < position:
                raise ValueError(
                    f"Element {element.index} has invalid parent index {element.parent}"
                )

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[ElementNode]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> ElementNode:
        return self.elements[index]

    def parent_of(self, element: ElementNode) -> ElementNode | None:
        if element.parent is None:
            return None
        return self.elements[element.parent]

    def ancestors(self, element: ElementNode) -> Iterator[ElementNode]:
        """Yield strict ancestors from the nearest outwards."""
        parent = self.parent_of(element)
        while parent is not None:
            yield parent
            parent = self.parent_of(parent)

    def children_of(self, element: ElementNode) -> list[ElementNode]:
        return [e for e in self.elements if e.parent == element.index]


class TreeBuilder:
    """Incrementally assembles an :class:`ElementTree` in document order."""

    def __init__(self) -> None:
        self._elements: list[dict] = []

    def add(
        self,
        tag_name: str,
        *,
        parent: int | None = None,
        classes: tuple[str, ...] | list[str] = (),
        id: str | None = None,
        inline: InlineStyle | None = None,
        has_text_content: bool = False,
        ignored: bool = False,
        position: Position | None = None,
    ) -> int:
        """Append an element and return its index."""
        index = len(self._elements)
        self._elements.append(
            {
                "index": index,
                "tag_name": tag_name.lower(),
                "classes": tuple(classes),
                "id": id,
                "inline": inline or InlineStyle(),
                "has_text_content": has_text_content,
                "ignored": ignored,
                "position": position or Position(),
                "parent": parent,
            }
        )
        return index

    def mark_text(self, index: int) -> None:
        self._elements[index]["has_text_content"] = True

    def build(self) -> ElementTree:
        return ElementTree(tuple(ElementNode(**attrs) for attrs in self._elements))
