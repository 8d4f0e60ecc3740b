"""Pair assembly: turn an element tree and its rules into contrast pairs.

For every text element the foreground and the background are resolved
independently through the same priority chain (inline style, utility class,
stylesheet cascade) before falling back to structural defaults. Backgrounds
that carry alpha are composited onto the surface behind them, walking up the
ancestors to the page background and finally to white.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

from contrastkit.cascade import find_best_declaration, find_root_background
from contrastkit.color import composite, parse_color
from contrastkit.contrast import parse_font_size_px, parse_font_weight
from contrastkit.errors import ValueSyntaxError
from contrastkit.model.color import RgbaColor
from contrastkit.model.element import ElementNode, ElementTree
from contrastkit.model.pair import ColorInfo, ColorSource, ContrastPair
from contrastkit.model.style import StyleRule
from contrastkit.properties import resolve_custom_property, resolve_declarations
from contrastkit.utilities import UtilityResolver
from contrastkit.values import parse_value, serialize

__all__ = ["HEADING_DEFAULTS", "PairEngine", "analyze_elements"]

BLACK = RgbaColor(0, 0, 0)
WHITE = RgbaColor(255, 255, 255)
CLEAR = RgbaColor(0, 0, 0, 0.0)

DEFAULT_FOREGROUND = ColorInfo("#000000 (assumed)", BLACK, ColorSource.DEFAULT, "(default)")
DEFAULT_BACKGROUND = ColorInfo("#ffffff (assumed)", WHITE, ColorSource.DEFAULT, "(default)")

# Browser default (font-size, font-weight) for headings.
HEADING_DEFAULTS = MappingProxyType(
    {
        "h1": ("32px", "700"),
        "h2": ("24px", "700"),
        "h3": ("18.72px", "700"),
        "h4": ("16px", "700"),
        "h5": ("13.28px", "700"),
        "h6": ("10.72px", "700"),
    }
)


@dataclass(frozen=True)
class _Explicit:
    """A color value found for one side before it is materialized.

    ``value`` is the custom-property-resolved text, None when a reference
    could not be resolved.
    """

    original: str
    value: str | None
    source: ColorSource
    selector: str
    shorthand: bool = False


def _shorthand_color(value: str) -> str | None:
    """Pick the color component out of a ``background`` shorthand value."""
    try:
        nodes = parse_value(value)
    except ValueSyntaxError:
        return None
    for node in nodes:
        if node.kind in ("space", "comma", "slash"):
            continue
        text = serialize((node,))
        if text.lower() == "transparent" or parse_color(text) is not None:
            return text
    return None


def _materialize(explicit: _Explicit, background: bool) -> RgbaColor | None:
    value = explicit.value
    if value is None:
        return None
    if explicit.shorthand and parse_color(value) is None and value.strip().lower() != "transparent":
        value = _shorthand_color(value)
        if value is None:
            return None
    if background and value.strip().lower() == "transparent":
        return CLEAR
    return parse_color(value)


class PairEngine:
    """Resolves colors and typography for the elements of one document.

    Args:
        tree: The document's elements.
        rules: Normalized style rules in document order.
        custom_properties: Merged ``--name -> value`` map.
        utilities: Optional utility-class resolver consulted after inline
            styles and before the stylesheet cascade.
    """

    def __init__(
        self,
        tree: ElementTree,
        rules: Sequence[StyleRule],
        custom_properties: Mapping[str, str] | None = None,
        utilities: UtilityResolver | None = None,
    ) -> None:
        self.tree = tree
        self.properties: Mapping[str, str] = custom_properties or {}
        self.rules = resolve_declarations(list(rules), self.properties)
        self.utilities = utilities
        self._surfaces: dict[int | None, ColorInfo] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> list[ContrastPair]:
        pairs: list[ContrastPair] = []
        for element in self.tree:
            pair = self.pair_for(element)
            if pair is not None:
                pairs.append(pair)
        return pairs

    def pair_for(self, element: ElementNode) -> ContrastPair | None:
        """Build the pair for *element*, or None when there is nothing to check."""
        if not element.has_text_content or element.ignored:
            return None

        fg = self._explicit(element, "color")
        bg = self._explicit(element, "background-color")
        if fg is None and bg is None:
            return None

        background = self._background(element, bg)
        foreground = self._foreground(fg, background)
        font_size, font_weight = self._typography(element)
        return ContrastPair(
            element=element,
            foreground=foreground,
            background=background,
            font_size_px=parse_font_size_px(font_size),
            font_weight=parse_font_weight(font_weight),
        )

    # ------------------------------------------------------------------
    # Priority chain
    # ------------------------------------------------------------------

    def _resolve(self, value: str) -> str | None:
        return resolve_custom_property(value, self.properties)

    def _explicit(self, element: ElementNode, prop: str) -> _Explicit | None:
        inline = element.inline.color if prop == "color" else element.inline.background_color
        if inline:
            return _Explicit(inline, self._resolve(inline), ColorSource.INLINE, "inline")

        if self.utilities is not None:
            if prop == "color":
                match = self.utilities.foreground(element.classes)
            else:
                match = self.utilities.background(element.classes)
            if match is not None:
                return _Explicit(
                    match.class_name, self._resolve(match.value), ColorSource.STYLESHEET, match.class_name
                )

        found = find_best_declaration(self.tree, element, self.rules, prop)
        if found is None:
            return None
        decl = found.declaration
        return _Explicit(
            decl.raw_value,
            decl.resolved_value,
            ColorSource.STYLESHEET,
            found.selector,
            shorthand=decl.property == "background",
        )

    def _typography(self, element: ElementNode) -> tuple[str | None, str | None]:
        size = element.inline.font_size
        weight = element.inline.font_weight
        if self.utilities is not None:
            size = size or self.utilities.font_size(element.classes)
            weight = weight or self.utilities.font_weight(element.classes)
        if not size:
            found = find_best_declaration(self.tree, element, self.rules, "font-size")
            size = found.declaration.resolved_value if found else None
        if not weight:
            found = find_best_declaration(self.tree, element, self.rules, "font-weight")
            weight = found.declaration.resolved_value if found else None

        heading = HEADING_DEFAULTS.get(element.tag_name)
        if heading is not None:
            size = size or heading[0]
            weight = weight or heading[1]
        if size:
            size = self._resolve(size)
        if weight:
            weight = self._resolve(weight)
        return size, weight

    # ------------------------------------------------------------------
    # Backgrounds
    # ------------------------------------------------------------------

    def _flatten(self, info: ColorInfo, behind: ColorInfo) -> ColorInfo:
        """Composite a translucent *info* onto the opaque *behind* surface."""
        if info.rgba is None or info.rgba.is_opaque:
            return info
        if behind.rgba is None:
            return ColorInfo(info.original, None, info.source, info.selector, authored=info.rgba)
        return ColorInfo(
            info.original, composite(info.rgba, behind.rgba), info.source, info.selector, authored=info.rgba
        )

    def _background(self, element: ElementNode, explicit: _Explicit | None) -> ColorInfo:
        if explicit is None:
            return self._surface_behind(element)
        info = ColorInfo(
            explicit.original, _materialize(explicit, background=True), explicit.source, explicit.selector
        )
        if info.rgba is None or info.rgba.is_opaque:
            return info
        return self._flatten(info, self._surface_behind(element))

    def _surface_behind(self, element: ElementNode) -> ColorInfo:
        """The opaque surface an element's own background is painted on."""
        if element.parent in self._surfaces:
            return self._surfaces[element.parent]

        surface: ColorInfo | None = None
        parent = self.tree.parent_of(element)
        if parent is not None:
            explicit = self._explicit(parent, "background-color")
            if explicit is not None:
                label = parent.tag_name if explicit.source is ColorSource.INLINE else explicit.selector
                info = ColorInfo(
                    explicit.original,
                    _materialize(explicit, background=True),
                    explicit.source,
                    f"inherited:{label}",
                )
                surface = self._flatten(info, self._surface_behind(parent))
            else:
                surface = self._surface_behind(parent)
        else:
            surface = self._page_background()

        self._surfaces[element.parent] = surface
        return surface

    def _page_background(self) -> ColorInfo:
        found = find_root_background(self.rules)
        if found is None:
            return DEFAULT_BACKGROUND
        decl = found.declaration
        explicit = _Explicit(
            decl.raw_value,
            decl.resolved_value,
            ColorSource.STYLESHEET,
            found.selector,
            shorthand=decl.property == "background",
        )
        info = ColorInfo(
            decl.raw_value,
            _materialize(explicit, background=True),
            ColorSource.STYLESHEET,
            f"inherited:{found.selector}",
        )
        return self._flatten(info, DEFAULT_BACKGROUND)

    # ------------------------------------------------------------------
    # Foreground
    # ------------------------------------------------------------------

    def _foreground(self, explicit: _Explicit | None, background: ColorInfo) -> ColorInfo:
        if explicit is None:
            return DEFAULT_FOREGROUND
        info = ColorInfo(
            explicit.original, _materialize(explicit, background=False), explicit.source, explicit.selector
        )
        if info.rgba is None or background.rgba is None or info.rgba.is_opaque:
            return info
        return ColorInfo(
            info.original,
            composite(info.rgba, background.rgba),
            info.source,
            info.selector,
            authored=info.rgba,
        )


def analyze_elements(
    tree: ElementTree,
    rules: Sequence[StyleRule],
    custom_properties: Mapping[str, str] | None = None,
    utilities: UtilityResolver | None = None,
) -> list[ContrastPair]:
    """Assemble one :class:`ContrastPair` per eligible text element.

    Elements without text, ignored elements, and elements with neither an
    explicit foreground nor an explicit background produce no pair.
    """
    return PairEngine(tree, rules, custom_properties, utilities).run()
