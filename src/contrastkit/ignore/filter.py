"""Post-filter for evaluated pairs: ignored colors, color pairs and selectors."""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from contrastkit.color import parse_color
from contrastkit.model.color import RgbaColor
from contrastkit.model.element import ElementNode
from contrastkit.model.pair import ContrastPair

__all__ = ["IgnoreConfig", "IgnoreFilter"]

_TAG_PATTERN_RE = re.compile(r"[a-zA-Z*][-a-zA-Z0-9*]*")


@dataclass(frozen=True)
class IgnoreConfig:
    """What to leave out of the final results.

    Attributes:
        colors: Colors that exclude a pair when either side resolves to one.
        pairs: Exact ``(foreground, background)`` combinations to exclude.
        selectors: ``tag``, ``.class`` or ``#id`` patterns; ``*`` matches
            any run of characters.
    """

    colors: tuple[str, ...] = ()
    pairs: tuple[tuple[str, str], ...] = ()
    selectors: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (self.colors or self.pairs or self.selectors)


ElementMatcher = Callable[[ElementNode], bool]
ColorKey = tuple[int, int, int, float]


def _key(color: RgbaColor | None) -> ColorKey | None:
    return None if color is None else (color.r, color.g, color.b, color.alpha)


def _selector_matcher(pattern: str) -> ElementMatcher:
    pattern = pattern.strip()
    if pattern.startswith("#"):
        ident = pattern[1:]
        return lambda e: e.id is not None and fnmatch.fnmatchcase(e.id, ident)
    if pattern.startswith("."):
        name = pattern[1:]
        return lambda e: any(fnmatch.fnmatchcase(cls, name) for cls in e.classes)
    if _TAG_PATTERN_RE.fullmatch(pattern):
        tag = pattern.lower()
        return lambda e: fnmatch.fnmatchcase(e.tag_name, tag)
    return lambda e: False


class IgnoreFilter:
    """Compiled form of an :class:`IgnoreConfig`.

    Colors are compared after parsing, alpha included, so ``#fff`` and
    ``white`` ignore the same pairs. Entries that do not parse are dropped.
    """

    def __init__(self, config: IgnoreConfig | None = None) -> None:
        config = config or IgnoreConfig()
        self.colors: set[ColorKey] = {
            key for key in (_key(parse_color(raw)) for raw in config.colors) if key is not None
        }
        self.pairs: set[tuple[ColorKey, ColorKey]] = set()
        for fg_text, bg_text in config.pairs:
            fg, bg = _key(parse_color(fg_text)), _key(parse_color(bg_text))
            if fg is not None and bg is not None:
                self.pairs.add((fg, bg))
        self.matchers: list[ElementMatcher] = [_selector_matcher(s) for s in config.selectors]

    def __bool__(self) -> bool:
        return bool(self.colors or self.pairs or self.matchers)

    def should_ignore(self, pair: ContrastPair) -> bool:
        """Match colors both as displayed and as written, alpha included."""
        fgs = [_key(c) for c in pair.foreground.candidates]
        bgs = [_key(c) for c in pair.background.candidates]
        if any(key in self.colors for key in fgs + bgs):
            return True
        if any((fg, bg) in self.pairs for fg in fgs for bg in bgs):
            return True
        return any(matcher(pair.element) for matcher in self.matchers)

    def split(self, pairs: Iterable[ContrastPair]) -> tuple[list[ContrastPair], list[ContrastPair]]:
        """Partition *pairs* into (kept, ignored), preserving order."""
        kept: list[ContrastPair] = []
        ignored: list[ContrastPair] = []
        for pair in pairs:
            (ignored if self.should_ignore(pair) else kept).append(pair)
        return kept, ignored

    def apply(self, pairs: Sequence[ContrastPair]) -> list[ContrastPair]:
        return self.split(pairs)[0]
