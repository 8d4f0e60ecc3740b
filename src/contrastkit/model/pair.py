"""Pair model: resolved colors, contrast pairs and their evaluated results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from contrastkit.model.color import RgbaColor
from contrastkit.model.diagnostic import AnalysisError
from contrastkit.model.element import ElementNode


class ColorSource(Enum):
    """Where a resolved color came from."""

    INLINE = "inline"
    STYLESHEET = "stylesheet"
    DEFAULT = "default"


class Level(Enum):
    """Tri-state WCAG verdict for one pair."""

    PASS = "pass"
    AAA_ONLY_FAIL = "aaa-only-fail"
    AA_FAIL = "aa-fail"


@dataclass(frozen=True)
class ColorInfo:
    """One side of a contrast pair.

    Attributes:
        original: The text the color was resolved from (value, class name,
            or an "(assumed)" marker for structural defaults).
        rgba: The materialized color, or None when the value could not be
            resolved.
        source: Which tier of the priority chain produced the color.
        selector: Label of the rule, class or marker that supplied it;
            inherited backgrounds are prefixed with ``inherited:``.
        authored: The color as written, alpha included, when ``rgba`` is
            the result of compositing it onto the surface behind.
    """

    original: str
    rgba: RgbaColor | None
    source: ColorSource
    selector: str
    authored: RgbaColor | None = None

    @property
    def resolved(self) -> bool:
        return self.rgba is not None

    @property
    def candidates(self) -> tuple[RgbaColor, ...]:
        """Every known form of this color: the effective one, then as written."""
        return tuple(c for c in (self.rgba, self.authored) if c is not None)


@dataclass(frozen=True)
class ContrastPair:
    """The unit the contrast evaluator consumes: one text element's colors."""

    element: ElementNode
    foreground: ColorInfo
    background: ColorInfo
    font_size_px: float | None = None
    font_weight: int | None = None

    @property
    def resolved(self) -> bool:
        return self.foreground.resolved and self.background.resolved


@dataclass(frozen=True)
class Verdict:
    """Outcome of evaluating one pair against the WCAG thresholds."""

    ratio: float
    meets_aa: bool
    meets_aaa: bool
    level: Level
    large_text: bool


@dataclass(frozen=True)
class ContrastResult:
    """An evaluated pair tied back to the file it came from."""

    file_path: str
    pair: ContrastPair
    verdict: Verdict

    @property
    def element(self) -> ElementNode:
        return self.pair.element

    @property
    def foreground(self) -> ColorInfo:
        return self.pair.foreground

    @property
    def background(self) -> ColorInfo:
        return self.pair.background

    @property
    def ratio(self) -> float:
        return self.verdict.ratio

    @property
    def meets_aa(self) -> bool:
        return self.verdict.meets_aa

    @property
    def meets_aaa(self) -> bool:
        return self.verdict.meets_aaa

    @property
    def level(self) -> Level:
        return self.verdict.level


@dataclass(frozen=True)
class FileStats:
    """Per-file counters.

    ``pairs_checked`` counts every evaluated pair before the ignore filter;
    the pass/fail counters describe the filtered results only.
    """

    elements_analyzed: int = 0
    pairs_checked: int = 0
    ignored: int = 0
    passing: int = 0
    aa_failing: int = 0
    aaa_only_failing: int = 0
    unresolvable: int = 0


@dataclass(frozen=True)
class FileAnalysis:
    """Everything one file produced: filtered results, diagnostics and counters."""

    file_path: str
    results: tuple[ContrastResult, ...] = ()
    errors: tuple[AnalysisError, ...] = ()
    stats: FileStats = field(default_factory=FileStats)

    @property
    def failures(self) -> tuple[ContrastResult, ...]:
        return tuple(r for r in self.results if not r.meets_aa)

    def failing(self, level: str = "aa") -> tuple[ContrastResult, ...]:
        """Results below *level* (``"aa"`` or ``"aaa"``)."""
        if level == "aaa":
            return tuple(r for r in self.results if not r.meets_aaa)
        return self.failures
