"""Run-level totals shared by the renderers and the CLI exit code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from contrastkit.model.pair import ContrastResult, FileAnalysis


def is_failing(result: ContrastResult, level: str = "aa") -> bool:
    return not (result.meets_aaa if level == "aaa" else result.meets_aa)


@dataclass(frozen=True)
class RunSummary:
    files: int = 0
    pairs_checked: int = 0
    ignored: int = 0
    passing: int = 0
    failing: int = 0
    warnings: int = 0

    @classmethod
    def of(cls, analyses: Sequence[FileAnalysis], level: str = "aa") -> RunSummary:
        results = [r for analysis in analyses for r in analysis.results]
        failing = sum(1 for r in results if is_failing(r, level))
        return cls(
            files=len(analyses),
            pairs_checked=sum(a.stats.pairs_checked for a in analyses),
            ignored=sum(a.stats.ignored for a in analyses),
            passing=len(results) - failing,
            failing=failing,
            warnings=sum(len(a.errors) for a in analyses),
        )
