"""GitHub Actions workflow-command annotations, one per failing result."""

from __future__ import annotations

import os
from typing import Sequence

from contrastkit.model.pair import ContrastResult, FileAnalysis
from contrastkit.report.summary import is_failing
from contrastkit.report.text import format_ratio


def _relative(path: str, root: str | None) -> str:
    try:
        return os.path.relpath(path, root or os.getcwd())
    except ValueError:
        # Different drive on Windows.
        return path


def annotation(result: ContrastResult, root: str | None = None) -> str:
    large = result.verdict.large_text
    if result.meets_aa:
        severity = "warning"
        requirement = f"AAA (requires {'4.5:1' if large else '7:1'})"
    else:
        severity = "error"
        requirement = f"AA (requires {'3:1' if large else '4.5:1'})"
    message = (
        f"Contrast {format_ratio(result.ratio)} fails {requirement}: "
        f"{result.foreground.original} on {result.background.original} "
        f"({result.foreground.selector})"
    )
    position = result.element.position
    return (
        f"::{severity} file={_relative(result.file_path, root)},"
        f"line={position.line},col={position.column}::{message}"
    )


def render_github(
    analyses: Sequence[FileAnalysis], level: str = "aa", root: str | None = None
) -> str:
    lines = [
        annotation(result, root)
        for analysis in analyses
        for result in analysis.results
        if is_failing(result, level)
    ]
    return "\n".join(lines) + ("\n" if lines else "")
