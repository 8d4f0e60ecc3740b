"""Human-readable report, styled with click for terminals."""

from __future__ import annotations

from typing import Any, Sequence

import click

from contrastkit.model.diagnostic import AnalysisError
from contrastkit.model.pair import ContrastResult, FileAnalysis
from contrastkit.report.summary import RunSummary, is_failing


def format_ratio(ratio: float) -> str:
    return f"{ratio:.1f}:1"


def _requirement(large: bool, aaa: bool) -> str:
    if aaa:
        return "4.5:1" if large else "7:1"
    return "3:1" if large else "4.5:1"


def format_result(result: ContrastResult, color: bool = True) -> str:
    def style(text: str, **kwargs: Any) -> str:
        return click.style(text, **kwargs) if color else text

    if result.meets_aaa:
        tag = style(" PASS ", fg="green", bold=True)
        wcag = style("AA ok  AAA ok", fg="green")
    elif result.meets_aa:
        tag = style(" AA   ", fg="yellow", bold=True)
        wcag = style("AA ok  AAA fails", fg="yellow")
    else:
        tag = style(" FAIL ", fg="red", bold=True)
        wcag = style(f"AA requires {_requirement(result.verdict.large_text, aaa=False)}", fg="red")

    ratio = style(format_ratio(result.ratio), fg="green" if result.meets_aa else "red")
    selector = style(result.foreground.selector, dim=True)
    position = style(f"L{result.element.position.line}", dim=True)
    colors = f"{result.foreground.original} {style('on', dim=True)} {result.background.original}"
    large = style(" [large]", dim=True) if result.verdict.large_text else ""
    return f"  {tag} {selector}  {position}  {colors}  ->  {ratio}  ({wcag}){large}"


def format_error(error: AnalysisError, color: bool = True) -> str:
    tag = click.style(" WARN ", fg="yellow", bold=True) if color else " WARN "
    position = f"L{error.element.position.line}" if error.element is not None else ""
    if color and position:
        position = click.style(position, dim=True)
    return f"  {tag} {position}  {error.message}"


def render_text(
    analyses: Sequence[FileAnalysis],
    level: str = "aa",
    verbose: bool = False,
    color: bool = True,
) -> str:
    """Render failing results (every result when *verbose*) and a summary."""
    lines: list[str] = [""]
    for analysis in analyses:
        lines.append(click.style(analysis.file_path, fg="cyan", bold=True) if color else analysis.file_path)
        for result in analysis.results:
            if verbose or is_failing(result, level):
                lines.append(format_result(result, color))
        for error in analysis.errors:
            lines.append(format_error(error, color))
        if not analysis.results and not analysis.errors:
            lines.append("  No color pairs to analyze")
        lines.append("")

    summary = RunSummary.of(analyses, level)
    lines.append("Summary:")
    lines.append(f"  Files analyzed: {summary.files}")
    lines.append(f"  Color pairs checked: {summary.pairs_checked}")
    if summary.ignored:
        lines.append(f"  Ignored: {summary.ignored}")
    if summary.failing:
        counts = f"  Passing: {summary.passing} | Failing: {summary.failing}"
        if summary.warnings:
            counts += f" | Warnings: {summary.warnings}"
        lines.append(counts)
    elif summary.pairs_checked:
        lines.append(f"  All {summary.passing} pairs pass {level.upper()}!")
    if summary.warnings and not summary.failing:
        lines.append(f"  Warnings: {summary.warnings}")
    return "\n".join(lines) + "\n"
