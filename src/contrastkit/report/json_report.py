"""Machine-readable JSON report."""

from __future__ import annotations

import json
from typing import Any, Sequence

from contrastkit.color import to_hex
from contrastkit.model.diagnostic import AnalysisError
from contrastkit.model.element import ElementNode
from contrastkit.model.pair import ColorInfo, ContrastResult, FileAnalysis
from contrastkit.report.summary import RunSummary


def _element(element: ElementNode) -> dict[str, Any]:
    return {
        "tag": element.tag_name,
        "label": element.label,
        "line": element.position.line,
        "column": element.position.column,
    }


def _color(info: ColorInfo) -> dict[str, Any]:
    return {
        "original": info.original,
        "hex": to_hex(info.rgba) if info.rgba is not None else None,
        "source": info.source.value,
        "selector": info.selector,
    }


def result_to_dict(result: ContrastResult) -> dict[str, Any]:
    return {
        "element": _element(result.element),
        "foreground": _color(result.foreground),
        "background": _color(result.background),
        "ratio": round(result.ratio, 2),
        "meets_aa": result.meets_aa,
        "meets_aaa": result.meets_aaa,
        "level": result.level.value,
        "large_text": result.verdict.large_text,
        "font_size_px": result.pair.font_size_px,
        "font_weight": result.pair.font_weight,
    }


def error_to_dict(error: AnalysisError) -> dict[str, Any]:
    data: dict[str, Any] = {"kind": error.kind.value, "message": error.message}
    if error.element is not None:
        data["element"] = _element(error.element)
    return data


def analysis_to_dict(analysis: FileAnalysis) -> dict[str, Any]:
    stats = analysis.stats
    return {
        "file": analysis.file_path,
        "results": [result_to_dict(r) for r in analysis.results],
        "errors": [error_to_dict(e) for e in analysis.errors],
        "stats": {
            "elements_analyzed": stats.elements_analyzed,
            "pairs_checked": stats.pairs_checked,
            "ignored": stats.ignored,
            "passing": stats.passing,
            "aa_failing": stats.aa_failing,
            "aaa_only_failing": stats.aaa_only_failing,
            "unresolvable": stats.unresolvable,
        },
    }


def render_json(analyses: Sequence[FileAnalysis], level: str = "aa") -> str:
    summary = RunSummary.of(analyses, level)
    payload = {
        "level": level,
        "files": [analysis_to_dict(a) for a in analyses],
        "summary": {
            "files": summary.files,
            "pairs_checked": summary.pairs_checked,
            "ignored": summary.ignored,
            "passing": summary.passing,
            "failing": summary.failing,
            "warnings": summary.warnings,
        },
    }
    return json.dumps(payload, indent=2)
