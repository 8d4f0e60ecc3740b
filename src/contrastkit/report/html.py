"""Standalone HTML dashboard, rendered from a Jinja2 template."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from contrastkit.contrast import AA_LARGE, AA_NORMAL, AAA_LARGE, AAA_NORMAL
from contrastkit.model.pair import FileAnalysis
from contrastkit.report.json_report import analysis_to_dict
from contrastkit.report.summary import RunSummary
from contrastkit.report.text import format_ratio

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html"


@lru_cache(maxsize=None)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["ratio"] = format_ratio
    return env


def _required(large: bool, level: str) -> float:
    if level == "aaa":
        return AAA_LARGE if large else AAA_NORMAL
    return AA_LARGE if large else AA_NORMAL


def _file_context(analysis: FileAnalysis, level: str) -> dict[str, Any]:
    data = analysis_to_dict(analysis)
    for result in data["results"]:
        result["required"] = _required(result["large_text"], level)
        result["failing"] = not (result["meets_aaa"] if level == "aaa" else result["meets_aa"])
    data["failing"] = sum(1 for r in data["results"] if r["failing"])
    return data


def render_html(analyses: Sequence[FileAnalysis], level: str = "aa") -> str:
    """Render every result, failing ones first per file, as one HTML page."""
    files = [_file_context(a, level) for a in analyses]
    for file in files:
        file["results"].sort(key=lambda r: not r["failing"])
    return _environment().get_template(TEMPLATE_NAME).render(
        level=level.upper(),
        summary=RunSummary.of(analyses, level),
        files=files,
    )
