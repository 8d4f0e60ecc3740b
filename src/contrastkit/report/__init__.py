"""Renderers for analysis results."""

from contrastkit.report.github import annotation, render_github
from contrastkit.report.html import render_html
from contrastkit.report.json_report import analysis_to_dict, render_json, result_to_dict
from contrastkit.report.summary import RunSummary, is_failing
from contrastkit.report.text import format_error, format_ratio, format_result, render_text

FORMATS = ("text", "json", "github", "html")

__all__ = [
    "FORMATS",
    "RunSummary",
    "is_failing",
    "render_text",
    "render_json",
    "render_github",
    "render_html",
    "format_result",
    "format_error",
    "format_ratio",
    "annotation",
    "analysis_to_dict",
    "result_to_dict",
]
