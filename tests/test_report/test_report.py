"""Tests for the text, JSON, GitHub and HTML renderers."""

import json

import pytest

from contrastkit.analyzer import Analyzer
from contrastkit.report import RunSummary, format_ratio, render_github, render_html, render_json, render_text

PAGE = """<p class="muted">Low</p>
<p class="ok">High</p>
<p class="mid">Mid</p>
<style>
  .muted { color: #999; }
  .ok { color: #000; }
  .mid { color: #666; }
</style>
"""


@pytest.fixture(scope="module")
def analyses():
    return [Analyzer().analyze_source(PAGE, "page.html")]


class TestSummary:
    def test_aa(self, analyses) -> None:
        summary = RunSummary.of(analyses, "aa")
        assert (summary.files, summary.pairs_checked) == (1, 3)
        assert (summary.passing, summary.failing, summary.warnings) == (2, 1, 0)

    def test_aaa_counts_aa_only_passes_as_failing(self, analyses) -> None:
        summary = RunSummary.of(analyses, "aaa")
        assert (summary.passing, summary.failing) == (1, 2)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


class TestText:
    def test_failures_and_summary(self, analyses) -> None:
        output = render_text(analyses, "aa", color=False)
        assert "page.html" in output
        assert "FAIL" in output
        assert ".muted" in output
        assert ".ok" not in output
        assert "Summary:" in output
        assert "Files analyzed: 1" in output
        assert "Color pairs checked: 3" in output
        assert "Passing: 2 | Failing: 1" in output

    def test_verbose_lists_passing_pairs(self, analyses) -> None:
        output = render_text(analyses, "aa", verbose=True, color=False)
        assert "PASS" in output
        assert ".ok" in output

    def test_all_passing(self) -> None:
        analysis = Analyzer().analyze_source('<p style="color:#000">x</p>', "ok.html")
        assert "All 1 pairs pass AA!" in render_text([analysis], color=False)

    def test_empty_file(self) -> None:
        analysis = Analyzer().analyze_source("<div></div>", "empty.html")
        assert "No color pairs to analyze" in render_text([analysis], color=False)

    def test_warnings(self) -> None:
        analysis = Analyzer().analyze_source('<p style="color: var(--x)">x</p>', "w.html")
        output = render_text([analysis], color=False)
        assert "WARN" in output
        assert "Could not resolve color" in output

    def test_format_ratio(self) -> None:
        assert format_ratio(4.4999) == "4.5:1"
        assert format_ratio(21) == "21.0:1"


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


class TestJson:
    def test_payload(self, analyses) -> None:
        data = json.loads(render_json(analyses, "aa"))
        assert data["level"] == "aa"
        assert data["summary"]["failing"] == 1
        (file,) = data["files"]
        assert file["file"] == "page.html"
        assert file["stats"]["pairs_checked"] == 3
        first = file["results"][0]
        assert first["element"]["label"] == "p.muted"
        assert first["foreground"]["hex"] == "#999999"
        assert first["foreground"]["selector"] == ".muted"
        assert first["background"]["source"] == "default"
        assert first["ratio"] == pytest.approx(2.85, abs=0.01)
        assert first["meets_aa"] is False
        assert first["level"] == "aa-fail"


# ---------------------------------------------------------------------------
# GitHub
# ---------------------------------------------------------------------------


class TestGithub:
    def test_error_annotation(self, analyses) -> None:
        (line,) = render_github(analyses, "aa").splitlines()
        assert line.startswith("::error file=page.html,line=1,col=1::Contrast 2.8:1 fails AA (requires 4.5:1)")
        assert line.endswith("#999 on #ffffff (assumed) (.muted)")

    def test_aaa_adds_warnings(self, analyses) -> None:
        lines = render_github(analyses, "aaa").splitlines()
        assert len(lines) == 2
        assert lines[1].startswith("::warning file=page.html,line=3,col=1::")
        assert "fails AAA (requires 7:1)" in lines[1]

    def test_nothing_to_report(self) -> None:
        analysis = Analyzer().analyze_source('<p style="color:#000">x</p>', "ok.html")
        assert render_github([analysis]) == ""


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


class TestHtml:
    def test_page(self, analyses) -> None:
        output = render_html(analyses, "aa")
        assert output.startswith("<!doctype html>")
        assert "<title>Contrast report (AA)</title>" in output
        assert "page.html" in output
        assert "p.muted" in output
        assert "#999999" in output
        assert "4.5:1" in output
        assert output.count('class="failing"') == 1
        assert output.count('class="passing"') == 2

    def test_aaa_requirements(self, analyses) -> None:
        output = render_html(analyses, "aaa")
        assert "WCAG AAA" in output
        assert "7.0:1" in output
        assert output.count('class="failing"') == 2

    def test_failing_results_come_first(self) -> None:
        source = '<p class="ok">High</p><p class="muted">Low</p><style>.ok{color:#000}.muted{color:#999}</style>'
        output = render_html([Analyzer().analyze_source(source, "page.html")])
        assert output.index("p.muted") < output.index("p.ok")

    def test_values_are_escaped(self) -> None:
        analysis = Analyzer().analyze_source('<p style="color:#999">x</p>', "<b>page</b>.html")
        output = render_html([analysis])
        assert "&lt;b&gt;page&lt;/b&gt;.html" in output
        assert "<b>page</b>" not in output

    def test_empty_file(self) -> None:
        output = render_html([Analyzer().analyze_source("<p>Plain</p>", "plain.html")])
        assert "No color pairs to analyze" in output
