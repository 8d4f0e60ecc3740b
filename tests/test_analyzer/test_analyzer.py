"""End-to-end tests for the per-file analyzer."""

import json
from pathlib import Path

import pytest

from contrastkit.analyzer import Analyzer, analyze_file, discover_files
from contrastkit.config import ContrastConfig
from contrastkit.errors import ConfigError
from contrastkit.ignore import IgnoreConfig
from contrastkit.model.color import RgbaColor
from contrastkit.model.diagnostic import ErrorKind

PAGE = """<p class="muted">Low</p>
<p class="ok">High</p>
<style>
  .muted { color: #999; }
  .ok { color: #000; }
</style>
"""


# ---------------------------------------------------------------------------
# Single documents
# ---------------------------------------------------------------------------


class TestAnalyzeSource:
    def test_stats(self) -> None:
        analysis = Analyzer().analyze_source(PAGE, "page.html")
        stats = analysis.stats
        assert stats.elements_analyzed == 2
        assert stats.pairs_checked == 2
        assert stats.passing == 1
        assert stats.aa_failing == 1
        assert stats.unresolvable == 0
        assert [r.element.classes for r in analysis.failures] == [("muted",)]

    def test_results_carry_the_file_path(self) -> None:
        analysis = Analyzer().analyze_source(PAGE, "page.html")
        assert {r.file_path for r in analysis.results} == {"page.html"}

    def test_parse_error(self) -> None:
        analysis = Analyzer().analyze_source("---\nconst a = 1;\n<p>x</p>", "broken.astro")
        assert analysis.results == ()
        (error,) = analysis.errors
        assert error.kind is ErrorKind.PARSE_ERROR
        assert error.message.startswith("Failed to parse file")

    def test_unresolvable_color(self) -> None:
        analysis = Analyzer().analyze_source('<p style="color: var(--nope)">x</p>')
        (error,) = analysis.errors
        assert error.kind is ErrorKind.COLOR_RESOLVE_ERROR
        assert "fg=var(--nope)" in error.message
        assert analysis.stats.unresolvable == 1
        assert analysis.stats.pairs_checked == 0

    def test_ignored_pairs_are_counted(self) -> None:
        config = ContrastConfig(ignore=IgnoreConfig(selectors=(".muted",)))
        analysis = Analyzer(config).analyze_source(PAGE)
        assert len(analysis.results) == 1
        assert analysis.stats.pairs_checked == 2
        assert analysis.stats.ignored == 1
        assert analysis.stats.aa_failing == 0

    def test_utility_classes(self) -> None:
        source = '<p class="text-white bg-black">x</p>'
        (result,) = Analyzer().analyze_source(source).results
        assert result.foreground.selector == "text-white"
        assert result.meets_aaa

        disabled = Analyzer(ContrastConfig(utility_classes=False)).analyze_source(source)
        assert disabled.results == ()
        assert disabled.stats.pairs_checked == 0


# ---------------------------------------------------------------------------
# External stylesheets and tokens
# ---------------------------------------------------------------------------


class TestExternalSources:
    def test_linked_stylesheet(self, tmp_path: Path) -> None:
        (tmp_path / "site.css").write_text(".brand { color: #777; }")
        page = tmp_path / "index.html"
        page.write_text('<link rel="stylesheet" href="site.css"><p class="brand">Hi</p>')

        (result,) = Analyzer().analyze_file(page).results
        assert result.foreground.selector == ".brand"
        assert not result.meets_aa

    def test_import_cycle(self, tmp_path: Path) -> None:
        (tmp_path / "a.css").write_text("@import 'b.css';\n.a { color: #000; }")
        (tmp_path / "b.css").write_text("@import 'a.css';\n.b { color: #fff; background: #000; }")
        page = tmp_path / "index.html"
        page.write_text('<style>@import "a.css";</style><p class="b">x</p>')

        (result,) = Analyzer().analyze_file(page).results
        assert result.ratio == pytest.approx(21.0)

    def test_missing_linked_stylesheet_is_skipped(self, tmp_path: Path) -> None:
        page = tmp_path / "index.html"
        page.write_text('<link rel="stylesheet" href="gone.css"><p style="color:#000">x</p>')
        analysis = Analyzer().analyze_file(page)
        assert analysis.errors == ()
        assert len(analysis.results) == 1

    def test_configured_css_file(self, tmp_path: Path) -> None:
        css = tmp_path / "extra.css"
        css.write_text(".note { color: #fff; background: #000 }")
        analyzer = Analyzer(ContrastConfig(css_files=(str(css),)))
        (result,) = analyzer.analyze_source('<p class="note">x</p>').results
        assert result.background.selector == ".note"

    def test_missing_configured_css_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            Analyzer(ContrastConfig(css_files=(str(tmp_path / "missing.css"),)))

    def test_document_properties_override_tokens(self, tmp_path: Path) -> None:
        tokens = tmp_path / "tokens.json"
        tokens.write_text(json.dumps({"text": {"$type": "color", "$value": "#000000"}}))
        analyzer = Analyzer(ContrastConfig(token_files=(str(tokens),)))

        (from_tokens,) = analyzer.analyze_source("<style>p{color:var(--text)}</style><p>x</p>").results
        assert from_tokens.foreground.rgba == RgbaColor(0, 0, 0)

        overridden = "<style>:root{--text:#ffffff} p{color:var(--text)}</style><p>x</p>"
        (result,) = analyzer.analyze_source(overridden).results
        assert result.foreground.rgba == RgbaColor(255, 255, 255)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestFiles:
    def test_missing_file(self, tmp_path: Path) -> None:
        analysis = analyze_file(tmp_path / "nope.html")
        (error,) = analysis.errors
        assert error.kind is ErrorKind.PARSE_ERROR

    def test_concurrent_results_keep_order(self, tmp_path: Path) -> None:
        paths = []
        for name in ("c", "a", "b", "d"):
            path = tmp_path / f"{name}.html"
            path.write_text('<p style="color:#000">x</p>')
            paths.append(path)
        analyses = Analyzer(ContrastConfig(max_workers=4)).analyze_files(paths)
        assert [a.file_path for a in analyses] == [str(p) for p in paths]

    def test_discover_files(self, tmp_path: Path) -> None:
        (tmp_path / "sub").mkdir()
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "a.html").write_text("")
        (tmp_path / "sub" / "b.astro").write_text("")
        (tmp_path / "node_modules" / "c.html").write_text("")
        (tmp_path / "notes.txt").write_text("")

        found = discover_files([tmp_path, tmp_path / "notes.txt", tmp_path / "missing"], (".html", ".astro"))
        assert found == [tmp_path / "a.html", tmp_path / "sub" / "b.astro", tmp_path / "notes.txt"]

    def test_discover_files_drops_duplicates(self, tmp_path: Path) -> None:
        page = tmp_path / "a.html"
        page.write_text("")
        assert discover_files([tmp_path, page], (".html",)) == [page]


# ---------------------------------------------------------------------------
# Undecodable input
# ---------------------------------------------------------------------------


class TestUndecodableFiles:
    def test_bad_markup_does_not_stop_other_files(self, tmp_path: Path) -> None:
        good = tmp_path / "good.html"
        good.write_text('<p style="color:#000">x</p>')
        bad = tmp_path / "bad.html"
        bad.write_bytes(b'<p style="color:#000">\xff\xfe</p>')

        good_analysis, bad_analysis = Analyzer(ContrastConfig(max_workers=2)).analyze_files([good, bad])
        assert len(good_analysis.results) == 1
        (error,) = bad_analysis.errors
        assert error.kind is ErrorKind.PARSE_ERROR

    def test_bad_linked_stylesheet_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "s.css").write_bytes(b".x { content: '\xe9'; color: #fff }")
        page = tmp_path / "index.html"
        page.write_text('<link rel="stylesheet" href="s.css"><p style="color:#000">x</p>')
        analysis = Analyzer().analyze_file(page)
        assert analysis.errors == ()
        assert len(analysis.results) == 1

    def test_bad_configured_css_file(self, tmp_path: Path) -> None:
        css = tmp_path / "extra.css"
        css.write_bytes(b"\xff\xfe.x{}")
        with pytest.raises(ConfigError):
            Analyzer(ContrastConfig(css_files=(str(css),)))


class TestTranslucentAndRootColors:
    def test_ignore_color_matches_the_authored_alpha(self) -> None:
        config = ContrastConfig(ignore=IgnoreConfig(colors=("rgba(0, 0, 0, 0.5)",)))
        analysis = Analyzer(config).analyze_source('<p style="color: rgba(0,0,0,0.5)">x</p>')
        assert analysis.results == ()
        assert analysis.stats.ignored == 1

    def test_first_root_background_wins(self) -> None:
        source = "<style>:root{background:#000} body{background:#fff}</style><p style='color:#fff'>x</p>"
        (result,) = Analyzer().analyze_source(source).results
        assert result.background.rgba == RgbaColor(0, 0, 0)
        assert result.background.selector == "inherited::root"
