"""Tests for the contrastkit CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from contrastkit import __version__
from contrastkit.cli.main import cli

FAILING = '<p class="muted">Low</p><style>.muted { color: #999; }</style>'
AA_ONLY = '<p class="mid">Mid</p><style>.mid { color: #666; }</style>'


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _page(directory: Path, source: str, name: str = "page.html") -> Path:
    path = directory / name
    path.write_text(source)
    return path


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


class TestCheck:
    def test_failing_page_exits_1(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", str(page)])
        assert result.exit_code == 1
        assert "FAIL" in result.output
        assert "Summary:" in result.output

    def test_passing_page_exits_0(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, AA_ONLY)
        result = runner.invoke(cli, ["check", str(page)])
        assert result.exit_code == 0
        assert "All 1 pairs pass AA!" in result.output

    def test_level_aaa(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, AA_ONLY)
        result = runner.invoke(cli, ["check", "--level", "aaa", str(page)])
        assert result.exit_code == 1

    def test_json_format(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--format", "json", str(page)])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["summary"]["failing"] == 1

    def test_github_format(self, runner: CliRunner, workdir: Path) -> None:
        _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--format", "github", "."])
        assert result.exit_code == 1
        assert result.stdout.startswith("::error file=page.html,line=1,col=1::")

    def test_ignore_selector(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--ignore-selector", ".muted", str(page)])
        assert result.exit_code == 0
        assert "Ignored: 1" in result.output

    def test_ignore_color(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--ignore-color", "#999999", str(page)])
        assert result.exit_code == 0

    def test_default_config_file(self, runner: CliRunner, workdir: Path) -> None:
        (workdir / "contrastkit.json").write_text(json.dumps({"ignore": {"selectors": [".muted"]}}))
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", str(page)])
        assert result.exit_code == 0

    def test_explicit_config_file(self, runner: CliRunner, workdir: Path) -> None:
        config = workdir / "strict.json"
        config.write_text(json.dumps({"level": "aaa"}))
        page = _page(workdir, AA_ONLY)
        result = runner.invoke(cli, ["check", "--config", str(config), str(page)])
        assert result.exit_code == 1

    def test_css_option(self, runner: CliRunner, workdir: Path) -> None:
        (workdir / "extra.css").write_text(".muted { color: #000 !important; }")
        page = _page(workdir, '<p class="muted">Low</p>')
        result = runner.invoke(cli, ["check", "--css", "extra.css", str(page)])
        assert result.exit_code == 0

    def test_bad_config_exits_2(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--css", "missing.css", str(page)])
        assert result.exit_code == 2
        assert "Error:" in result.output

    def test_no_files(self, runner: CliRunner, workdir: Path) -> None:
        (workdir / "empty").mkdir()
        result = runner.invoke(cli, ["check", "empty"])
        assert result.exit_code == 0
        assert "No files to analyze" in result.output

    def test_missing_path_is_a_usage_error(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["check", "nope.html"])
        assert result.exit_code == 2

    def test_undecodable_token_file_exits_2(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        (workdir / "tokens.json").write_bytes(b'{"brand": "\xff"}')
        result = runner.invoke(cli, ["check", "--tokens", "tokens.json", str(page)])
        assert result.exit_code == 2
        assert "Cannot read token file" in result.output

    def test_html_format(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--format", "html", str(page)])
        assert result.exit_code == 1
        assert result.stdout.startswith("<!doctype html>")
        assert "p.muted" in result.stdout

    def test_output_file(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--format", "html", "-o", "report.html", str(page)])
        assert result.exit_code == 1
        assert "Report written to report.html" in result.output
        assert "p.muted" in (workdir / "report.html").read_text(encoding="utf-8")

    @pytest.mark.parametrize("pair", ["#999999,#ffffff", "rgb(153, 153, 153),white"])
    def test_ignore_pair(self, runner: CliRunner, workdir: Path, pair: str) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--ignore-pair", pair, str(page)])
        assert result.exit_code == 0

    def test_ignore_pair_is_ordered(self, runner: CliRunner, workdir: Path) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--ignore-pair", "#fff,#999", str(page)])
        assert result.exit_code == 1

    @pytest.mark.parametrize("pair", ["#999", "#999,", "#999,#fff,#000"])
    def test_malformed_ignore_pair(self, runner: CliRunner, workdir: Path, pair: str) -> None:
        page = _page(workdir, FAILING)
        result = runner.invoke(cli, ["check", "--ignore-pair", pair, str(page)])
        assert result.exit_code == 2
        assert "FOREGROUND,BACKGROUND" in result.output

    def test_watch_reruns_on_change(
        self, runner: CliRunner, workdir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        page = _page(workdir, FAILING)
        calls = []

        def fake_watch(paths, suffixes, rerun):
            calls.append(tuple(paths))
            _page(workdir, AA_ONLY)
            rerun()

        monkeypatch.setattr("contrastkit.cli.check.watch_paths", fake_watch)
        result = runner.invoke(cli, ["check", "--watch", str(page)])
        assert result.exit_code == 0
        assert calls == [(str(page),)]
        assert "Watching for changes" in result.output
        assert "FAIL" in result.output
        assert "All 1 pairs pass AA!" in result.output


# ---------------------------------------------------------------------------
# parse-color
# ---------------------------------------------------------------------------


class TestParseColor:
    def test_color_mix(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse-color", "color-mix(in srgb, red 75%, blue 25%)"])
        assert result.exit_code == 0
        assert result.output.strip() == "#bf0040  rgb(191, 0, 64)"

    def test_variables(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse-color", "--var", "brand=#ff0000", "var(--brand)"])
        assert result.exit_code == 0
        assert result.output.startswith("#ff0000")

    def test_unresolved_variable(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse-color", "var(--missing)"])
        assert result.exit_code == 1

    def test_not_a_color(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse-color", "banana"])
        assert result.exit_code == 1
        assert "Not a color" in result.output

    def test_malformed_variable(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["parse-color", "--var", "brand", "red"])
        assert result.exit_code == 2


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
