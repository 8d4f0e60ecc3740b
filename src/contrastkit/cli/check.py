"""CLI command: contrastkit check -- analyze markup files for contrast failures."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from contrastkit.analyzer import Analyzer, discover_files
from contrastkit.cli.watch import watch as watch_paths
from contrastkit.config import LEVELS, ContrastConfig, load_config
from contrastkit.errors import ContrastKitError, ValueSyntaxError
from contrastkit.ignore import IgnoreConfig
from contrastkit.model.pair import FileAnalysis
from contrastkit.report import FORMATS, RunSummary, render_github, render_html, render_json, render_text
from contrastkit.values import parse_value, serialize, split_arguments

DEFAULT_CONFIG_NAME = "contrastkit.json"


def _load_config(config_path: str | None) -> ContrastConfig:
    if config_path is not None:
        return load_config(config_path)
    default = Path.cwd() / DEFAULT_CONFIG_NAME
    if default.is_file():
        return load_config(default)
    return ContrastConfig()


def _color_pairs(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> tuple[tuple[str, str], ...]:
    """Split each ``FG,BG`` at its top-level comma, so ``rgb(0, 0, 0),#fff`` works."""
    pairs: list[tuple[str, str]] = []
    for item in values:
        try:
            parts = split_arguments(parse_value(item))
        except ValueSyntaxError:
            parts = []
        if len(parts) != 2 or not all(parts):
            raise click.BadParameter(f"expected FOREGROUND,BACKGROUND, got {item!r}")
        pairs.append((serialize(parts[0]), serialize(parts[1])))
    return tuple(pairs)


def _render(analyses: list[FileAnalysis], output_format: str, level: str, show_all: bool) -> str:
    if output_format == "json":
        return render_json(analyses, level) + "\n"
    if output_format == "github":
        return render_github(analyses, level)
    if output_format == "html":
        return render_html(analyses, level)
    return render_text(analyses, level, verbose=show_all)


def _run(
    config: ContrastConfig,
    paths: tuple[str, ...],
    output_format: str,
    output: str | None,
    show_all: bool,
) -> bool | None:
    """Analyze once and emit the report.

    Returns True when a result fails and None when nothing matched.
    """
    analyzer = Analyzer(config)
    files = discover_files(paths, config.include)
    if not files:
        click.echo("No files to analyze", err=True)
        return None

    analyses = analyzer.analyze_files(files)
    report = _render(analyses, output_format, config.level, show_all)
    if output is not None:
        Path(output).write_text(report, encoding="utf-8")
        click.echo(f"Report written to {output}", err=True)
    else:
        click.echo(report, nl=False)
    return bool(RunSummary.of(analyses, config.level).failing)


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"JSON config file (default: ./{DEFAULT_CONFIG_NAME} when present)",
)
@click.option("--css", "css_files", multiple=True, type=click.Path(), help="Extra CSS file, repeatable")
@click.option("--tokens", "token_files", multiple=True, type=click.Path(), help="Design-token file, repeatable")
@click.option("--ignore-color", multiple=True, help="Drop pairs using this color, repeatable")
@click.option(
    "--ignore-pair",
    multiple=True,
    callback=_color_pairs,
    help="Drop one FOREGROUND,BACKGROUND combination, repeatable",
)
@click.option("--ignore-selector", multiple=True, help="Drop pairs on matching elements (.class, #id, tag; * wildcard)")
@click.option("--format", "output_format", type=click.Choice(FORMATS), default="text", help="Report format")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Write the report to a file")
@click.option("--level", type=click.Choice(LEVELS), default=None, help="Level that must be met (default: aa)")
@click.option("--no-utilities", is_flag=True, help="Do not resolve utility classes")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Files analyzed in parallel")
@click.option("--all", "show_all", is_flag=True, help="List passing pairs too (text format)")
@click.option("--watch", is_flag=True, help="Re-run whenever a markup, CSS or token file changes")
def check(
    paths: tuple[str, ...],
    config_path: str | None,
    css_files: tuple[str, ...],
    token_files: tuple[str, ...],
    ignore_color: tuple[str, ...],
    ignore_pair: tuple[tuple[str, str], ...],
    ignore_selector: tuple[str, ...],
    output_format: str,
    output: str | None,
    level: str | None,
    no_utilities: bool,
    workers: int | None,
    show_all: bool,
    watch: bool,
) -> None:
    """Check the contrast of every text element under PATHS.

    Exits with code 1 when any pair fails the chosen level and code 2 when
    the configuration cannot be loaded.
    """
    try:
        base = _load_config(config_path)
        config = base.merged(
            css_files=base.css_files + css_files,
            token_files=base.token_files + token_files,
            ignore=IgnoreConfig(
                colors=base.ignore.colors + ignore_color,
                pairs=base.ignore.pairs + ignore_pair,
                selectors=base.ignore.selectors + ignore_selector,
            ),
            level=level,
            utility_classes=False if no_utilities else None,
            max_workers=workers,
        )
        failing = _run(config, paths, output_format, output, show_all)
    except ContrastKitError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if watch:

        def rerun() -> None:
            click.echo(click.style("\nChange detected, re-running...", dim=True), err=True)
            try:
                _run(config, paths, output_format, output, show_all)
            except ContrastKitError as exc:
                click.echo(f"Error: {exc}", err=True)

        click.echo("Watching for changes (Ctrl+C to stop)", err=True)
        watch_paths(paths, config.include, rerun)
        sys.exit(0)

    sys.exit(1 if failing else 0)
