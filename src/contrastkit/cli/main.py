"""contrastkit CLI entry point: Click group with subcommands."""

import logging

import click

from contrastkit import __version__

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__, prog_name="contrastkit")
@click.option("-v", "--verbose", count=True, help="Log progress (-v) or debug detail (-vv).")
def cli(verbose: int) -> None:
    """contrastkit - check text/background contrast in component markup."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG if verbose > 1 else logging.INFO, format=_LOG_FORMAT)


# Import and register subcommands
from contrastkit.cli.check import check  # noqa: E402
from contrastkit.cli.parse_color import parse_color_command  # noqa: E402

cli.add_command(check)
cli.add_command(parse_color_command)
