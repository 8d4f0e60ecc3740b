"""CLI command: contrastkit parse-color -- resolve a single color value."""

from __future__ import annotations

import sys

import click

from contrastkit.color import parse_color, to_hex
from contrastkit.properties import resolve_custom_property


def _variable(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    properties: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}")
        name = name.strip()
        if not name.startswith("--"):
            name = f"--{name}"
        properties[name] = value.strip()
    return properties


@click.command("parse-color")
@click.argument("value")
@click.option(
    "--var",
    "variables",
    multiple=True,
    callback=_variable,
    help="Custom property as NAME=VALUE, repeatable",
)
def parse_color_command(value: str, variables: dict[str, str]) -> None:
    """Resolve VALUE (custom properties first) and print it as hex and rgb.

    Exits with code 1 when the value does not resolve to a color.
    """
    resolved = resolve_custom_property(value, variables)
    if resolved is None:
        click.echo(f"Unresolved custom property in {value!r}", err=True)
        sys.exit(1)

    color = parse_color(resolved)
    if color is None:
        click.echo(f"Not a color: {resolved!r}", err=True)
        sys.exit(1)

    click.echo(f"{to_hex(color)}  {color}")
