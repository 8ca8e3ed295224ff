"""CLI command: stylescope specificity -- print selector specificity vectors."""

from __future__ import annotations

import click

from stylescope.selectors import calculate_specificity


@click.command()
@click.argument("selectors", nargs=-1, required=True)
def specificity(selectors: tuple[str, ...]) -> None:
    """Print the (inline,ids,classes,elements) specificity of each SELECTOR."""
    for selector in selectors:
        click.echo(f"{calculate_specificity(selector)}  {selector}")
