"""CLI command: stylescope resolve -- show how nested selectors flatten."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stylescope.errors import StylescopeError
from stylescope.selectors import SelectorResolver
from stylescope.sources import load_source
from stylescope.stylesheet import parse_stylesheet


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
def resolve(stylesheet: str) -> None:
    """List every rule of STYLESHEET with its resolved selectors.

    Each rule prints as ``start-end  selector  [at-rule context]`` followed
    by one ``->`` line per resolved selector.
    """
    path = Path(stylesheet)
    try:
        source = load_source(path)
        if source.syntax == "sass":
            click.echo("Error: indented .sass syntax is not supported", err=True)
            sys.exit(1)
        sheet = parse_stylesheet(source.text, name=path.name, syntax=source.syntax)
    except StylescopeError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    resolver = SelectorResolver()
    for rule in sheet.rules:
        context = f"  [{rule.at_rule_context}]" if rule.at_rule_context else ""
        click.echo(f"{rule.start_line}-{rule.end_line}  {rule.selector}{context}")
        for resolved in resolver.resolve(rule):
            click.echo(f"    -> {resolved.text}")

    for block in [*sheet.keyframes, *sheet.properties]:
        click.echo(f"{block.start_line}-{block.end_line}  @{block.name} {block.params}")

    click.echo()
    click.echo(f"Summary: {len(sheet.rules)} rule(s) in {path.name}")
    for rule, count in resolver.fan_out_warnings:
        click.echo(f"Warning: {rule.selector!r} expands to {count} selectors", err=True)
