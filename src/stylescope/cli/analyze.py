"""CLI command: stylescope analyze -- find the CSS that styles one element."""

from __future__ import annotations

import json
import logging
import re
import sys
from pathlib import Path

import click

from stylescope.analysis import AnalysisCache, AnalysisReport, analyze_project
from stylescope.config import AnalysisConfig
from stylescope.errors import SourceFetchError, StylescopeError
from stylescope.html import extract_target, inline_styles, parse_html, stylesheet_order
from stylescope.sources import StylesheetSource, discover_stylesheets, fetch_html, is_url, load_source
from stylescope.stylesheet.format import format_css

log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _validate_patterns(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> tuple[str, ...]:
    for pattern in value:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise click.BadParameter(f"{pattern!r} is not a valid regex: {exc}") from exc
    return value


def _load_html(source: str) -> tuple[str, Path | None]:
    """Return the document text and the directory local links resolve against."""
    if is_url(source):
        return fetch_html(source), None
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8"), path.resolve().parent
    except OSError as exc:
        raise SourceFetchError(f"Could not read {path}: {exc}", location=source, cause=exc) from exc


def _stylesheet_paths(
    link_order: list[str], css_files: tuple[str, ...], project: str | None
) -> list[Path]:
    # Linked files first, then explicit --css files, then the project scan.
    paths: dict[str, Path] = {}
    for name in link_order:
        if name.startswith("<style"):
            continue
        if is_url(name) or name.startswith("//"):
            log.info("Skipping remote stylesheet %s", name)
            continue
        path = Path(name)
        if path.is_file():
            paths.setdefault(str(path), path)
        else:
            log.warning("Linked stylesheet %s does not exist", name)
    for css in css_files:
        path = Path(css).resolve()
        paths.setdefault(str(path), path)
    if project:
        for path in discover_stylesheets(project):
            path = path.resolve()
            paths.setdefault(str(path), path)
    return list(paths.values())


def _display_name(name: str) -> str:
    if name.startswith("<"):
        return name
    try:
        return str(Path(name).relative_to(Path.cwd()))
    except ValueError:
        return name


def _print_rule_text(text: str, is_minified: bool) -> None:
    for line in format_css(text, is_minified).splitlines():
        click.echo(f"      | {line}")


def _print_report(report: AnalysisReport, show_css: bool = False) -> None:
    click.echo(f"Target: {report.identity.summary}")
    click.echo(
        f"Stylesheets: {len(report.files)} scanned, {len(report.matched_files)} with matching rules"
    )

    for f in report.matched_files:
        click.echo()
        minified = " (minified)" if f.is_minified else ""
        click.echo(f"{_display_name(f.name)}{minified}")
        for m in f.matches:
            context = f"  [{m.at_rule_context}]" if m.at_rule_context else ""
            click.echo(f"  {m.specificity}  {m.selector}  lines {m.start_line}-{m.end_line}{context}")
            click.echo(f"      matched on: {', '.join(m.reasons)}")
            if show_css:
                _print_rule_text(m.rule.text, f.is_minified)
        for s in f.shadow_matches:
            click.echo(f"  shadow {'/'.join(s.kinds)}  {s.selector}  ({', '.join(s.reasons)})")
        for block in [*f.keyframes, *f.properties]:
            click.echo(f"  uses @{block.name} {block.params}  lines {block.start_line}-{block.end_line}")

    conflicts = [d for d in report.conflicts.values() if d.has_conflict]
    if conflicts:
        click.echo()
        click.echo("Conflicts:")
        for decision in conflicts:
            winner = decision.winner
            flag = " !important" if winner.important else ""
            click.echo(
                f"  {decision.property}: {winner.value}{flag}  "
                f"from {winner.selector} {winner.specificity} in {_display_name(winner.source)}"
            )
            for loser in decision.losers:
                click.echo(
                    f"      overrides {loser.value} from {loser.selector} "
                    f"{loser.specificity} in {_display_name(loser.source)}"
                )

    if report.ghosts.has_ghosts:
        click.echo()
        click.echo(
            f"Ghost classes ({len(report.ghosts.ghost_classes)} of "
            f"{report.ghosts.total_classes}): {' '.join(report.ghosts.ghost_classes)}"
        )

    if report.variables:
        click.echo()
        click.echo("Variables:")
        for usage in report.variables:
            if not usage.definitions:
                click.echo(f"  {usage.name}: not defined")
            for d in usage.definitions:
                click.echo(f"  {usage.name}: {d.value}  ({d.context} in {_display_name(d.source)})")

    if report.unlinked_files:
        click.echo()
        click.echo("Matching stylesheets the page does not link:")
        for name in report.unlinked_files:
            click.echo(f"  {_display_name(name)}")

    diagnostics = report.all_diagnostics
    if diagnostics:
        click.echo()
        for diag in diagnostics:
            click.echo(str(diag))


@click.command()
@click.argument("source")
@click.option("-s", "--selector", help="CSS selector of the target element.")
@click.option("-l", "--lines", "line_range", help="Line range of the target element, e.g. 45-80.")
@click.option(
    "--index", type=click.IntRange(min=0), default=0, show_default=True,
    help="Which match to use when the selector matches several elements.",
)
@click.option(
    "--css", "css_files", multiple=True, type=click.Path(exists=True, dir_okay=False),
    help="Extra stylesheet to scan (repeatable).",
)
@click.option(
    "--project", type=click.Path(exists=True, file_okay=False),
    help="Scan every stylesheet under this directory.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option("--workers", type=click.IntRange(min=1), default=1, show_default=True)
@click.option("--no-cache", is_flag=True, help="Disable the per-stylesheet result cache.")
@click.option("--skip-minified", is_flag=True, help="Skip *.min.css files and minified stylesheets.")
@click.option("--show-css", is_flag=True, help="Print the text of each matched rule.")
@click.option(
    "--ignore-pattern", "ignore_patterns", multiple=True, callback=_validate_patterns,
    help="Regex of class names never reported as ghost classes (repeatable).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def analyze(
    source: str,
    selector: str | None,
    line_range: str | None,
    index: int,
    css_files: tuple[str, ...],
    project: str | None,
    as_json: bool,
    workers: int,
    no_cache: bool,
    skip_minified: bool,
    show_css: bool,
    ignore_patterns: tuple[str, ...],
    verbose: bool,
) -> None:
    """Analyze which rules style one element of SOURCE.

    SOURCE is an HTML file or an http(s) URL; the element is picked with
    --selector or --lines. Stylesheets linked from the page, inline <style>
    blocks, --css files and everything under --project are scanned. Exits
    with code 1 if the page cannot be loaded or no element is found.
    """
    _configure_logging(verbose)
    if (selector is None) == (line_range is None):
        raise click.UsageError("Give exactly one of --selector or --lines.")

    try:
        html, base = _load_html(source)
        soup = parse_html(html)
        if selector is not None:
            identity = extract_target(soup, selector, index)
        else:
            identity = extract_target(html, line_range=line_range)
    except StylescopeError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    link_order = stylesheet_order(soup, base)
    sources: list[StylesheetSource] = inline_styles(soup)
    for path in _stylesheet_paths(link_order, css_files, project):
        try:
            sources.append(load_source(path))
        except SourceFetchError as exc:
            click.echo(f"Warning: {exc}", err=True)

    config = AnalysisConfig(
        use_cache=not no_cache,
        skip_minified=skip_minified,
        workers=workers,
        extra_utility_patterns=ignore_patterns,
    )
    cache = AnalysisCache(config.cache_size) if config.use_cache else None
    report = analyze_project(identity, sources, link_order, config, cache)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report, show_css)
