"""stylescope CLI entry point: Click group with subcommands."""

import click

from stylescope import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stylescope")
def cli() -> None:
    """stylescope - which CSS rules style this element, and which one wins."""


# Import and register subcommands
from stylescope.cli.analyze import analyze  # noqa: E402
from stylescope.cli.resolve import resolve  # noqa: E402
from stylescope.cli.specificity import specificity  # noqa: E402

cli.add_command(analyze)
cli.add_command(specificity)
cli.add_command(resolve)
