# ABOUTME: CLI package for lexepub, built on Click.
# ABOUTME: Defines the root command group, its logging flag, and registers subcommands.

import click

from lexepub.cli.commands import chapters_cmd, stats_cmd
from lexepub.cli.logsetup import configure_logging


@click.group()
@click.version_option(package_name="lexepub")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    default=False,
    help="Log progress and skipped content documents.",
)
def cli(verbose: bool) -> None:
    """lexepub - word and character counts for EPUB books."""
    configure_logging(verbose)


cli.add_command(stats_cmd.stats)
cli.add_command(chapters_cmd.chapters)
