# ABOUTME: Logging configuration for the lexepub command line.
# ABOUTME: Routes library log records through a Rich handler on stderr.

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool) -> None:
    """Install a Rich log handler: DEBUG when verbose, WARNING otherwise."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )
