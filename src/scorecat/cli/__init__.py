# ABOUTME: CLI package for scorecat, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from scorecat.cli.commands import populate_cmd, search_cmd, status_cmd, works_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="scorecat")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """scorecat - an offline catalog of IMSLP composers and works."""
    _configure_logging(verbose)


cli.add_command(populate_cmd.populate)
cli.add_command(status_cmd.status)
cli.add_command(search_cmd.search)
cli.add_command(works_cmd.works)
