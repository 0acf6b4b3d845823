# ABOUTME: Shared Click options for scorecat CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db.

from pathlib import Path

import click

from scorecat.db.paths import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help=f"Path to catalog database (default: {DEFAULT_DB_PATH})",
)
