# ABOUTME: The `scorecat status` command for a summary of the local catalog.
# ABOUTME: Reports whether the catalog is populated and how many rows each table holds.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from scorecat.cli.options import db_option
from scorecat.db.catalog import ScoreCatalog
from scorecat.db.store import CatalogStore
from scorecat.source.types import ItemType

console = Console()


async def _collect(db_path: Path | None) -> tuple[Path, bool, dict[ItemType, int]]:
    async with CatalogStore(db_path) as store:
        catalog = ScoreCatalog(store)
        populated = await catalog.is_populated()
        counts = {item_type: await catalog.count(item_type) for item_type in ItemType}
        return await store.path(), populated, counts


@click.command("status")
@db_option
def status(db_path: Path | None) -> None:
    """Show whether the catalog is populated and its table sizes."""
    path, populated, counts = asyncio.run(_collect(db_path))

    table = Table(title=str(path))
    table.add_column("Table", style="bold")
    table.add_column("Rows", justify="right")
    for item_type, count in counts.items():
        table.add_row(item_type.table, str(count))
    console.print(table)

    if populated:
        console.print("[green]Catalog is populated.[/green]")
    else:
        console.print("[yellow]Catalog is empty. Run `scorecat populate`.[/yellow]")
