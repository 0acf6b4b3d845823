# ABOUTME: The `scorecat search` command for looking up composers or works by id.
# ABOUTME: Prints up to ten substring matches as a Rich table.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from scorecat.cli.options import db_option
from scorecat.db.catalog import ScoreCatalog
from scorecat.db.mapping import AuthorRecord, WorkRecord
from scorecat.db.store import CatalogStore
from scorecat.source.types import ItemType

console = Console()


async def _search(
    db_path: Path | None, query: str, item_type: ItemType
) -> list[AuthorRecord] | list[WorkRecord]:
    async with CatalogStore(db_path) as store:
        return await ScoreCatalog(store).search(query, item_type)


@click.command("search")
@click.argument("query")
@click.option(
    "--works",
    "search_works",
    is_flag=True,
    default=False,
    help="Search works instead of composers.",
)
@db_option
def search(query: str, search_works: bool, db_path: Path | None) -> None:
    """Search the catalog for composers (or works) whose id contains QUERY."""
    item_type = ItemType.WORKS if search_works else ItemType.AUTHORS
    results = asyncio.run(_search(db_path, query, item_type))

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="bold")
    if item_type is ItemType.WORKS:
        table.add_column("Composer")
        table.add_column("Catalogue no.", style="dim")
        for record in results:
            table.add_row(record.id, record.composer, record.icatno or "-")
    else:
        table.add_column("Link", style="dim")
        for record in results:
            table.add_row(record.id, record.permlink)

    console.print(table)
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")
