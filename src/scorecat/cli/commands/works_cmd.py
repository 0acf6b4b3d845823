# ABOUTME: The `scorecat works` command for listing a composer's works.
# ABOUTME: Exact-matches the composer name and prints every work ordered by id.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from scorecat.cli.options import db_option
from scorecat.db.catalog import ScoreCatalog
from scorecat.db.mapping import WorkRecord
from scorecat.db.store import CatalogStore

console = Console()


async def _find(db_path: Path | None, composer: str) -> list[WorkRecord]:
    async with CatalogStore(db_path) as store:
        return await ScoreCatalog(store).find_works_by_composer(composer)


@click.command("works")
@click.argument("composer")
@db_option
def works(composer: str, db_path: Path | None) -> None:
    """List every work by COMPOSER (exact name, e.g. "Bach, Johann Sebastian")."""
    results = asyncio.run(_find(db_path, composer))

    if not results:
        console.print(f"[yellow]No works found for {composer}.[/yellow]")
        return

    table = Table(title=composer)
    table.add_column("Title", style="bold")
    table.add_column("Catalogue no.", style="dim")
    table.add_column("Page", justify="right", style="dim")
    for record in results:
        table.add_row(record.worktitle, record.icatno or "-", str(record.pageid))

    console.print(table)
    console.print(f"\n[dim]{len(results)} work(s)[/dim]")
