# ABOUTME: The `scorecat populate` command for downloading the catalog.
# ABOUTME: Fetches authors and works from IMSLP with a merged Rich progress bar.

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from scorecat.cli.options import db_option
from scorecat.core.populate import PopulateResult, populate as populate_catalog
from scorecat.core.progress import ProgressSnapshot
from scorecat.db.catalog import BulkWriteError, ScoreCatalog
from scorecat.db.store import CatalogStore, EngineInitError
from scorecat.source.http import ScorecatHttpClient, SourceFetchError
from scorecat.source.imslp import ImslpSource, PageSource
from scorecat.source.imslp_parser import SourceParseError

logger = logging.getLogger(__name__)


def _create_source() -> tuple[PageSource, ScorecatHttpClient | None]:
    """Create the default page source (IMSLP) and the client it owns."""
    http_client = ScorecatHttpClient()
    return ImslpSource(http_client), http_client


def _make_progress(console: Console) -> Progress:
    """Create a Rich progress bar over pages fetched across both streams."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    )


async def _run(db_path: Path | None, force: bool, console: Console) -> PopulateResult:
    source, http_client = _create_source()
    try:
        async with CatalogStore(db_path) as store:
            catalog = ScoreCatalog(store)
            with _make_progress(console) as progress:
                task_id = progress.add_task("Fetching pages", total=None)

                def on_progress(snapshot: ProgressSnapshot) -> None:
                    progress.update(
                        task_id, completed=snapshot.completed, total=snapshot.total
                    )

                return await populate_catalog(
                    catalog, source, on_progress=on_progress, force=force
                )
    finally:
        if http_client is not None:
            await http_client.aclose()


@click.command("populate")
@db_option
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Refetch and replace both tables even if the catalog is populated.",
)
def populate(db_path: Path | None, force: bool) -> None:
    """Download every IMSLP composer and work into the local catalog."""
    console = Console()

    try:
        result = asyncio.run(_run(db_path, force, console))
    except (SourceFetchError, SourceParseError) as exc:
        console.print(f"[red]Fetch failed:[/red] {exc}")
        raise SystemExit(1) from exc
    except BulkWriteError as exc:
        console.print(f"[red]Write failed:[/red] {exc}")
        for failure in exc.failures[:10]:
            console.print(f"  [dim]#{failure.index} {failure.item_id}:[/dim] {failure.message}")
        raise SystemExit(1) from exc
    except (EngineInitError, OSError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    if result.skipped:
        console.print("[yellow]Catalog already populated.[/yellow] Use --force to refresh.")
        return

    console.print(
        f"[green]{result.authors} author(s)[/green], "
        f"[green]{result.works} work(s)[/green] saved."
    )
