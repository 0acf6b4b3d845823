# ABOUTME: Ingestion pipeline that fills the catalog from the remote paginated source.
# ABOUTME: Fetches authors and works concurrently, merges their progress, and bulk-replaces each table.

import asyncio
import logging
from dataclasses import dataclass

from scorecat.core.progress import (
    ProgressAggregator,
    ProgressCallback,
    ProgressSnapshot,
    StreamProgress,
)
from scorecat.db.catalog import ScoreCatalog
from scorecat.source.imslp import PageSource
from scorecat.source.types import Author, ItemType, Work

logger = logging.getLogger(__name__)


@dataclass
class PopulateResult:
    """Summary of a populate run."""

    skipped: bool = False
    authors: int = 0
    works: int = 0


async def fetch_stream(
    source: PageSource, item_type: ItemType, progress: StreamProgress
) -> list[Author] | list[Work]:
    """Fetch every page of ``item_type`` in order, advancing ``progress`` per page."""
    items: list = []
    for page in range(progress.total):
        items.extend(await source.fetch_page(item_type, page))
        progress.advance()
    logger.info("Fetched %d %s over %d page(s)", len(items), item_type.table, progress.total)
    return items


async def _ingest_authors(
    catalog: ScoreCatalog, source: PageSource, progress: StreamProgress
) -> int:
    authors = await fetch_stream(source, ItemType.AUTHORS, progress)
    return await catalog.save_authors(authors)


async def _ingest_works(
    catalog: ScoreCatalog, source: PageSource, progress: StreamProgress
) -> int:
    works = await fetch_stream(source, ItemType.WORKS, progress)
    return await catalog.save_works(works)


async def populate(
    catalog: ScoreCatalog,
    source: PageSource,
    on_progress: ProgressCallback | None = None,
    *,
    force: bool = False,
) -> PopulateResult:
    """Fill both catalog tables from ``source`` unless they already hold data.

    The authors and works streams run concurrently. ``on_progress`` receives
    a snapshot after every fetched page from either stream, weighted by the
    streams' declared page totals. Each stream's items are written as soon
    as that stream finishes, without waiting for the other one.

    If either stream fails, that first error is raised. The other stream is
    not cancelled and may still be running when this returns.

    Args:
        catalog: Catalog to write into.
        source: Paginated source to fetch from.
        on_progress: Optional callback for merged progress updates.
        force: Refetch and replace even if the catalog is already populated.

    Returns:
        PopulateResult with row counts, or ``skipped=True`` when the catalog
        was already populated.
    """
    if not force and await catalog.is_populated():
        logger.info("Catalog already populated, nothing to fetch")
        if on_progress is not None:
            on_progress(ProgressSnapshot(completed=0, total=0))
        return PopulateResult(skipped=True)

    aggregator = ProgressAggregator()
    if on_progress is not None:
        aggregator.subscribe(on_progress)

    authors_progress = aggregator.add_stream(
        "authors", source.page_count(ItemType.AUTHORS)
    )
    works_progress = aggregator.add_stream("works", source.page_count(ItemType.WORKS))
    logger.info(
        "Populating catalog: %d author page(s), %d work page(s)",
        authors_progress.total,
        works_progress.total,
    )

    authors_task = asyncio.ensure_future(_ingest_authors(catalog, source, authors_progress))
    works_task = asyncio.ensure_future(_ingest_works(catalog, source, works_progress))
    authors_count, works_count = await asyncio.gather(authors_task, works_task)

    return PopulateResult(authors=authors_count, works=works_count)
