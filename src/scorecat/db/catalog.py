# ABOUTME: Bulk replace and query operations for the scorecat catalog tables.
# ABOUTME: Wraps a CatalogStore and returns typed AuthorRecord/WorkRecord results.

import asyncio
import logging
import sqlite3
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from scorecat.db.mapping import (
    AuthorRecord,
    WorkRecord,
    author_to_row,
    row_to_author,
    row_to_work,
    work_to_row,
)
from scorecat.db.store import CatalogStore
from scorecat.source.types import Author, ItemType, Work

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10

T = TypeVar("T")


@dataclass
class RowFailure:
    """One item that could not be bound or inserted during a bulk write."""

    index: int
    item_id: str
    message: str


class BulkWriteError(Exception):
    """Raised when one or more rows of a bulk replace could not be inserted.

    Rows that did insert remain in the in-memory database; the file on disk
    is not rewritten.
    """

    def __init__(self, table: str, failures: list[RowFailure]) -> None:
        self.table = table
        self.failures = failures
        super().__init__(f"Could not insert {len(failures)} row(s) into {table}")


@dataclass(frozen=True)
class TableSpec(Generic[T]):
    """How to clear a table and insert one item into it."""

    name: str
    delete_sql: str
    insert_sql: str
    to_row: Callable[[T], dict[str, Any]] = field(repr=False)


AUTHORS_TABLE: TableSpec[Author] = TableSpec(
    name="Authors",
    delete_sql="DELETE FROM Authors",
    insert_sql="INSERT INTO Authors VALUES (:id, :type, :parent, :permlink)",
    to_row=author_to_row,
)

WORKS_TABLE: TableSpec[Work] = TableSpec(
    name="Works",
    delete_sql="DELETE FROM Works",
    insert_sql=(
        "INSERT INTO Works VALUES "
        "(:id, :type, :parent, :permlink, :composer, :worktitle, :icatno, :pageid)"
    ),
    to_row=work_to_row,
)


def _like_pattern(query: str) -> str:
    """Build a LIKE pattern matching ``query`` as a literal substring."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ScoreCatalog:
    """Typed bulk writes and queries over the Authors and Works tables.

    All access goes through the store's lazily loaded connection. Bulk
    replaces are serialized so two writers never interleave their
    delete/insert/export phases.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store
        self._write_lock = asyncio.Lock()

    # --- Bulk writes ---

    async def save_authors(self, authors: Sequence[Author]) -> int:
        """Replace the Authors table with ``authors``.

        Returns:
            The number of rows written.

        Raises:
            BulkWriteError: If any row failed to bind or insert.
        """
        return await self._replace_all(AUTHORS_TABLE, authors)

    async def save_works(self, works: Sequence[Work]) -> int:
        """Replace the Works table with ``works``.

        Returns:
            The number of rows written.

        Raises:
            BulkWriteError: If any row failed to bind or insert.
        """
        return await self._replace_all(WORKS_TABLE, works)

    async def _replace_all(self, table: TableSpec[T], items: Sequence[T]) -> int:
        """Delete every row of ``table`` then insert ``items`` one by one.

        The INSERT is prepared once and reused from the connection's
        statement cache. Failing rows are collected and reported together
        after the batch; the rest are kept and committed.
        """
        async with self._write_lock:
            conn = await self._store.load_or_create()
            logger.info("Saving %d row(s) to %s...", len(items), table.name)

            conn.execute(table.delete_sql)
            failures: list[RowFailure] = []
            cursor = conn.cursor()
            try:
                for index, item in enumerate(items):
                    try:
                        cursor.execute(table.insert_sql, table.to_row(item))
                    except (sqlite3.Error, OverflowError) as exc:
                        failures.append(
                            RowFailure(
                                index=index,
                                item_id=str(getattr(item, "id", "?")),
                                message=str(exc),
                            )
                        )
            finally:
                cursor.close()
            conn.commit()

            if failures:
                logger.warning(
                    "%d of %d row(s) failed to insert into %s",
                    len(failures),
                    len(items),
                    table.name,
                )
                raise BulkWriteError(table.name, failures)

            logger.info("Committing %s to disk...", table.name)
            await self._store.persist()
            return len(items)

    # --- Queries ---

    async def is_populated(self) -> bool:
        """True only if both Authors and Works hold at least one row."""
        conn = await self._store.load_or_create()
        has_authors = conn.execute("SELECT * FROM Authors LIMIT 1").fetchone() is not None
        has_works = conn.execute("SELECT * FROM Works LIMIT 1").fetchone() is not None
        return has_authors and has_works

    async def count(self, item_type: ItemType) -> int:
        """Number of rows in the table for ``item_type``."""
        conn = await self._store.load_or_create()
        cursor = conn.execute(f"SELECT COUNT(*) FROM {item_type.table}")
        return cursor.fetchone()[0]

    async def search_authors(self, query: str) -> list[AuthorRecord]:
        """Authors whose id contains ``query``, ordered by id, at most 10."""
        rows = await self._search_ids(AUTHORS_TABLE.name, query)
        return [row_to_author(row) for row in rows]

    async def search_works(self, query: str) -> list[WorkRecord]:
        """Works whose id contains ``query``, ordered by id, at most 10."""
        rows = await self._search_ids(WORKS_TABLE.name, query)
        return [row_to_work(row) for row in rows]

    async def search(
        self, query: str, item_type: ItemType
    ) -> list[AuthorRecord] | list[WorkRecord]:
        """Substring search on id in the table selected by ``item_type``."""
        if item_type is ItemType.AUTHORS:
            return await self.search_authors(query)
        return await self.search_works(query)

    async def _search_ids(self, table: str, query: str) -> list[sqlite3.Row]:
        conn = await self._store.load_or_create()
        cursor = conn.execute(
            f"SELECT * FROM {table} WHERE id LIKE ? ESCAPE '\\' ORDER BY id LIMIT ?",
            (_like_pattern(query), SEARCH_LIMIT),
        )
        return cursor.fetchall()

    async def find_works_by_composer(self, composer: str) -> list[WorkRecord]:
        """All works whose composer is exactly ``composer``, ordered by id."""
        conn = await self._store.load_or_create()
        cursor = conn.execute(
            "SELECT * FROM Works WHERE composer = ? ORDER BY id",
            (composer,),
        )
        return [row_to_work(row) for row in cursor.fetchall()]
