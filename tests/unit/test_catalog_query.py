# ABOUTME: Unit tests for ScoreCatalog read queries.
# ABOUTME: Validates the populated probe, id substring search, and composer lookup.

import asyncio
from pathlib import Path

import pytest

from scorecat.db.catalog import SEARCH_LIMIT, ScoreCatalog
from scorecat.db.mapping import AuthorRecord, WorkRecord
from scorecat.db.store import CatalogStore
from scorecat.source.types import Author, ItemType, Work
from tests.fixtures.fake_source import make_author, make_work


def _run_with_catalog(db_path: Path, body):
    async def run():
        async with CatalogStore(db_path) as store:
            return await body(ScoreCatalog(store))

    return asyncio.run(run())


@pytest.fixture
def many_bachs() -> list[Author]:
    """Fourteen Bach family entries plus unrelated composers, unsorted."""
    names = [f"Bach, Member {n:02d}" for n in range(14, 0, -1)]
    others = ["Mozart, Wolfgang Amadeus", "Offenbach, Jacques", "O'Brien, Charles"]
    return [make_author(name) for name in names + others]


class TestIsPopulated:
    """Tests for ScoreCatalog.is_populated."""

    def test_fresh_database_is_not_populated(self, db_path: Path) -> None:
        assert _run_with_catalog(db_path, lambda c: c.is_populated()) is False

    def test_only_authors_is_not_populated(
        self, db_path: Path, sample_authors: list[Author]
    ) -> None:
        async def body(catalog: ScoreCatalog) -> bool:
            await catalog.save_authors(sample_authors)
            return await catalog.is_populated()

        assert _run_with_catalog(db_path, body) is False

    def test_only_works_is_not_populated(self, db_path: Path, sample_works: list[Work]) -> None:
        async def body(catalog: ScoreCatalog) -> bool:
            await catalog.save_works(sample_works)
            return await catalog.is_populated()

        assert _run_with_catalog(db_path, body) is False

    def test_both_tables_is_populated(
        self, db_path: Path, sample_authors: list[Author], sample_works: list[Work]
    ) -> None:
        async def body(catalog: ScoreCatalog) -> bool:
            await catalog.save_authors(sample_authors)
            await catalog.save_works(sample_works)
            return await catalog.is_populated()

        assert _run_with_catalog(db_path, body) is True


class TestSearch:
    """Tests for ScoreCatalog.search and its per-table variants."""

    def test_search_caps_and_sorts(self, db_path: Path, many_bachs: list[Author]) -> None:
        """At most 10 rows, all containing the query, ascending by id."""

        async def body(catalog: ScoreCatalog) -> list[AuthorRecord]:
            await catalog.save_authors(many_bachs)
            return await catalog.search("bach", ItemType.AUTHORS)

        results = _run_with_catalog(db_path, body)
        ids = [r.id for r in results]
        assert len(results) == SEARCH_LIMIT == 10
        assert all("bach" in record_id.lower() for record_id in ids)
        assert ids == sorted(ids)
        assert ids[0] == "Category:Bach, Member 01"

    def test_search_returns_typed_records(
        self, db_path: Path, sample_authors: list[Author], sample_works: list[Work]
    ) -> None:
        async def body(catalog: ScoreCatalog):
            await catalog.save_authors(sample_authors)
            await catalog.save_works(sample_works)
            return (
                await catalog.search("Mozart", ItemType.AUTHORS),
                await catalog.search("Goldberg", ItemType.WORKS),
            )

        authors, works = _run_with_catalog(db_path, body)
        assert [type(r) for r in authors] == [AuthorRecord]
        assert [type(r) for r in works] == [WorkRecord]
        assert works[0].icatno == "BWV 988"

    def test_search_with_single_quote(self, db_path: Path, many_bachs: list[Author]) -> None:
        """A quote in the query neither raises nor breaks out of the string."""

        async def body(catalog: ScoreCatalog) -> list[AuthorRecord]:
            await catalog.save_authors(many_bachs)
            return await catalog.search("o'brien", ItemType.AUTHORS)

        results = _run_with_catalog(db_path, body)
        assert [r.id for r in results] == ["Category:O'Brien, Charles"]

    def test_search_does_not_execute_injected_sql(
        self, db_path: Path, many_bachs: list[Author]
    ) -> None:
        async def body(catalog: ScoreCatalog) -> tuple[list[AuthorRecord], int]:
            await catalog.save_authors(many_bachs)
            results = await catalog.search(
                "x'; DROP TABLE Authors; --", ItemType.AUTHORS
            )
            return results, await catalog.count(ItemType.AUTHORS)

        results, count = _run_with_catalog(db_path, body)
        assert results == []
        assert count == len(many_bachs)

    def test_like_wildcards_are_literal(self, db_path: Path, many_bachs: list[Author]) -> None:
        """% and _ in the query only match themselves."""

        async def body(catalog: ScoreCatalog):
            await catalog.save_authors(many_bachs)
            return (
                await catalog.search("%", ItemType.AUTHORS),
                await catalog.search("Bach_", ItemType.AUTHORS),
            )

        percent, underscore = _run_with_catalog(db_path, body)
        assert percent == []
        assert underscore == []

    def test_search_no_match(self, db_path: Path, sample_authors: list[Author]) -> None:
        async def body(catalog: ScoreCatalog) -> list[AuthorRecord]:
            await catalog.save_authors(sample_authors)
            return await catalog.search_authors("Stravinsky")

        assert _run_with_catalog(db_path, body) == []


class TestFindWorksByComposer:
    """Tests for ScoreCatalog.find_works_by_composer."""

    def test_exact_match_only_sorted(self, db_path: Path) -> None:
        works = [
            make_work("Mass in B minor", "J.S. Bach", 3),
            make_work("Art of Fugue", "J.S. Bach", 1),
            make_work("Solfeggietto", "C.P.E. Bach", 2),
            make_work("Prelude", "J.S. Bach Jr.", 4),
            make_work("Lute Suite", "j.s. bach", 5),
        ]

        async def body(catalog: ScoreCatalog) -> list[WorkRecord]:
            await catalog.save_works(works)
            return await catalog.find_works_by_composer("J.S. Bach")

        results = _run_with_catalog(db_path, body)
        assert [r.worktitle for r in results] == ["Art of Fugue", "Mass in B minor"]
        assert all(r.composer == "J.S. Bach" for r in results)

    def test_returns_flat_uncapped_list(self, db_path: Path) -> None:
        works = [make_work(f"Sonata {n:02d}", "Scarlatti, Domenico", n) for n in range(25)]

        async def body(catalog: ScoreCatalog) -> list[WorkRecord]:
            await catalog.save_works(works)
            return await catalog.find_works_by_composer("Scarlatti, Domenico")

        results = _run_with_catalog(db_path, body)
        assert len(results) == 25
        assert all(isinstance(r, WorkRecord) for r in results)

    def test_quote_in_composer_name(self, db_path: Path) -> None:
        works = [make_work("Air", "O'Carolan, Turlough", 7)]

        async def body(catalog: ScoreCatalog) -> list[WorkRecord]:
            await catalog.save_works(works)
            return await catalog.find_works_by_composer("O'Carolan, Turlough")

        assert [r.pageid for r in _run_with_catalog(db_path, body)] == [7]

    def test_unknown_composer(self, db_path: Path) -> None:
        assert _run_with_catalog(db_path, lambda c: c.find_works_by_composer("Nobody")) == []
