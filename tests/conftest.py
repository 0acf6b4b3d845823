# ABOUTME: Shared pytest fixtures for scorecat tests.
# ABOUTME: Provides temporary database paths and sample author/work items.

from pathlib import Path

import pytest

from scorecat.source.types import Author, Work
from tests.fixtures.fake_source import make_author, make_work


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """A database location inside a not-yet-existing directory."""
    return tmp_path / "data" / "catalog.db"


@pytest.fixture
def sample_authors() -> list[Author]:
    return [
        make_author("Bach, Johann Sebastian"),
        make_author("Bach, Carl Philipp Emanuel"),
        make_author("Mozart, Wolfgang Amadeus"),
    ]


@pytest.fixture
def sample_works() -> list[Work]:
    return [
        make_work("Goldberg-Variationen", "Bach, Johann Sebastian", 2417, "BWV 988"),
        make_work("Brandenburg Concerto No.1", "Bach, Johann Sebastian", 16537, "BWV 1046"),
        make_work("Solfeggietto", "Bach, Carl Philipp Emanuel", 33210),
        make_work("Requiem", "Mozart, Wolfgang Amadeus", 1600, "K.626"),
    ]
