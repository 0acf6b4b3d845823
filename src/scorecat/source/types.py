# ABOUTME: Item data structures received from the remote paginated catalog source.
# ABOUTME: Author and Work are the interchange format between fetching and the catalog DB.

from dataclasses import dataclass
from enum import IntEnum


class ItemType(IntEnum):
    """Which list a paginated fetch or catalog operation targets.

    Values match the IMSLP worklist ``type`` codes (1 = people, 2 = works).
    """

    AUTHORS = 1
    WORKS = 2

    @property
    def table(self) -> str:
        """Name of the catalog table that stores items of this type."""
        return "Authors" if self is ItemType.AUTHORS else "Works"


@dataclass
class Author:
    """A person (composer, arranger, editor) as listed by the source."""

    id: str
    type: int
    permlink: str
    parent: str | None = None


@dataclass
class Work:
    """A musical work as listed by the source.

    ``pageid`` is the wiki page id of the work and is kept as an integer.
    """

    id: str
    type: int
    permlink: str
    composer: str
    worktitle: str
    icatno: str
    pageid: int
    parent: str | None = None


Item = Author | Work
