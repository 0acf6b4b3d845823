# ABOUTME: Converts between source items and SQLite rows for the Authors and Works tables.
# ABOUTME: Defines the typed AuthorRecord and WorkRecord results returned by catalog queries.

import sqlite3
from dataclasses import dataclass
from typing import Any

from scorecat.source.types import Author, Work


@dataclass(frozen=True)
class AuthorRecord:
    """A row of the Authors table."""

    id: str
    type: int
    parent: str
    permlink: str


@dataclass(frozen=True)
class WorkRecord:
    """A row of the Works table."""

    id: str
    type: int
    parent: str
    permlink: str
    composer: str
    worktitle: str
    icatno: str
    pageid: int


def author_to_row(author: Author) -> dict[str, Any]:
    """Convert an Author to named parameters for the Authors INSERT.

    A missing parent is stored as an empty string.
    """
    return {
        "id": author.id,
        "type": author.type,
        "parent": author.parent if author.parent is not None else "",
        "permlink": author.permlink,
    }


def work_to_row(work: Work) -> dict[str, Any]:
    """Convert a Work to named parameters for the Works INSERT.

    A missing parent is stored as an empty string; everything else,
    including the integer pageid, passes through unchanged.
    """
    return {
        "id": work.id,
        "type": work.type,
        "parent": work.parent if work.parent is not None else "",
        "permlink": work.permlink,
        "composer": work.composer,
        "worktitle": work.worktitle,
        "icatno": work.icatno,
        "pageid": work.pageid,
    }


def row_to_mapping(row: sqlite3.Row) -> dict[str, Any]:
    """Reshape a raw row into a column-name -> value mapping."""
    return {column: row[column] for column in row.keys()}


def row_to_author(row: sqlite3.Row) -> AuthorRecord:
    values = row_to_mapping(row)
    return AuthorRecord(
        id=values["id"],
        type=values["type"],
        parent=values["parent"] or "",
        permlink=values["permlink"],
    )


def row_to_work(row: sqlite3.Row) -> WorkRecord:
    values = row_to_mapping(row)
    return WorkRecord(
        id=values["id"],
        type=values["type"],
        parent=values["parent"] or "",
        permlink=values["permlink"],
        composer=values["composer"],
        worktitle=values["worktitle"],
        icatno=values["icatno"],
        pageid=values["pageid"],
    )
