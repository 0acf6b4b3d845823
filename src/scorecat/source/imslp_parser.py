# ABOUTME: Parsing functions for IMSLP worklist API JSON responses.
# ABOUTME: Converts the numbered-entry page payload into Author and Work instances.

from typing import Any

from scorecat.source.types import Author, ItemType, Work


class SourceParseError(Exception):
    """Raised when a source page payload does not have the expected shape."""


def _entries(data: Any) -> list[dict[str, Any]]:
    """Return a page's item entries in list order.

    The worklist endpoint returns an object keyed "0", "1", ... plus a
    "metadata" entry describing the page.
    """
    if not isinstance(data, dict):
        raise SourceParseError(f"Expected a JSON object, got {type(data).__name__}")

    numbered = [(key, value) for key, value in data.items() if key.isdigit()]
    numbered.sort(key=lambda pair: int(pair[0]))
    return [value for _, value in numbered]


def parse_author(entry: dict[str, Any]) -> Author:
    """Parse a people-list entry into an Author."""
    try:
        return Author(
            id=entry["id"],
            type=int(entry.get("type", ItemType.AUTHORS)),
            permlink=entry.get("permlink", ""),
            parent=entry.get("parent"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SourceParseError(f"Malformed author entry: {entry!r}") from exc


def parse_work(entry: dict[str, Any]) -> Work:
    """Parse a works-list entry into a Work.

    Work-specific fields live under "intvals". A missing catalogue number
    becomes an empty string; pageid is coerced to int.
    """
    intvals = entry.get("intvals") or {}
    try:
        return Work(
            id=entry["id"],
            type=int(entry.get("type", ItemType.WORKS)),
            permlink=entry.get("permlink", ""),
            composer=intvals.get("composer", ""),
            worktitle=intvals.get("worktitle", ""),
            icatno=intvals.get("icatno") or "",
            pageid=int(intvals.get("pageid", 0)),
            parent=entry.get("parent"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise SourceParseError(f"Malformed work entry: {entry!r}") from exc


def parse_page(data: Any, item_type: ItemType) -> list[Author] | list[Work]:
    """Parse one worklist page into items of the requested type."""
    entries = _entries(data)
    if item_type is ItemType.AUTHORS:
        return [parse_author(entry) for entry in entries]
    return [parse_work(entry) for entry in entries]
