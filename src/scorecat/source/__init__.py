# ABOUTME: Remote catalog source package: item types, HTTP client, and IMSLP pagination.
# ABOUTME: Exports the Author/Work item types and the PageSource protocol.

from scorecat.source.http import ScorecatHttpClient, SourceFetchError
from scorecat.source.imslp import ImslpSource, PageSource
from scorecat.source.imslp_parser import SourceParseError
from scorecat.source.types import Author, Item, ItemType, Work

__all__ = [
    "Author",
    "ImslpSource",
    "Item",
    "ItemType",
    "PageSource",
    "ScorecatHttpClient",
    "SourceFetchError",
    "SourceParseError",
    "Work",
]
