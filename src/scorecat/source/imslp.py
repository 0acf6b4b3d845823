# ABOUTME: IMSLP paginated catalog source implementation.
# ABOUTME: Fetches numbered pages of people or works from the IMSLP worklist API.

import logging
from typing import Protocol, runtime_checkable

from scorecat.source.http import HttpClient
from scorecat.source.imslp_parser import parse_page
from scorecat.source.types import Author, ItemType, Work

logger = logging.getLogger(__name__)

IMSLP_API_URL = "https://imslp.org/imslpscripts/API.ISCR.php"
PAGE_SIZE = 1000

NUMBER_OF_AUTHOR_PAGES = 27
NUMBER_OF_WORK_PAGES = 230


@runtime_checkable
class PageSource(Protocol):
    """Protocol for a remote source that serves items in numbered pages.

    Total page counts are known up front so progress can be weighted
    before any page has been fetched.
    """

    def page_count(self, item_type: ItemType) -> int: ...

    async def fetch_page(
        self, item_type: ItemType, page: int
    ) -> list[Author] | list[Work]: ...


class ImslpSource:
    """Page source backed by the IMSLP worklist API.

    Pages are ``PAGE_SIZE`` entries wide, addressed by start offset.
    Uses a dependency-injected HttpClient for testability.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        author_pages: int = NUMBER_OF_AUTHOR_PAGES,
        work_pages: int = NUMBER_OF_WORK_PAGES,
        base_url: str = IMSLP_API_URL,
    ) -> None:
        self._http = http_client
        self._page_counts = {
            ItemType.AUTHORS: author_pages,
            ItemType.WORKS: work_pages,
        }
        self._base_url = base_url

    def page_count(self, item_type: ItemType) -> int:
        return self._page_counts[item_type]

    def page_url(self, item_type: ItemType, page: int) -> str:
        """Build the request URL for one page.

        The API takes its arguments as slash-separated path segments
        rather than a query string.
        """
        args = "/".join(
            [
                "account=worklist",
                "disclaimer=accepted",
                "sort=id",
                f"type={int(item_type)}",
                f"start={page * PAGE_SIZE}",
                "retformat=json",
            ]
        )
        return f"{self._base_url}?{args}"

    async def fetch_page(self, item_type: ItemType, page: int) -> list[Author] | list[Work]:
        """Fetch and parse one page.

        Raises:
            SourceFetchError: If the HTTP request fails.
            SourceParseError: If the payload is malformed.
        """
        url = self.page_url(item_type, page)
        logger.debug("Fetching %s page %d", item_type.table, page)
        data = await self._http.get(url)
        return parse_page(data, item_type)
