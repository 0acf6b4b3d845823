# ABOUTME: Resolves and caches the on-disk location of the catalog database file.
# ABOUTME: Ensures the containing directory exists the first time the path is requested.

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

import aiofiles.os

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".scorecat" / "catalog.db"


def default_locator() -> Path:
    """Host-provided canonical database location."""
    return DEFAULT_DB_PATH


class StoragePath:
    """Memoized database path.

    The first ``get()`` asks the locator for the path and creates its parent
    directory; every later call returns the cached path without touching
    the filesystem.
    """

    def __init__(self, locator: Callable[[], Path] | Path | None = None) -> None:
        if isinstance(locator, Path):
            fixed = locator
            self._locator: Callable[[], Path] = lambda: fixed
        else:
            self._locator = locator or default_locator
        self._path: Path | None = None
        self._lock = asyncio.Lock()

    async def get(self) -> Path:
        """Return the database path, resolving it on first use.

        Raises:
            OSError: If the parent directory cannot be created.
        """
        if self._path is not None:
            return self._path

        async with self._lock:
            if self._path is None:
                path = self._locator()
                await aiofiles.os.makedirs(path.parent, exist_ok=True)
                logger.debug("Database path resolved to %s", path)
                self._path = path
        return self._path
