# ABOUTME: Lifecycle of the embedded SQLite engine and the in-memory catalog connection.
# ABOUTME: Loads the database file if it exists or creates it, and writes it back after changes.

import asyncio
import enum
import logging
import sqlite3
from pathlib import Path

import aiofiles
import aiofiles.os

from scorecat.db.paths import StoragePath
from scorecat.db.schema import apply_schema

logger = logging.getLogger(__name__)

# sqlite3.Connection.serialize/deserialize need SQLite 3.23+ compiled with
# SQLITE_ENABLE_DESERIALIZE (default since 3.36).
_MIN_SQLITE_VERSION = (3, 36, 0)


class EngineInitError(Exception):
    """Raised when the embedded SQL engine cannot be initialized."""


class StoreClosedError(Exception):
    """Raised when a closed CatalogStore is used."""


class StoreState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    CLOSED = "closed"


class SqliteEngine:
    """In-process SQL engine over in-memory databases that round-trip to bytes."""

    def __init__(self) -> None:
        self.version = sqlite3.sqlite_version

    def create(self) -> sqlite3.Connection:
        """Open an empty in-memory database."""
        conn = sqlite3.connect(":memory:")
        conn.row_factory = sqlite3.Row
        return conn

    def open(self, blob: bytes) -> sqlite3.Connection:
        """Open an in-memory database over a serialized image."""
        conn = self.create()
        conn.deserialize(blob)
        return conn

    def export(self, conn: sqlite3.Connection) -> bytes:
        """Serialize the whole database to bytes."""
        return conn.serialize()


def _init_engine() -> SqliteEngine:
    if sqlite3.sqlite_version_info < _MIN_SQLITE_VERSION:
        raise EngineInitError(
            f"SQLite {sqlite3.sqlite_version} is too old; "
            f"{'.'.join(map(str, _MIN_SQLITE_VERSION))} or newer is required"
        )
    if not hasattr(sqlite3.Connection, "serialize"):
        raise EngineInitError("sqlite3 module lacks serialize/deserialize support")
    return SqliteEngine()


class CatalogStore:
    """Owns the engine, the open connection, and the database file location.

    One store per process: construct it explicitly, pass it to every
    operation, and close it (or use ``async with``) when done. The database
    lives in memory and the file is rewritten in full by ``persist()``.
    """

    def __init__(self, path: StoragePath | Path | None = None) -> None:
        self._path = path if isinstance(path, StoragePath) else StoragePath(path)
        self._engine_task: asyncio.Task[SqliteEngine] | None = None
        self._conn: sqlite3.Connection | None = None
        self._load_lock = asyncio.Lock()
        self.state = StoreState.UNINITIALIZED

    async def __aenter__(self) -> "CatalogStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def path(self) -> Path:
        """The resolved database file path."""
        return await self._path.get()

    async def engine(self) -> SqliteEngine:
        """Initialize the SQL engine once; every caller awaits the same init.

        Raises:
            EngineInitError: If the linked SQLite cannot serialize databases.
        """
        if self._engine_task is None:
            self._engine_task = asyncio.ensure_future(self._start_engine())
        return await self._engine_task

    async def _start_engine(self) -> SqliteEngine:
        logger.info("Initializing SQLite...")
        engine = _init_engine()
        logger.info("SQLite %s ready", engine.version)
        return engine

    async def load_or_create(self) -> sqlite3.Connection:
        """Return the live connection, loading or creating the database first.

        If the file exists its bytes are loaded into memory; otherwise a new
        database is created, given the schema, and written to disk.

        Raises:
            StoreClosedError: If the store has been closed.
            EngineInitError: If the engine cannot be initialized.
            OSError: On filesystem failures.
        """
        self._check_open()
        if self._conn is not None:
            return self._conn

        async with self._load_lock:
            self._check_open()
            if self._conn is not None:
                return self._conn

            path = await self.path()
            engine = await self.engine()

            if await aiofiles.os.path.exists(path):
                logger.info("Database exists! Loading %s", path)
                self.state = StoreState.LOADING
                async with aiofiles.open(path, "rb") as f:
                    blob = await f.read()
                self._conn = engine.open(blob)
                self.state = StoreState.READY
                return self._conn

            logger.info("Creating a new database...")
            conn = engine.create()
            apply_schema(conn)
            try:
                await self._write(conn)
            except OSError:
                conn.close()
                raise
            self._conn = conn
            self.state = StoreState.READY
            return conn

    async def persist(self) -> None:
        """Export the whole database and overwrite the file on disk."""
        await self._write(await self.load_or_create())

    async def _write(self, conn: sqlite3.Connection) -> None:
        engine = await self.engine()
        path = await self.path()

        data = engine.export(conn)
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)
        logger.info("Written %d bytes to disk, path: %s", len(data), path)

    async def close(self) -> None:
        """Close the connection. The file on disk is left as last persisted."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        self.state = StoreState.CLOSED

    def _check_open(self) -> None:
        if self.state is StoreState.CLOSED:
            raise StoreClosedError("CatalogStore has been closed")
