# ABOUTME: Public API for the scorecat catalog database layer.
# ABOUTME: Exports the store lifecycle, catalog operations, and result record types.

from scorecat.db.catalog import BulkWriteError, RowFailure, ScoreCatalog
from scorecat.db.mapping import AuthorRecord, WorkRecord
from scorecat.db.paths import DEFAULT_DB_PATH, StoragePath
from scorecat.db.store import CatalogStore, EngineInitError, StoreClosedError, StoreState

__all__ = [
    "DEFAULT_DB_PATH",
    "AuthorRecord",
    "BulkWriteError",
    "CatalogStore",
    "EngineInitError",
    "RowFailure",
    "ScoreCatalog",
    "StoragePath",
    "StoreClosedError",
    "StoreState",
    "WorkRecord",
]
