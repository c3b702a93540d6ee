"""
Edge storage package.

Backends implementing ``EdgeStore``:
- MemoryEdgeStore: process memory only
- JsonEdgeStore: single JSON file
- SqliteEdgeStore: SQLite database with a unique constraint on the edge key

``StorageService`` selects and manages one of them.
"""

from .base import MAX_CREATE_RETRIES, EdgeStore
from .json_fs import JsonEdgeStore
from .memory import MemoryEdgeStore
from .service import STORAGE_TYPES, StorageService, StorageType
from .sqlite import SqliteEdgeStore

__all__ = [
    "EdgeStore",
    "MAX_CREATE_RETRIES",
    "MemoryEdgeStore",
    "JsonEdgeStore",
    "SqliteEdgeStore",
    "StorageService",
    "StorageType",
    "STORAGE_TYPES",
]
