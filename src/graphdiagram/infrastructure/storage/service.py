"""
Storage service for the graph diagram system.

This module provides a facade that picks an edge store backend from
configuration and handles its lifecycle:
- Pluggable storage backends (memory, JSON, SQLite)
- Backup and restore with timestamped backup directories
- Resource initialization and cleanup
"""

import logging
import os
from datetime import datetime
from typing import Literal, Optional

from ...core.exceptions import ConfigurationError, StorageError
from .base import EdgeStore
from .json_fs import JsonEdgeStore
from .memory import MemoryEdgeStore
from .sqlite import SqliteEdgeStore

logger = logging.getLogger(__name__)

StorageType = Literal["memory", "json", "sqlite"]
STORAGE_TYPES = ("memory", "json", "sqlite")


class StorageService:
    """
    Storage service owning one edge store.

    Attributes:
        storage_dir (str): Directory for persistent storage
        storage_type (StorageType): Type of storage backend in use
        edge_store (EdgeStore): The configured backend
    """

    def __init__(self, storage_dir: str = "data", storage_type: StorageType = "json"):
        """
        Initialize the storage service.

        Args:
            storage_dir: Directory for persistent storage (unused by "memory")
            storage_type: Backend to use: "memory", "json" or "sqlite"

        Raises:
            ConfigurationError: If an unsupported storage type is specified
        """
        self.storage_dir = storage_dir
        self.storage_type = storage_type

        if storage_type == "memory":
            self.edge_store: EdgeStore = MemoryEdgeStore()
        elif storage_type == "json":
            self.edge_store = JsonEdgeStore(storage_dir)
        elif storage_type == "sqlite":
            self.edge_store = SqliteEdgeStore(storage_dir)
        else:
            raise ConfigurationError(f"Unsupported storage type: {storage_type}")

    async def initialize(self) -> None:
        """Initialize the backend and load existing data."""
        if self.storage_type != "memory":
            os.makedirs(self.storage_dir, exist_ok=True)
        await self.edge_store.initialize()

    async def cleanup(self) -> None:
        """Release backend resources."""
        await self.edge_store.cleanup()

    async def backup(self, backup_dir: Optional[str] = None) -> str:
        """
        Create a backup of the current storage.

        Args:
            backup_dir: Directory for backup files. Defaults to a timestamped
                sibling of the storage directory.

        Returns:
            The directory the backup was written to

        Raises:
            StorageError: If backup operation fails
        """
        if not backup_dir:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            backup_dir = f"{self.storage_dir}_backup_{timestamp}"

        os.makedirs(backup_dir, exist_ok=True)
        await self.edge_store.backup(backup_dir)
        logger.info(f"Created backup in directory: {backup_dir}")
        return backup_dir

    async def restore_backup(self, backup_dir: str) -> None:
        """
        Restore from a backup directory.

        Raises:
            StorageError: If backup directory doesn't exist or restore fails
        """
        if not os.path.exists(backup_dir):
            raise StorageError(f"Backup directory not found: {backup_dir}")

        await self.edge_store.restore_from_backup(backup_dir)
        logger.info(f"Successfully restored from backup: {backup_dir}")
