"""SQLite implementation of the edge store."""

import logging
import os
import sqlite3
from datetime import datetime
from typing import Any, List, Optional, Tuple

import aiosqlite

from ...core.exceptions import DuplicateEdgeError, StorageError
from ...core.models import Edge, EdgeKey
from .base import EdgeStore
from .constants import (
    BUMP_REVISION,
    DELETE_EDGE,
    DELETE_NODE_EDGES,
    EDGE_SCHEMA,
    INSERT_EDGE,
    ORDER_BY_ID,
    SELECT_EDGE_BY_ID,
    SELECT_EDGES,
    SELECT_REVISION,
    STORAGEDB,
)
from .utils import build_filters

logger = logging.getLogger(__name__)


def row_to_edge(row: Any) -> Edge:
    """Convert a row of ``EDGE_COLUMNS`` to an edge."""
    edge_id, departure, destination, directed, cost, comment, created_at = tuple(row)
    return Edge(
        id=str(edge_id),
        departure=departure,
        destination=destination,
        directed=bool(directed),
        cost=cost,
        comment=comment,
        created_at=datetime.fromisoformat(created_at),
    )


def build_edge_filter_query(**filters: Any) -> Tuple[str, List[Any]]:
    """
    Build a SELECT for the given edge filters.

    Returns:
        Tuple of (query, parameters)
    """
    given = build_filters(**filters)
    query = SELECT_EDGES
    params: List[Any] = []
    if given:
        query += " WHERE " + " AND ".join(f"{column} = ?" for column in given)
        params = [int(value) if column == "directed" else value for column, value in given.items()]
    return query + ORDER_BY_ID, params


def backup_database(source_path: str, backup_dir: str, filename: str) -> None:
    """
    Create a backup of the SQLite database.

    Uses SQLite's built-in backup functionality for atomic backups.

    Raises:
        StorageError: If backup fails
    """
    try:
        os.makedirs(backup_dir, exist_ok=True)
        backup_path = os.path.join(backup_dir, filename)
        with (
            sqlite3.connect(source_path) as src,
            sqlite3.connect(backup_path) as dst,
        ):
            src.backup(dst)
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Failed to backup database: {str(e)}")
        raise StorageError(f"Failed to backup database: {str(e)}") from e


def restore_database(backup_dir: str, target_path: str, filename: str) -> None:
    """
    Restore the SQLite database from a backup.

    Raises:
        StorageError: If the backup is missing or restore fails
    """
    backup_path = os.path.join(backup_dir, filename)
    if not os.path.exists(backup_path):
        raise StorageError(f"No database backup found in {backup_dir}")
    try:
        with (
            sqlite3.connect(backup_path) as src,
            sqlite3.connect(target_path) as dst,
        ):
            src.backup(dst)
    except sqlite3.Error as e:
        logger.error(f"Failed to restore database: {str(e)}")
        raise StorageError(f"Failed to restore database: {str(e)}") from e


class SqliteEdgeStore(EdgeStore):
    """
    SQLite implementation of the edge store.

    Connections are opened per operation. The table's UNIQUE constraint on
    the edge key makes a racing duplicate insert fail with an integrity error,
    which surfaces as DuplicateEdgeError. Each mutation bumps the stored
    revision inside the same transaction, so the revision is shared by every
    process using the database file.

    Attributes:
        storage_dir (str): Directory where the SQLite database is stored
        db_path (str): Full path to the SQLite database file
    """

    def __init__(self, storage_dir: str):
        """
        Initialize SQLite edge storage.

        Args:
            storage_dir: Directory for storing the SQLite database
        """
        self.storage_dir = storage_dir
        self.db_path = os.path.join(storage_dir, STORAGEDB)

    async def initialize(self) -> None:
        """
        Create tables and indexes if they do not exist.

        Raises:
            StorageError: If initialization fails
        """
        try:
            os.makedirs(self.storage_dir, exist_ok=True)
            async with aiosqlite.connect(self.db_path) as db:
                await db.executescript(EDGE_SCHEMA)
                await db.commit()
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to initialize table: {str(e)}")
            raise StorageError(f"Failed to initialize table: {str(e)}") from e
        logger.info(f"Initialized SQLite edge storage at {self.db_path}")

    async def cleanup(self) -> None:
        """Clean up resources."""
        pass  # SQLite connection is managed per operation

    async def backup(self, backup_dir: str) -> None:
        backup_database(self.db_path, backup_dir, STORAGEDB)

    async def restore_from_backup(self, backup_dir: str) -> None:
        restore_database(backup_dir, self.db_path, STORAGEDB)

    async def get_revision(self) -> int:
        try:
            async with aiosqlite.connect(self.db_path) as db:
                async with db.execute(SELECT_REVISION) as cursor:
                    row = await cursor.fetchone()
                    return row[0] if row else 0
        except sqlite3.Error as e:
            logger.error(f"Failed to read revision: {str(e)}")
            raise StorageError(f"Failed to read revision: {str(e)}") from e

    async def edges_where(
        self,
        departure: Optional[str] = None,
        destination: Optional[str] = None,
        directed: Optional[bool] = None,
        comment: Optional[str] = None,
        cost: Optional[int] = None,
    ) -> List[Edge]:
        query, params = build_edge_filter_query(
            departure=departure,
            destination=destination,
            directed=directed,
            comment=comment,
            cost=cost,
        )
        try:
            async with aiosqlite.connect(self.db_path) as db:
                async with db.execute(query, params) as cursor:
                    return [row_to_edge(row) async for row in cursor]
        except sqlite3.Error as e:
            logger.error(f"Failed to list edges: {str(e)}")
            raise StorageError(f"Failed to list edges: {str(e)}") from e

    async def insert_edge(self, key: EdgeKey) -> Edge:
        row = (
            key.departure,
            key.destination,
            int(key.directed),
            key.cost,
            key.comment,
            datetime.now().isoformat(),
        )
        try:
            async with aiosqlite.connect(self.db_path) as db:
                try:
                    cursor = await db.execute(INSERT_EDGE, row)
                except sqlite3.IntegrityError as e:
                    raise DuplicateEdgeError(f"Edge already exists: {key}") from e
                edge_id = cursor.lastrowid
                await db.execute(BUMP_REVISION)
                await db.commit()
                async with db.execute(SELECT_EDGE_BY_ID, (edge_id,)) as select:
                    edge = row_to_edge(await select.fetchone())
        except DuplicateEdgeError:
            raise
        except sqlite3.Error as e:
            logger.error(f"Failed to create edge: {str(e)}")
            raise StorageError(f"Failed to create edge: {str(e)}") from e
        logger.debug(f"Created edge {edge.id}: {edge}")
        return edge

    async def _delete(self, query: str, params: tuple) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(query, params)
            deleted = cursor.rowcount
            if deleted:
                await db.execute(BUMP_REVISION)
            await db.commit()
            return deleted

    async def destroy_edge(self, edge: Edge) -> bool:
        try:
            deleted = await self._delete(DELETE_EDGE, (int(edge.id),))
        except (sqlite3.Error, ValueError) as e:
            logger.error(f"Failed to delete edge: {str(e)}")
            raise StorageError(f"Failed to delete edge: {str(e)}") from e
        return deleted > 0

    async def destroy_node_edges(self, node_id: str) -> int:
        try:
            deleted = await self._delete(DELETE_NODE_EDGES, (node_id, node_id))
        except sqlite3.Error as e:
            logger.error(f"Failed to delete edges of node {node_id}: {str(e)}")
            raise StorageError(f"Failed to delete edges of node {node_id}: {str(e)}") from e
        logger.debug(f"Destroyed {deleted} edges touching node {node_id}")
        return deleted
