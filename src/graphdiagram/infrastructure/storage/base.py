"""
Core interface for edge storage backends.

The connection manager and the graph calculator depend on storage only
through ``EdgeStore``. A backend provides:

- filtered lookup of edges (``edges_where``)
- a strict insert that refuses duplicates (``insert_edge``)
- removal of single edges and of every edge touching a node
- a revision number that changes on every mutation

On top of the strict insert this class implements the idempotent
``create_edge``: read the key, insert if absent, and re-read on conflict.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ...core.exceptions import DuplicateEdgeError, StorageError
from ...core.models import Edge, EdgeKey

logger = logging.getLogger(__name__)

MAX_CREATE_RETRIES = 3


class EdgeStore(ABC):
    """
    Abstract base class for edge stores.

    All methods are coroutines. Edges are returned in creation order, which
    makes "first matching edge" deterministic across backends.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """
        Prepare the store for use (create tables, load files).

        Raises:
            StorageError: If initialization fails
        """

    @abstractmethod
    async def cleanup(self) -> None:
        """Release any resources held by the store."""

    @abstractmethod
    async def backup(self, backup_dir: str) -> None:
        """
        Copy the current edge data into backup_dir.

        Raises:
            StorageError: If backup operation fails
        """

    @abstractmethod
    async def restore_from_backup(self, backup_dir: str) -> None:
        """
        Replace the current edge data with the copy in backup_dir.

        Raises:
            StorageError: If restore operation fails
        """

    @abstractmethod
    async def get_revision(self) -> int:
        """Return a number that changes whenever an edge is created or destroyed."""

    @abstractmethod
    async def edges_where(
        self,
        departure: Optional[str] = None,
        destination: Optional[str] = None,
        directed: Optional[bool] = None,
        comment: Optional[str] = None,
        cost: Optional[int] = None,
    ) -> List[Edge]:
        """
        Return edges matching every given filter, in creation order.

        A filter left as None matches any value.

        Raises:
            StorageError: If the lookup fails
        """

    @abstractmethod
    async def insert_edge(self, key: EdgeKey) -> Edge:
        """
        Store a new edge for key.

        Raises:
            DuplicateEdgeError: If an edge with the same key already exists
            StorageError: If the insert fails for any other reason
        """

    @abstractmethod
    async def destroy_edge(self, edge: Edge) -> bool:
        """
        Delete edge.

        Returns:
            True if the edge was deleted, False if it was already gone
        """

    @abstractmethod
    async def destroy_node_edges(self, node_id: str) -> int:
        """
        Delete every edge with node_id as an endpoint.

        Returns:
            Number of edges deleted
        """

    async def all_edges(self) -> List[Edge]:
        """Return every stored edge in creation order."""
        return await self.edges_where()

    async def find_edge(self, key: EdgeKey) -> Optional[Edge]:
        """Return the edge stored under key, or None."""
        matches = await self.edges_where(**key._asdict())
        return matches[0] if matches else None

    async def create_edge(
        self,
        departure: str,
        destination: str,
        directed: bool = True,
        comment: str = "",
        cost: int = 0,
    ) -> Edge:
        """
        Return the edge for the given fields, inserting it if absent.

        Concurrent callers racing on the same key all receive the single
        stored edge: a losing insert raises DuplicateEdgeError inside the
        backend, and the winner is read back.

        Raises:
            StorageError: If the edge can be neither found nor inserted
        """
        key = EdgeKey(departure, destination, directed, cost, comment)
        for attempt in range(1, MAX_CREATE_RETRIES + 1):
            existing = await self.find_edge(key)
            if existing is not None:
                return existing
            try:
                return await self.insert_edge(key)
            except DuplicateEdgeError:
                logger.debug(f"Insert conflict on {key} (attempt {attempt}), re-reading")
        raise StorageError(f"Could not create edge {key} after {MAX_CREATE_RETRIES} attempts")
