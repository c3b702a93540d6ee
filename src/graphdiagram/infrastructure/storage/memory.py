"""In-memory implementation of the edge store."""

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional

from ...core.exceptions import DuplicateEdgeError, StorageError
from ...core.models import Edge, EdgeKey
from .base import EdgeStore
from .utils import build_filters, edge_matches_filters

logger = logging.getLogger(__name__)


class MemoryEdgeStore(EdgeStore):
    """
    Edge store keeping every edge in process memory.

    Mutations run under an ``asyncio.Lock``; lookups build their result
    without yielding to the event loop, so a reader never sees an edge that
    is half created or half removed.

    Attributes:
        _edges (Dict[str, Edge]): Edges by id, in creation order
        _keys (Dict[EdgeKey, str]): Unique index from edge key to id
    """

    def __init__(self):
        self._edges: Dict[str, Edge] = {}
        self._keys: Dict[EdgeKey, str] = {}
        self._next_id = 1
        self._revision = 0
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Nothing to load for a memory store."""
        logger.info("Initialized in-memory edge storage")

    async def cleanup(self) -> None:
        """Drop all edges."""
        async with self._lock:
            self._replace_all([], 1)

    async def backup(self, backup_dir: str) -> None:
        raise StorageError("In-memory edge storage does not support backups")

    async def restore_from_backup(self, backup_dir: str) -> None:
        raise StorageError("In-memory edge storage does not support backups")

    async def get_revision(self) -> int:
        return self._revision

    def _replace_all(self, edges: List[Edge], next_id: int) -> None:
        """Swap in a complete edge set (used by loaders and cleanup)."""
        self._edges = {edge.id: edge for edge in edges}
        self._keys = {edge.key: edge.id for edge in edges}
        self._next_id = next_id
        self._revision += 1

    async def edges_where(
        self,
        departure: Optional[str] = None,
        destination: Optional[str] = None,
        directed: Optional[bool] = None,
        comment: Optional[str] = None,
        cost: Optional[int] = None,
    ) -> List[Edge]:
        filters = build_filters(departure, destination, directed, comment, cost)
        return [edge for edge in self._edges.values() if edge_matches_filters(edge, filters)]

    async def find_edge(self, key: EdgeKey) -> Optional[Edge]:
        edge_id = self._keys.get(key)
        return self._edges.get(edge_id) if edge_id is not None else None

    async def insert_edge(self, key: EdgeKey) -> Edge:
        async with self._lock:
            if key in self._keys:
                raise DuplicateEdgeError(f"Edge already exists: {key}")

            edge = Edge(
                id=str(self._next_id),
                departure=key.departure,
                destination=key.destination,
                directed=key.directed,
                cost=key.cost,
                comment=key.comment,
                created_at=datetime.now(),
            )
            await self._persist_insert(edge)
            self._edges[edge.id] = edge
            self._keys[key] = edge.id
            self._next_id += 1
            self._revision += 1
            logger.debug(f"Created edge {edge.id}: {edge}")
            return edge

    async def destroy_edge(self, edge: Edge) -> bool:
        async with self._lock:
            if edge.id not in self._edges:
                return False
            remaining = [e for e in self._edges.values() if e.id != edge.id]
            await self._persist_edges(remaining, self._next_id)
            stored = self._edges.pop(edge.id)
            del self._keys[stored.key]
            self._revision += 1
            logger.debug(f"Destroyed edge {edge.id}")
            return True

    async def destroy_node_edges(self, node_id: str) -> int:
        async with self._lock:
            doomed = [edge for edge in self._edges.values() if edge.touches(node_id)]
            if not doomed:
                return 0
            remaining = [edge for edge in self._edges.values() if not edge.touches(node_id)]
            await self._persist_edges(remaining, self._next_id)
            for edge in doomed:
                del self._edges[edge.id]
                del self._keys[edge.key]
            self._revision += 1
            logger.debug(f"Destroyed {len(doomed)} edges touching node {node_id}")
            return len(doomed)

    # Persistence hooks, called under the lock before memory is changed.

    async def _persist_insert(self, edge: Edge) -> None:
        """Persist a new edge; the memory store keeps nothing outside the process."""

    async def _persist_edges(self, edges: List[Edge], next_id: int) -> None:
        """Persist a full edge set; the memory store keeps nothing outside the process."""
