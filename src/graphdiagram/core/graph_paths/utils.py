"""
Utility functions for path finding operations.
"""

import gc
import logging
import os
import time
from dataclasses import dataclass
from heapq import heappop, heappush
from typing import Dict, List, Optional, Tuple

import psutil

from ..models import Edge

logger = logging.getLogger(__name__)

MAX_QUEUE_SIZE = 100000  # Maximum size for priority queues


@dataclass
class PathState:
    """Immutable link in a chain of path states."""

    __slots__ = ("node", "prev_edge", "prev_state", "depth", "total_cost")

    node: str
    prev_edge: Optional[Edge]
    prev_state: Optional["PathState"]
    depth: int
    total_cost: int

    def get_path(self) -> Tuple[List[Edge], List[str]]:
        """Reconstruct the edges and visited nodes from the state chain."""
        edges: List[Edge] = []
        nodes: List[str] = [self.node]
        current = self
        while current.prev_state is not None:
            edges.append(current.prev_edge)
            current = current.prev_state
            nodes.append(current.node)
        edges.reverse()
        nodes.reverse()
        return edges, nodes


class PriorityQueue:
    """
    Priority queue with decrease-key.

    Equal priorities pop in insertion order, which makes searches that use it
    deterministic.
    """

    def __init__(self, maxsize: int = MAX_QUEUE_SIZE):
        self._queue: List[Tuple[int, int, str]] = []
        self._entry_finder: Dict[str, Tuple[int, int]] = {}
        self._counter = 0  # Unique counter to break ties
        self._maxsize = maxsize

    def add_or_update(self, item: str, priority: int) -> None:
        """Insert item, or lower its priority if it is already queued."""
        if item in self._entry_finder and priority >= self._entry_finder[item][0]:
            return
        if len(self._entry_finder) >= self._maxsize and item not in self._entry_finder:
            raise MemoryError(f"Priority queue exceeded {self._maxsize} entries")

        entry = (priority, self._counter, item)
        self._entry_finder[item] = (priority, self._counter)
        heappush(self._queue, entry)
        self._counter += 1

    def pop(self) -> Optional[Tuple[int, str]]:
        """Remove and return the item with the lowest priority."""
        while self._queue:
            priority, count, item = heappop(self._queue)
            if self._entry_finder.get(item) == (priority, count):
                del self._entry_finder[item]
                return (priority, item)
        return None

    def empty(self) -> bool:
        """Return True if the queue is empty."""
        return len(self._entry_finder) == 0

    def __len__(self) -> int:
        """Return the number of valid items in the queue."""
        return len(self._entry_finder)


class MemoryManager:
    """Memory limit guard for graph algorithms."""

    def __init__(self, max_memory_mb: Optional[float] = None):
        """Initialize memory manager; no limit when max_memory_mb is None."""
        self.max_memory = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._last_check = time.monotonic()
        self._check_interval = 0.1  # Check memory every 100ms

    def check_memory(self) -> None:
        """
        Check if memory growth since start exceeds the limit.

        Raises:
            MemoryError: If the limit is still exceeded after a collection
        """
        if not self.max_memory:
            return

        current_time = time.monotonic()
        if current_time - self._last_check < self._check_interval:
            return
        self._last_check = current_time

        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)

        if current - self.start_memory > self.max_memory:
            gc.collect()
            current = get_memory_usage()
            if current - self.start_memory > self.max_memory:
                raise MemoryError(
                    f"Memory usage {current/1024/1024:.1f}MB exceeds "
                    f"limit of {self.max_memory/1024/1024:.1f}MB"
                )

    @property
    def peak_memory_mb(self) -> float:
        """Get peak memory usage in MB."""
        return self._peak_memory / 1024 / 1024


def get_memory_usage() -> int:
    """Get current memory usage in bytes."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss
