"""Graph path finding functionality."""

from .algorithms.shortest_path import ShortestPathFinder
from .models import PathResult, PathValidationError
from .utils import MAX_QUEUE_SIZE, MemoryManager, PathState, PriorityQueue

__all__ = [
    "ShortestPathFinder",
    "PathResult",
    "PathValidationError",
    "PathState",
    "PriorityQueue",
    "MemoryManager",
    "MAX_QUEUE_SIZE",
]
