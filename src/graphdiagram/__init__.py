"""
graphdiagram - Graph diagrams built from stored edges

This package keeps a graph as a set of persisted edges between opaque node
identifiers. It includes:

- Connection management on nodes (destinations, departures, connections)
- Graph calculations (reachability, degree, shortest path, traversal)
- Pluggable edge storage (memory, JSON file, SQLite)
"""

__version__ = "0.1.0"
__author__ = "graphdiagram Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 10):
    raise RuntimeError("graphdiagram requires Python 3.10 or higher")

# Import commonly used components for easier access
from .core.calculator import GraphCalculator
from .core.graph import Graph
from .core.graph_paths import PathResult
from .core.models import Edge
from .core.node import Node
from .infrastructure.storage import StorageService
from .repositories import EdgeRepository

__all__ = [
    "Edge",
    "EdgeRepository",
    "Graph",
    "GraphCalculator",
    "Node",
    "PathResult",
    "StorageService",
]
