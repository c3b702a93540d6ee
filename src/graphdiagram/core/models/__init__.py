"""
Core domain models package for the graph diagram system.

This package provides the edge record, its deduplication key and the helper
that resolves node references to identifiers.
"""

from .base import node_id_of
from .edge import Edge, EdgeKey

__all__ = [
    # Base utilities
    "node_id_of",
    # Edge models
    "Edge",
    "EdgeKey",
]
