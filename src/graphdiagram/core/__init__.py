"""Core graph functionality."""

from .exceptions import (
    ConfigurationError,
    DuplicateEdgeError,
    GraphOperationError,
    NegativeCostError,
    NegativeCycleError,
    StorageError,
    ValidationError,
)
from .graph import Graph
from .graph_components import ComponentAnalysis
from .models import Edge, EdgeKey, node_id_of

__all__ = [
    "ComponentAnalysis",
    "ConfigurationError",
    "DuplicateEdgeError",
    "Edge",
    "EdgeKey",
    "Graph",
    "GraphOperationError",
    "NegativeCostError",
    "NegativeCycleError",
    "StorageError",
    "ValidationError",
    "node_id_of",
]
