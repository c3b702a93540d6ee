"""
Data models for graph path finding.

- PathResult: the edges of a path, the nodes it visits and its total cost
- PathValidationError: raised when a PathResult is internally inconsistent

Undirected edges may be walked against their stored orientation, so the
node sequence is kept explicitly instead of being derived from the edges.

Example:
    >>> result = calculator_result  # PathResult
    >>> result.nodes
    ['A', 'C', 'B']
    >>> result.total_cost
    2
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

from ..models import Edge


class PathValidationError(Exception):
    """
    Raised when a path fails validation checks.

    This exception indicates issues such as:
    - Node sequence not matching the number of edges
    - An edge that does not join consecutive nodes
    - A directed edge walked backwards
    - Total cost not equal to the sum of edge costs
    """


@dataclass
class PathResult:
    """
    Container for path finding results.

    Attributes:
        path: Edges in traversal order
        total_cost: Sum of the edge costs
        nodes: Visited node ids, one more than the number of edges
    """

    path: List[Edge]
    total_cost: int
    nodes: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate initialization parameters."""
        if not isinstance(self.path, list):
            raise TypeError("path must be a list")
        if not all(isinstance(edge, Edge) for edge in self.path):
            raise TypeError("path must contain only Edge objects")
        if not isinstance(self.total_cost, int) or isinstance(self.total_cost, bool):
            raise TypeError("total_cost must be an integer")

    def __len__(self) -> int:
        """Return the number of edges in the path."""
        return len(self.path)

    def __getitem__(self, index: int) -> Edge:
        """Get an edge from the path by index."""
        return self.path[index]

    def __iter__(self) -> Iterator[Edge]:
        """Return an iterator over the path edges."""
        return iter(self.path)

    @property
    def length(self) -> int:
        """Number of edges in the path."""
        return len(self.path)

    def validate(self) -> None:
        """
        Validate the path's consistency.

        Raises:
            PathValidationError: If any validation check fails
        """
        if len(self.nodes) != len(self.path) + 1:
            raise PathValidationError(
                f"Path with {len(self.path)} edges must visit {len(self.path) + 1} nodes, "
                f"got {len(self.nodes)}"
            )

        for i, edge in enumerate(self.path):
            here, there = self.nodes[i], self.nodes[i + 1]
            if edge.directed and (edge.departure, edge.destination) != (here, there):
                raise PathValidationError(
                    f"Directed edge {edge.id} at index {i} does not run {here} -> {there}"
                )
            if not edge.directed and not edge.joins(here, there):
                raise PathValidationError(
                    f"Undirected edge {edge.id} at index {i} does not join {here} and {there}"
                )

        calculated = sum(edge.cost for edge in self.path)
        if calculated != self.total_cost:
            raise PathValidationError(
                f"Cost mismatch: calculated {calculated} != stored {self.total_cost}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-compatible dictionary."""
        return {
            "nodes": list(self.nodes),
            "total_cost": self.total_cost,
            "edges": [
                {
                    "id": edge.id,
                    "departure": edge.departure,
                    "destination": edge.destination,
                    "directed": edge.directed,
                    "cost": edge.cost,
                    "comment": edge.comment,
                }
                for edge in self.path
            ],
        }
