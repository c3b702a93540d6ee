"""
Edge models for the graph diagram system.

An edge connects exactly two nodes. Directed edges run from ``departure`` to
``destination``; undirected edges ("connections") are stored once with an
arbitrary orientation and are discoverable from either endpoint.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, NamedTuple

from ...utils.validation import validate_edge_fields


class EdgeKey(NamedTuple):
    """
    Deduplication identity of an edge.

    Two edges with equal keys are the same edge; creation operations must
    never store a second one.
    """

    departure: str
    destination: str
    directed: bool
    cost: int
    comment: str


@dataclass(frozen=True)
class Edge:
    """
    A persisted connection between two nodes.

    Attributes:
        id (str): Store-assigned identity
        departure (str): Source node id
        destination (str): Target node id
        directed (bool): False for undirected connections
        cost (int): Weight used by shortest path calculations
        comment (str): Free-form label
        created_at (datetime): Creation timestamp
    """

    id: str
    departure: str
    destination: str
    directed: bool = True
    cost: int = 0
    comment: str = ""
    created_at: datetime = field(default_factory=datetime.now, compare=False)

    def __post_init__(self):
        """Validate edge fields after initialization."""
        if not isinstance(self.id, str) or not self.id:
            raise TypeError("id must be a non-empty string")
        validate_edge_fields(self.fields())

    @property
    def key(self) -> EdgeKey:
        """The deduplication tuple of this edge."""
        return EdgeKey(self.departure, self.destination, self.directed, self.cost, self.comment)

    def fields(self) -> Dict[str, Any]:
        """Return the user-supplied fields as a dictionary."""
        return self.key._asdict()

    def touches(self, node_id: str) -> bool:
        """Check whether node_id is an endpoint of this edge."""
        return node_id in (self.departure, self.destination)

    def other(self, node_id: str) -> str:
        """
        Return the endpoint opposite to node_id.

        Raises:
            ValueError: If node_id is not an endpoint
        """
        if node_id == self.departure:
            return self.destination
        if node_id == self.destination:
            return self.departure
        raise ValueError(f"Node {node_id} is not an endpoint of edge {self.id}")

    def joins(self, a: str, b: str) -> bool:
        """Check whether this edge joins a and b, ignoring orientation when undirected."""
        if self.departure == a and self.destination == b:
            return True
        return not self.directed and self.departure == b and self.destination == a

    def __str__(self) -> str:
        arrow = "->" if self.directed else "--"
        return f"{self.departure} {arrow} {self.destination} (cost={self.cost})"
