"""
In-memory graph snapshot with an adjacency list representation.

The graph calculator loads edges from storage and hands them to this class;
every algorithm then runs on the snapshot without touching storage again.

Each stored edge becomes one or two arcs:
- a directed edge gives one arc departure -> destination
- an undirected edge gives arcs in both directions (one for a self-loop)

Arcs out of a node are kept in a deterministic order (target id, then cost,
then edge id) so traversal and tie-breaking are reproducible.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from .models import Edge


def edge_sort_key(edge: Edge) -> Tuple[int, int, str]:
    """Order parallel edges by cost, then by id (numeric ids in numeric order)."""
    return (edge.cost, len(edge.id), edge.id)


@dataclass(frozen=True)
class Arc:
    """One traversable direction of an edge."""

    source: str
    target: str
    edge: Edge

    @property
    def cost(self) -> int:
        return self.edge.cost


class Graph:
    """
    Graph snapshot built from edges.

    Attributes:
        _arcs (Dict[str, List[Arc]]): Outgoing arcs per node
        _reverse (Dict[str, Set[str]]): Nodes with an arc into each node
        _nodes (Set[str]): Every node seen, including isolated ones
        _edges (Dict[str, Edge]): Edges by id
    """

    def __init__(self, edges: Iterable[Edge] = ()):
        """
        Initialize graph from edges.

        Args:
            edges: Edges defining the connections between nodes
        """
        self._arcs: Dict[str, List[Arc]] = defaultdict(list)
        self._reverse: Dict[str, Set[str]] = defaultdict(set)
        self._nodes: Set[str] = set()
        self._edges: Dict[str, Edge] = {}
        self._sorted: Set[str] = set()
        for edge in edges:
            self.add_edge(edge)

    @classmethod
    def from_edges(cls, edges: Iterable[Edge]) -> "Graph":
        """Create a Graph instance from edges."""
        return cls(edges)

    def add_node(self, node: str) -> None:
        """Add a node even if it has no edges."""
        self._nodes.add(node)

    def add_edge(self, edge: Edge) -> None:
        """Add an edge; adding the same edge twice has no effect."""
        if edge.id in self._edges:
            return
        self._edges[edge.id] = edge
        self._nodes.update((edge.departure, edge.destination))
        self._add_arc(Arc(edge.departure, edge.destination, edge))
        if not edge.directed and edge.departure != edge.destination:
            self._add_arc(Arc(edge.destination, edge.departure, edge))

    def _add_arc(self, arc: Arc) -> None:
        self._arcs[arc.source].append(arc)
        self._reverse[arc.target].add(arc.source)
        self._sorted.discard(arc.source)

    def arcs(self, node: str) -> List[Arc]:
        """Outgoing arcs of node in deterministic order."""
        if node not in self._arcs:
            return []
        if node not in self._sorted:
            self._arcs[node].sort(key=lambda arc: (arc.target, *edge_sort_key(arc.edge)))
            self._sorted.add(node)
        return list(self._arcs[node])

    def get_neighbors(self, node: str, reverse: bool = False) -> List[str]:
        """
        Distinct neighbours of node in ascending id order.

        Args:
            node: Node to inspect
            reverse: Return nodes with an arc into node instead
        """
        if reverse:
            return sorted(self._reverse.get(node, ()))
        seen: List[str] = []
        for arc in self.arcs(node):
            if not seen or seen[-1] != arc.target:
                seen.append(arc.target)
        return seen

    def get_edge(self, edge_id: str) -> Edge:
        """Get an edge by id; raises KeyError if absent."""
        return self._edges[edge_id]

    def has_node(self, node: str) -> bool:
        """Check if a node exists in the graph."""
        return node in self._nodes

    def get_nodes(self) -> Set[str]:
        """Get all nodes in the graph."""
        return set(self._nodes)

    def get_edges(self) -> Iterator[Edge]:
        """Get all edges in the graph."""
        yield from self._edges.values()

    def get_edge_count(self) -> int:
        """Get the total number of edges in the graph."""
        return len(self._edges)

    def degree(self, node: str) -> int:
        """
        Number of incident edges of node.

        Directed edges count once per endpoint role (a directed self-loop
        counts twice); an undirected edge counts once.
        """
        total = 0
        for edge in self._edges.values():
            if edge.directed:
                total += (edge.departure == node) + (edge.destination == node)
            elif edge.touches(node):
                total += 1
        return total
