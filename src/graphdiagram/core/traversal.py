"""
Graph traversal system using iterator pattern.

Breadth-first and depth-first iterators over a ``Graph`` snapshot. Both
expand neighbours in ascending id order and keep a visited set, so they are
deterministic and terminate on cyclic graphs.

The start node is always yielded first, even when the graph has never seen
it: an unknown node simply has no neighbours.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Dict, Iterator, List, Set, Tuple, Type

from .graph import Graph


class GraphIterator(ABC):
    """Base class for graph traversal iterators."""

    def __init__(self, graph: Graph, start_node: str):
        """
        Initialize iterator.

        Args:
            graph: The graph to traverse
            start_node: Starting node for traversal
        """
        self.graph = graph
        self.start = start_node
        self.visited: Set[str] = set()

    @abstractmethod
    def __iter__(self) -> Iterator[Tuple[str, int]]:
        """
        Get iterator for traversal.

        Returns:
            Iterator yielding tuples of (node_id, depth)
        """


class BFSIterator(GraphIterator):
    """Breadth-first traversal iterator."""

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        queue = deque([(self.start, 0)])
        self.visited.add(self.start)

        while queue:
            node, depth = queue.popleft()
            yield node, depth

            for neighbor in self.graph.get_neighbors(node):
                if neighbor not in self.visited:
                    self.visited.add(neighbor)
                    queue.append((neighbor, depth + 1))


class DFSIterator(GraphIterator):
    """Depth-first (pre-order) traversal iterator."""

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        stack = [(self.start, 0, iter(self.graph.get_neighbors(self.start)))]
        self.visited.add(self.start)
        yield self.start, 0

        while stack:
            node, depth, neighbors = stack[-1]
            neighbor = next(neighbors, None)
            if neighbor is None:
                stack.pop()
                continue
            if neighbor not in self.visited:
                self.visited.add(neighbor)
                yield neighbor, depth + 1
                stack.append((neighbor, depth + 1, iter(self.graph.get_neighbors(neighbor))))


STRATEGIES: Dict[str, Type[GraphIterator]] = {
    "bfs": BFSIterator,
    "dfs": DFSIterator,
}


def iterate(graph: Graph, start_node: str, strategy: str = "bfs") -> GraphIterator:
    """
    Get an iterator for traversing the graph.

    Args:
        graph: Graph to traverse
        start_node: Starting node for traversal
        strategy: 'bfs' or 'dfs'

    Raises:
        ValueError: If strategy is not recognized
    """
    if strategy not in STRATEGIES:
        raise ValueError(
            f"Unknown traversal strategy '{strategy}'. "
            f"Valid strategies are: {', '.join(STRATEGIES)}"
        )
    return STRATEGIES[strategy](graph, start_node)


def reachable_from(graph: Graph, start_node: str) -> List[str]:
    """Nodes reachable from start_node (itself included) in BFS order."""
    return [node for node, _ in BFSIterator(graph, start_node)]
