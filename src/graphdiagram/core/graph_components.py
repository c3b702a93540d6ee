"""Connected component analysis.

Weakly connected components treat every edge as undirected: two nodes share
a component when a chain of edges joins them regardless of direction.
"""

from collections import defaultdict, deque
from typing import Dict, List, Set

from .graph import Graph


class ComponentAnalysis:
    """Connected component analysis over a ``Graph`` snapshot."""

    @staticmethod
    def _build_undirected_adjacency(graph: Graph) -> Dict[str, Set[str]]:
        """Build undirected adjacency map from the graph's edges."""
        undirected_adjacency: Dict[str, Set[str]] = defaultdict(set)
        for edge in graph.get_edges():
            undirected_adjacency[edge.departure].add(edge.destination)
            undirected_adjacency[edge.destination].add(edge.departure)
        return undirected_adjacency

    @staticmethod
    def _find_component_bfs(
        start: str, adjacency: Dict[str, Set[str]], visited: Set[str]
    ) -> Set[str]:
        """Find all nodes in a component using breadth-first search."""
        component = {start}
        queue = deque([start])
        visited.add(start)

        while queue:
            current_node = queue.popleft()
            for neighbor in adjacency.get(current_node, ()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    component.add(neighbor)
                    queue.append(neighbor)

        return component

    @staticmethod
    def find_components(graph: Graph) -> List[Set[str]]:
        """
        Find weakly connected components.

        Returns:
            Components ordered by their smallest node id
        """
        components = []
        visited: Set[str] = set()
        adjacency = ComponentAnalysis._build_undirected_adjacency(graph)

        for node in sorted(graph.get_nodes()):
            if node not in visited:
                components.append(ComponentAnalysis._find_component_bfs(node, adjacency, visited))

        return components
