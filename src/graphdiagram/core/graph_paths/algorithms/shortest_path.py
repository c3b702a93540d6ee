"""
Shortest path algorithms over a graph snapshot.

Dijkstra for non-negative costs, Bellman-Ford when negative costs are
explicitly allowed. Both are deterministic: arcs are relaxed in the graph's
arc order (target id, cost, edge id) and a recorded distance is only
replaced by a strictly lower one, so among equal-cost paths the first one
discovered wins.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ...exceptions import NegativeCostError, NegativeCycleError
from ...graph import Arc, Graph
from ...models import Edge
from ..models import PathResult
from ..utils import MAX_QUEUE_SIZE, MemoryManager, PathState, PriorityQueue

logger = logging.getLogger(__name__)


class ShortestPathFinder:
    """Lowest-total-cost path search."""

    def __init__(self, graph: Graph, max_memory_mb: Optional[float] = None):
        """Initialize finder with optional memory limit."""
        self.graph = graph
        self.memory_manager = MemoryManager(max_memory_mb)

    def find_path(
        self,
        start_node: str,
        end_node: str,
        allow_negative: bool = False,
        max_length: Optional[int] = None,
    ) -> Optional[PathResult]:
        """
        Find the cheapest path from start_node to end_node.

        Args:
            start_node: Node to start from
            end_node: Node to reach
            allow_negative: Use Bellman-Ford and accept negative costs
            max_length: Maximum number of edges (Dijkstra only)

        Returns:
            The path, or None if end_node is unreachable

        Raises:
            NegativeCostError: If a negative cost is met and allow_negative is False
            NegativeCycleError: If allow_negative is True and a negative cycle is reachable
        """
        if start_node == end_node:
            return PathResult(path=[], total_cost=0, nodes=[start_node])

        if allow_negative:
            return self._bellman_ford(start_node, end_node)

        for edge in self.graph.get_edges():
            if edge.cost < 0:
                raise NegativeCostError(
                    f"Negative cost {edge.cost} on edge {edge.id} "
                    f"({edge.departure} -> {edge.destination})"
                )
        return self._dijkstra(start_node, end_node, max_length)

    def _dijkstra(
        self, start_node: str, end_node: str, max_length: Optional[int]
    ) -> Optional[PathResult]:
        """Dijkstra's algorithm implementation."""
        logger.debug(f"Starting Dijkstra's algorithm from {start_node} to {end_node}")

        pq = PriorityQueue(maxsize=MAX_QUEUE_SIZE)
        pq.add_or_update(start_node, 0)

        distances: Dict[str, int] = {start_node: 0}
        states: Dict[str, PathState] = {start_node: PathState(start_node, None, None, 0, 0)}
        settled = set()

        while not pq.empty():
            self.memory_manager.check_memory()

            current = pq.pop()
            if current is None:
                break
            current_dist, current_node = current
            settled.add(current_node)
            current_state = states[current_node]

            if current_node == end_node:
                edges, nodes = current_state.get_path()
                logger.debug(f"Found path {nodes} with cost {current_dist}")
                return PathResult(path=edges, total_cost=current_dist, nodes=nodes)

            if max_length is not None and current_state.depth >= max_length:
                continue

            for arc in self.graph.arcs(current_node):
                if arc.target in settled:
                    continue
                new_dist = current_dist + arc.cost
                if arc.target not in distances or new_dist < distances[arc.target]:
                    distances[arc.target] = new_dist
                    states[arc.target] = PathState(
                        arc.target, arc.edge, current_state, current_state.depth + 1, new_dist
                    )
                    pq.add_or_update(arc.target, new_dist)

        logger.debug(f"No path from {start_node} to {end_node}")
        return None

    def _relax_all(
        self,
        nodes: List[str],
        distances: Dict[str, int],
        predecessors: Dict[str, Arc],
    ) -> bool:
        """Relax every arc once; returns True if any distance improved."""
        relaxed = False
        for node in nodes:
            if node not in distances:
                continue
            for arc in self.graph.arcs(node):
                new_dist = distances[node] + arc.cost
                if arc.target not in distances or new_dist < distances[arc.target]:
                    distances[arc.target] = new_dist
                    predecessors[arc.target] = arc
                    relaxed = True
        return relaxed

    def _bellman_ford(self, start_node: str, end_node: str) -> Optional[PathResult]:
        """Bellman-Ford algorithm implementation."""
        logger.debug(f"Starting Bellman-Ford from {start_node} to {end_node}")

        nodes = sorted(self.graph.get_nodes() | {start_node})
        distances: Dict[str, int] = {start_node: 0}
        predecessors: Dict[str, Arc] = {}

        for _ in range(len(nodes) - 1):
            self.memory_manager.check_memory()
            if not self._relax_all(nodes, distances, predecessors):
                break
        else:
            if self._relax_all(nodes, distances, predecessors):
                raise NegativeCycleError(f"Negative cycle reachable from {start_node}")

        if end_node not in distances:
            return None

        edges, path_nodes = self._walk_back(start_node, end_node, predecessors)
        return PathResult(path=edges, total_cost=distances[end_node], nodes=path_nodes)

    @staticmethod
    def _walk_back(
        start_node: str, end_node: str, predecessors: Dict[str, Arc]
    ) -> Tuple[List[Edge], List[str]]:
        edges: List[Edge] = []
        nodes = [end_node]
        current = end_node
        while current != start_node:
            arc = predecessors[current]
            edges.append(arc.edge)
            current = arc.source
            if current in nodes:
                raise NegativeCycleError(f"Negative cycle reachable from {start_node}")
            nodes.append(current)
        edges.reverse()
        nodes.reverse()
        return edges, nodes
