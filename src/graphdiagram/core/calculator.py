"""
Graph calculations over stored edges.

``GraphCalculator`` answers reachability, degree and shortest path questions
from the current contents of an ``EdgeStore``. It keeps no graph state of its
own: each call walks outward from the start node, fetching incident edges
one node at a time, and runs the algorithm on the in-memory ``Graph`` built
from what it reached.

Arcs follow edge direction. A directed edge can only be walked from its
departure to its destination; an undirected edge can be walked both ways.
"""

import logging
from collections import deque
from typing import Any, List, Optional, Set, Tuple

from ..infrastructure.cache import LRUCache
from ..infrastructure.storage import EdgeStore
from .exceptions import GraphOperationError
from .graph import Graph
from .graph_components import ComponentAnalysis
from .graph_paths import PathResult, ShortestPathFinder
from .models import Edge, node_id_of
from .selectors import select_departures, select_destinations
from .traversal import iterate, reachable_from

logger = logging.getLogger(__name__)


class GraphCalculator:
    """
    Stateless graph calculator backed by an edge store.

    Attributes:
        store (EdgeStore): Source of edge data
        cache (Optional[LRUCache]): Incident edge lists keyed by (revision, node)
        max_nodes (Optional[int]): Exploration limit, None for unlimited
        max_memory_mb (Optional[float]): Memory limit for path searches
    """

    def __init__(
        self,
        store: EdgeStore,
        cache: Optional[LRUCache[List[Edge]]] = None,
        max_nodes: Optional[int] = None,
        max_memory_mb: Optional[float] = None,
    ):
        if max_nodes is not None and max_nodes < 1:
            raise ValueError("max_nodes must be positive")
        self.store = store
        self.cache = cache
        self.max_nodes = max_nodes
        self.max_memory_mb = max_memory_mb

    async def _incident_edges(self, node_id: str) -> List[Edge]:
        """Every edge touching node_id, leaving edges first, in creation order."""
        cache_key: Optional[Tuple[int, str]] = None
        if self.cache is not None:
            cache_key = (await self.store.get_revision(), node_id)
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for incident edges of {node_id}")
                return cached

        leaving = await self.store.edges_where(departure=node_id)
        arriving = await self.store.edges_where(destination=node_id)
        seen = {edge.id for edge in leaving}
        edges = leaving + [edge for edge in arriving if edge.id not in seen]

        if cache_key is not None:
            self.cache.put(cache_key, edges)
        return edges

    async def _explore(self, start: str, target: Optional[str] = None) -> Tuple[Graph, bool]:
        """
        Build the sub-graph reachable from start.

        Exploration stops early once target is discovered.

        Returns:
            The reached sub-graph and whether target was discovered

        Raises:
            GraphOperationError: If more than max_nodes nodes are reached
        """
        graph = Graph()
        graph.add_node(start)
        seen: Set[str] = {start}
        queue = deque([start])

        while queue:
            node = queue.popleft()
            for edge in await self._incident_edges(node):
                if edge.directed and edge.departure != node:
                    continue
                graph.add_edge(edge)
                neighbor = edge.other(node)
                if neighbor in seen:
                    continue
                seen.add(neighbor)
                if self.max_nodes is not None and len(seen) > self.max_nodes:
                    raise GraphOperationError(
                        f"Exploration from {start} exceeded {self.max_nodes} nodes"
                    )
                if neighbor == target:
                    return graph, True
                queue.append(neighbor)

        logger.debug(f"Explored {len(seen)} nodes from {start}")
        return graph, start == target

    async def is_reachable(self, from_node: Any, to_node: Any) -> bool:
        """
        Check whether a path of arcs leads from from_node to to_node.

        A node is always reachable from itself.
        """
        start, goal = node_id_of(from_node), node_id_of(to_node)
        if start == goal:
            return True
        _, found = await self._explore(start, target=goal)
        return found

    async def shortest_path(
        self, from_node: Any, to_node: Any, allow_negative: bool = False
    ) -> Optional[PathResult]:
        """
        Find the lowest-cost path between two nodes.

        Args:
            from_node: Start node
            to_node: Goal node
            allow_negative: Accept negative edge costs (Bellman-Ford)

        Returns:
            The path, an empty path if both nodes are the same, or None when
            to_node is unreachable

        Raises:
            NegativeCostError: If a reachable edge has a negative cost and
                allow_negative is False
            NegativeCycleError: If allow_negative is True and a negative cycle
                is reachable
        """
        start, goal = node_id_of(from_node), node_id_of(to_node)
        if start == goal:
            return PathResult(path=[], total_cost=0, nodes=[start])

        graph, _ = await self._explore(start)
        finder = ShortestPathFinder(graph, max_memory_mb=self.max_memory_mb)
        return finder.find_path(start, goal, allow_negative=allow_negative)

    async def degree(self, node: Any) -> int:
        """
        Number of edges incident to node.

        Directed edges count once per endpoint role; undirected edges count
        once, self-loops included.
        """
        node_id = node_id_of(node)
        return Graph(await self._incident_edges(node_id)).degree(node_id)

    async def connecting_count(self, node: Any) -> int:
        """Directed edges arriving at node plus directed edges leaving it."""
        node_id = node_id_of(node)
        edges = await self._incident_edges(node_id)
        return len(select_destinations(edges, node_id)) + len(select_departures(edges, node_id))

    async def reachable_nodes(self, from_node: Any) -> List[str]:
        """Nodes reachable from from_node, itself first, in breadth-first order."""
        start = node_id_of(from_node)
        graph, _ = await self._explore(start)
        return reachable_from(graph, start)

    async def traverse(self, from_node: Any, strategy: str = "bfs") -> List[Tuple[str, int]]:
        """
        Walk the nodes reachable from from_node.

        Returns:
            (node, depth) pairs in visiting order

        Raises:
            ValueError: If strategy is not 'bfs' or 'dfs'
        """
        start = node_id_of(from_node)
        graph, _ = await self._explore(start)
        return list(iterate(graph, start, strategy))

    async def connected_components(self) -> List[Set[str]]:
        """Weakly connected components over every stored edge."""
        graph = Graph(await self.store.all_edges())
        return ComponentAnalysis.find_components(graph)
