"""
Connection management for graph nodes.

``ConnectionManager`` is a mixin: the host class provides ``id`` (its node
identifier), ``repository`` (an ``EdgeRepository``) and optionally
``calculator`` (a ``GraphCalculator``). Every method takes the other node as
either a ``Node`` or a plain identifier string.

Naming follows the edge's point of view:

- a *destination* edge runs from this node to the other node
- a *departure* edge runs from the other node to this node
- a *connection* is an undirected edge between the two

Lookups never raise for a missing edge; they return ``None`` instead.
"""

from typing import TYPE_CHECKING, Any, List, Optional

from ..utils.validation import validate_edge_fields
from .exceptions import GraphOperationError
from .graph_paths import PathResult
from .models import Edge, node_id_of
from .selectors import select_connections

if TYPE_CHECKING:
    from ..repositories import EdgeRepository
    from .calculator import GraphCalculator


class ConnectionManager:
    """Mixin adding edge management to a node."""

    id: str
    repository: "EdgeRepository"
    calculator: Optional["GraphCalculator"] = None

    async def add_destination(self, node: Any, comment: str = "", cost: int = 0) -> Edge:
        """Return the directed edge self -> node with these fields, creating it if needed."""
        return await self.repository.first_or_create(
            self.id, node_id_of(node), directed=True, comment=comment, cost=cost
        )

    async def add_departure(self, node: Any, comment: str = "", cost: int = 0) -> Edge:
        """Return the directed edge node -> self with these fields, creating it if needed."""
        return await self.repository.first_or_create(
            node_id_of(node), self.id, directed=True, comment=comment, cost=cost
        )

    async def add_connection(
        self, node: Any, directed: bool = False, comment: str = "", cost: int = 0
    ) -> Edge:
        """
        Return an edge between self and node, creating it if needed.

        With ``directed`` set this is ``add_destination``. Otherwise an
        undirected edge with the same comment and cost is reused whichever
        way round it was stored.
        """
        if directed:
            return await self.add_destination(node, comment=comment, cost=cost)

        other = node_id_of(node)
        validate_edge_fields(
            {
                "departure": self.id,
                "destination": other,
                "directed": False,
                "cost": cost,
                "comment": comment,
            }
        )
        existing = await self.repository.undirected_between(
            self.id, other, comment=comment, cost=cost
        )
        if existing:
            return existing[0]
        return await self.repository.first_or_create(
            self.id, other, directed=False, comment=comment, cost=cost
        )

    async def get_destination(self, node: Any) -> Optional[Edge]:
        """First directed edge self -> node, or None."""
        return await self.repository.first(
            departure=self.id, destination=node_id_of(node), directed=True
        )

    async def remove_destination(self, node: Any) -> Optional[Edge]:
        """Destroy and return the first directed edge self -> node, if any."""
        return await self.repository.destroy(await self.get_destination(node))

    async def get_departure(self, node: Any) -> Optional[Edge]:
        """First directed edge node -> self, or None."""
        return await self.repository.first(
            departure=node_id_of(node), destination=self.id, directed=True
        )

    async def remove_departure(self, node: Any) -> Optional[Edge]:
        """Destroy and return the first directed edge node -> self, if any."""
        return await self.repository.destroy(await self.get_departure(node))

    async def get_connection(self, node: Any) -> Optional[Edge]:
        """First undirected edge between self and node in either orientation, or None."""
        matches = await self.repository.undirected_between(self.id, node_id_of(node))
        return matches[0] if matches else None

    async def remove_connection(self, node: Any) -> Optional[Edge]:
        """Destroy and return the first undirected edge between self and node, if any."""
        return await self.repository.destroy(await self.get_connection(node))

    async def connecting_count(self) -> int:
        """
        Directed edges arriving at self plus directed edges leaving self.

        A directed self-loop is counted in both roles.
        """
        return await _directed_count(self.repository, self.id)

    async def is_connecting(self, node: Any) -> bool:
        """
        True if node has at least one edge of any kind, to or from anything.

        This asks about node alone; use ``is_connected_to`` to ask about an
        edge between self and node.
        """
        other = node_id_of(node)
        if await self.repository.first(departure=other) is not None:
            return True
        return await self.repository.first(destination=other) is not None

    async def is_connected_to(self, node: Any) -> bool:
        """True if any edge, in either direction or undirected, joins self and node."""
        if await self.get_destination(node) is not None:
            return True
        if await self.get_departure(node) is not None:
            return True
        return await self.get_connection(node) is not None

    async def destinations(self) -> List[Edge]:
        """Directed edges arriving at self."""
        return await self.repository.where(destination=self.id, directed=True)

    async def departures(self) -> List[Edge]:
        """Directed edges leaving self."""
        return await self.repository.where(departure=self.id, directed=True)

    async def connections(self) -> List[Edge]:
        """Undirected edges touching self."""
        leaving = await self.repository.where(departure=self.id, directed=False)
        arriving = await self.repository.where(destination=self.id, directed=False)
        seen = {edge.id for edge in leaving}
        return select_connections(
            leaving + [edge for edge in arriving if edge.id not in seen], self.id
        )

    # Calculator shortcuts

    def _require_calculator(self) -> "GraphCalculator":
        if self.calculator is None:
            raise GraphOperationError(f"Node {self.id} has no graph calculator attached")
        return self.calculator

    async def degree(self) -> int:
        """Number of edges incident to self."""
        return await self._require_calculator().degree(self.id)

    async def is_reachable(self, node: Any) -> bool:
        """True if node can be reached from self by following edges."""
        return await self._require_calculator().is_reachable(self.id, node)

    async def shortest_path_to(
        self, node: Any, allow_negative: bool = False
    ) -> Optional[PathResult]:
        """Lowest-cost path from self to node, or None."""
        return await self._require_calculator().shortest_path(
            self.id, node, allow_negative=allow_negative
        )

    async def reachable_nodes(self) -> List[str]:
        """Nodes reachable from self in breadth-first order."""
        return await self._require_calculator().reachable_nodes(self.id)


async def _directed_count(repository: "EdgeRepository", node_id: str) -> int:
    arriving = await repository.count(destination=node_id, directed=True)
    leaving = await repository.count(departure=node_id, directed=True)
    return arriving + leaving
