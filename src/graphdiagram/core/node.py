"""
Graph node bound to an edge repository.

A node is only an identity; everything it knows about its neighbours lives
in the edge store. Destroying a node removes every edge that touches it.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from .connections import ConnectionManager
from .models import node_id_of

if TYPE_CHECKING:
    from ..repositories import EdgeRepository
    from .calculator import GraphCalculator

logger = logging.getLogger(__name__)


class Node(ConnectionManager):
    """
    A graph node.

    Nodes compare and hash by id, so two ``Node`` objects for the same id are
    interchangeable.

    Attributes:
        id (str): Stable node identifier
        repository (EdgeRepository): Edge access used by connection methods
        calculator (Optional[GraphCalculator]): Used by the calculator shortcuts
    """

    def __init__(
        self,
        id: str,
        repository: "EdgeRepository",
        calculator: Optional["GraphCalculator"] = None,
    ):
        """
        Initialize a node.

        Raises:
            ValidationError: If id is empty or not a string
        """
        self.id = node_id_of(id)
        self.repository = repository
        self.calculator = calculator

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Node({self.id!r})"

    async def destroy(self) -> int:
        """
        Remove every edge touching this node.

        Returns:
            Number of edges removed
        """
        removed = await self.repository.destroy_node(self.id)
        logger.debug(f"Destroyed node {self.id} and {removed} incident edges")
        return removed
