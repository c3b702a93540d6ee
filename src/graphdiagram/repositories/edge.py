"""
Edge repository implementation for the graph diagram system.

This module implements the repository pattern over an ``EdgeStore``. It is
the single place edge fields are validated before they reach storage, and
it provides the query helpers the connection manager is built from:

- first-match-or-create with conflict retry (delegated to the store)
- first matching edge / all matching edges / counts
- undirected lookups that ignore stored orientation
- removal returning the removed edge
"""

import logging
from typing import Awaitable, Callable, List, Optional

from ..core.exceptions import ValidationError
from ..core.models import Edge
from ..core.selectors import select_between
from ..infrastructure.storage import EdgeStore
from ..utils.validation import validate_edge_fields, validate_node_id

logger = logging.getLogger(__name__)

EdgeCheck = Callable[[dict], Awaitable[bool]]


class EdgeValidator:
    """
    Dedicated validator for edge fields.

    Runs the built-in schema check and then any registered custom checks.

    Attributes:
        custom_validators (List[EdgeCheck]): Extra async checks on edge fields
    """

    def __init__(self):
        """Initialize the edge validator with empty custom validators list."""
        self.custom_validators: List[EdgeCheck] = []

    def register_validator(self, validator_func: EdgeCheck) -> None:
        """
        Register a custom validation function.

        Args:
            validator_func: Coroutine function taking the edge fields and
                returning False to reject them
        """
        self.custom_validators.append(validator_func)

    async def validate(self, fields: dict) -> None:
        """
        Validate edge fields.

        Raises:
            ValidationError: If the schema check or a custom check fails
        """
        validate_edge_fields(fields)
        for validator in self.custom_validators:
            if not await validator(fields):
                raise ValidationError(
                    f"Edge rejected by {getattr(validator, '__name__', 'validator')}: "
                    f"{fields['departure']} -> {fields['destination']}"
                )


class EdgeRepository:
    """
    Repository for managing edges.

    Attributes:
        store (EdgeStore): The underlying edge store
        validator (EdgeValidator): Validator applied before creation
    """

    def __init__(self, store: EdgeStore):
        """
        Initialize the edge repository.

        Args:
            store: Edge store for data persistence
        """
        self.store = store
        self.validator = EdgeValidator()

    def register_validator(self, validator_func: EdgeCheck) -> None:
        """Register a custom validation function run before every creation."""
        self.validator.register_validator(validator_func)

    async def first_or_create(
        self,
        departure: str,
        destination: str,
        directed: bool = True,
        comment: str = "",
        cost: int = 0,
    ) -> Edge:
        """
        Return the edge with exactly these fields, creating it if absent.

        Raises:
            ValidationError: If the fields are invalid
            StorageError: If the store fails
        """
        fields = {
            "departure": departure,
            "destination": destination,
            "directed": directed,
            "cost": cost,
            "comment": comment,
        }
        await self.validator.validate(fields)
        return await self.store.create_edge(departure, destination, directed, comment, cost)

    async def where(
        self,
        departure: Optional[str] = None,
        destination: Optional[str] = None,
        directed: Optional[bool] = None,
        comment: Optional[str] = None,
        cost: Optional[int] = None,
    ) -> List[Edge]:
        """Return edges matching every given filter, in creation order."""
        return await self.store.edges_where(
            departure=departure,
            destination=destination,
            directed=directed,
            comment=comment,
            cost=cost,
        )

    async def first(self, **filters) -> Optional[Edge]:
        """Return the first edge matching filters, or None."""
        matches = await self.where(**filters)
        return matches[0] if matches else None

    async def count(self, **filters) -> int:
        """Count edges matching filters."""
        return len(await self.where(**filters))

    async def undirected_between(
        self,
        a: str,
        b: str,
        comment: Optional[str] = None,
        cost: Optional[int] = None,
    ) -> List[Edge]:
        """
        Undirected edges joining a and b in either stored orientation.

        Edges stored as a--b come before edges stored as b--a; within each
        orientation creation order is kept.
        """
        forward = await self.where(
            departure=a, destination=b, directed=False, comment=comment, cost=cost
        )
        if a == b:
            return forward
        backward = await self.where(
            departure=b, destination=a, directed=False, comment=comment, cost=cost
        )
        return select_between(forward + backward, a, b, directed=False)

    async def destroy(self, edge: Optional[Edge]) -> Optional[Edge]:
        """
        Delete edge if given and still stored.

        Returns:
            The deleted edge, or None if there was nothing to delete
        """
        if edge is None:
            return None
        if not await self.store.destroy_edge(edge):
            logger.debug(f"Edge {edge.id} already removed")
            return None
        return edge

    async def destroy_node(self, node_id: str) -> int:
        """Delete every edge touching node_id; returns how many were removed."""
        validate_node_id(node_id)
        return await self.store.destroy_node_edges(node_id)
