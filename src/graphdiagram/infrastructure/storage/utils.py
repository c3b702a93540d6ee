"""
Utility functions shared by the storage backends.

- edge_matches_filters: in-memory equivalent of the SQL WHERE clause
- serialize_edge / deserialize_edge: edge <-> JSON-compatible record
"""

from datetime import datetime
from typing import Any, Dict, Optional

from ...core.models import Edge
from ...utils.validation import validate_edge_record


def build_filters(
    departure: Optional[str] = None,
    destination: Optional[str] = None,
    directed: Optional[bool] = None,
    comment: Optional[str] = None,
    cost: Optional[int] = None,
) -> Dict[str, Any]:
    """Collect the filters that were actually given."""
    filters = {
        "departure": departure,
        "destination": destination,
        "directed": directed,
        "comment": comment,
        "cost": cost,
    }
    return {name: value for name, value in filters.items() if value is not None}


def edge_matches_filters(edge: Edge, filters: Dict[str, Any]) -> bool:
    """
    Check if an edge matches all given filters.

    Args:
        edge: Edge to check
        filters: Mapping of edge attribute names to required values

    Returns:
        True if edge matches filters, False otherwise
    """
    return all(getattr(edge, name) == value for name, value in filters.items())


def serialize_edge(edge: Edge) -> Dict[str, Any]:
    """Convert an edge to a JSON-compatible dictionary."""
    return {
        "id": edge.id,
        **edge.fields(),
        "created_at": edge.created_at.isoformat(),
    }


def deserialize_edge(record: Dict[str, Any]) -> Edge:
    """
    Rebuild an edge from its serialized record.

    Raises:
        ValidationError: If the record does not describe a valid edge
    """
    validate_edge_record(record)
    return Edge(
        id=record["id"],
        departure=record["departure"],
        destination=record["destination"],
        directed=record["directed"],
        cost=record["cost"],
        comment=record["comment"],
        created_at=datetime.fromisoformat(record["created_at"]),
    )
