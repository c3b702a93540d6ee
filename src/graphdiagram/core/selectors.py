"""
Edge selectors.

Pure filter functions over an explicit edge collection. Each takes the edges
to search and a node identifier and returns the matching subset in input
order, so "first match" stays well defined.
"""

from typing import Iterable, List, Optional

from .models import Edge


def select_destinations(edges: Iterable[Edge], node: str) -> List[Edge]:
    """Directed edges arriving at node."""
    return [edge for edge in edges if edge.directed and edge.destination == node]


def select_departures(edges: Iterable[Edge], node: str) -> List[Edge]:
    """Directed edges leaving node."""
    return [edge for edge in edges if edge.directed and edge.departure == node]


def select_connections(edges: Iterable[Edge], node: str) -> List[Edge]:
    """Undirected edges touching node."""
    return [edge for edge in edges if not edge.directed and edge.touches(node)]


def select_between(
    edges: Iterable[Edge], a: str, b: str, directed: Optional[bool] = None
) -> List[Edge]:
    """
    Edges joining a and b.

    Directed edges must run from a to b. Undirected edges match in either
    orientation. ``directed`` restricts the result to one kind of edge.
    """
    return [
        edge
        for edge in edges
        if (directed is None or edge.directed == directed) and edge.joins(a, b)
    ]


def select_incident(edges: Iterable[Edge], node: str) -> List[Edge]:
    """Every edge with node as an endpoint, directed or not."""
    return [edge for edge in edges if edge.touches(node)]
