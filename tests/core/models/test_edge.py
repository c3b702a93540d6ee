"""
Tests for edge models.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from graphdiagram.core.exceptions import ValidationError
from graphdiagram.core.models import Edge, EdgeKey, node_id_of


def test_edge_creation():
    """Test basic edge creation and defaults."""
    edge = Edge(id="1", departure="A", destination="B")

    assert edge.departure == "A"
    assert edge.destination == "B"
    assert edge.directed is True
    assert edge.cost == 0
    assert edge.comment == ""
    assert isinstance(edge.created_at, datetime)


def test_edge_key():
    """Test the deduplication key of an edge."""
    edge = Edge(id="7", departure="A", destination="B", directed=False, cost=3, comment="x")
    assert edge.key == EdgeKey("A", "B", False, 3, "x")
    assert edge.fields() == {
        "departure": "A",
        "destination": "B",
        "directed": False,
        "cost": 3,
        "comment": "x",
    }


def test_edge_is_frozen():
    """Test that edges cannot be mutated."""
    edge = Edge(id="1", departure="A", destination="B")
    with pytest.raises(FrozenInstanceError):
        edge.cost = 5  # type: ignore[misc]


def test_edge_equality_ignores_timestamp():
    """Test that created_at does not take part in equality."""
    first = Edge(id="1", departure="A", destination="B", created_at=datetime(2020, 1, 1))
    second = Edge(id="1", departure="A", destination="B", created_at=datetime(2021, 1, 1))
    assert first == second


def test_edge_negative_cost_is_storable():
    """Negative costs are valid edge data."""
    assert Edge(id="1", departure="A", destination="B", cost=-2).cost == -2


@pytest.mark.parametrize(
    "fields",
    [
        {"departure": "", "destination": "B"},
        {"departure": "A", "destination": "   "},
        {"departure": 1, "destination": "B"},
        {"departure": "A", "destination": "B", "cost": "4"},
        {"departure": "A", "destination": "B", "cost": 1.5},
        {"departure": "A", "destination": "B", "cost": 5.0},
        {"departure": "A", "destination": "B", "cost": True},
        {"departure": "A", "destination": "B", "comment": None},
        {"departure": "A", "destination": "B", "directed": "yes"},
    ],
)
def test_edge_validation(fields):
    """Test that malformed fields are rejected."""
    with pytest.raises(ValidationError) as exc_info:
        Edge(id="1", **fields)
    assert str(exc_info.value).startswith("Validation Error:")


def test_edge_requires_id():
    """Test that an empty id is rejected."""
    with pytest.raises(TypeError):
        Edge(id="", departure="A", destination="B")


def test_edge_endpoints():
    """Test endpoint helpers."""
    edge = Edge(id="1", departure="A", destination="B")

    assert edge.touches("A")
    assert edge.touches("B")
    assert not edge.touches("C")
    assert edge.other("A") == "B"
    assert edge.other("B") == "A"
    with pytest.raises(ValueError):
        edge.other("C")


def test_edge_joins():
    """Test orientation handling of joins."""
    directed = Edge(id="1", departure="A", destination="B")
    undirected = Edge(id="2", departure="A", destination="B", directed=False)

    assert directed.joins("A", "B")
    assert not directed.joins("B", "A")
    assert undirected.joins("A", "B")
    assert undirected.joins("B", "A")
    assert not undirected.joins("A", "C")


def test_edge_str():
    """Test string rendering."""
    assert str(Edge(id="1", departure="A", destination="B", cost=2)) == "A -> B (cost=2)"
    assert str(Edge(id="1", departure="A", destination="B", directed=False)) == "A -- B (cost=0)"


class _HasId:
    id = "N1"


def test_node_id_of():
    """Test resolution of node references."""
    assert node_id_of("A") == "A"
    assert node_id_of(_HasId()) == "N1"
    with pytest.raises(ValidationError):
        node_id_of("")
    with pytest.raises(ValidationError):
        node_id_of(42)
