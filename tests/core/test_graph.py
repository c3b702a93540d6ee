"""
Tests for the in-memory graph snapshot.
"""

import pytest

from graphdiagram.core.graph import Graph


@pytest.fixture
def graph(make_edge):
    """
    A -> B (cost 4), A -> C (cost 1), C -> B (cost 1), B -- D, E -> E
    """
    return Graph(
        [
            make_edge("A", "B", cost=4),
            make_edge("A", "C", cost=1),
            make_edge("C", "B", cost=1),
            make_edge("B", "D", directed=False),
            make_edge("E", "E"),
        ]
    )


def test_nodes_and_edges(graph):
    """Test node and edge bookkeeping."""
    assert graph.get_nodes() == {"A", "B", "C", "D", "E"}
    assert graph.get_edge_count() == 5
    assert graph.has_node("D")
    assert not graph.has_node("Z")
    assert graph.get_edge("2").destination == "C"
    with pytest.raises(KeyError):
        graph.get_edge("99")


def test_neighbors_follow_direction(graph):
    """Directed edges are one-way, undirected edges two-way."""
    assert graph.get_neighbors("A") == ["B", "C"]
    assert graph.get_neighbors("B") == ["D"]
    assert graph.get_neighbors("D") == ["B"]
    assert graph.get_neighbors("Z") == []
    assert graph.get_neighbors("B", reverse=True) == ["A", "C", "D"]


def test_arcs_are_ordered(make_edge):
    """Arcs are ordered by target, then cost, then id."""
    graph = Graph(
        [
            make_edge("A", "C", cost=2),
            make_edge("A", "B", cost=5),
            make_edge("A", "B", cost=1, comment="cheap"),
        ]
    )
    assert [(arc.target, arc.cost) for arc in graph.arcs("A")] == [
        ("B", 1),
        ("B", 5),
        ("C", 2),
    ]
    assert graph.arcs("Z") == []


def test_numeric_ids_sort_numerically(make_edge):
    """Parallel edges with equal cost are ordered by numeric id."""
    graph = Graph()
    graph.add_edge(make_edge("A", "B"))  # id 1
    for _ in range(9):
        make_edge("X", "Y")  # burn ids 2..10
    graph.add_edge(make_edge("A", "B", comment="later"))  # id 11
    assert [arc.edge.id for arc in graph.arcs("A")] == ["1", "11"]


def test_add_edge_is_idempotent(make_edge):
    """Adding the same edge twice has no effect."""
    edge = make_edge("A", "B", directed=False)
    graph = Graph([edge, edge])
    assert graph.get_edge_count() == 1
    assert len(graph.arcs("A")) == 1
    assert len(graph.arcs("B")) == 1


def test_add_isolated_node():
    """Nodes can exist without edges."""
    graph = Graph()
    graph.add_node("A")
    assert graph.get_nodes() == {"A"}
    assert graph.degree("A") == 0


def test_degree(make_edge):
    """Degree counts directed ends and undirected edges."""
    graph = Graph(
        [
            make_edge("A", "B"),
            make_edge("A", "C"),
            make_edge("A", "D", directed=False),
            make_edge("E", "A"),
            make_edge("A", "A"),
            make_edge("A", "A", directed=False),
        ]
    )
    # out 2 + in 1 + undirected 1 + directed loop 2 + undirected loop 1
    assert graph.degree("A") == 7
    assert graph.degree("D") == 1
    assert graph.degree("Z") == 0


def test_undirected_self_loop_single_arc(make_edge):
    """An undirected self-loop gives one arc."""
    graph = Graph([make_edge("A", "A", directed=False)])
    assert len(graph.arcs("A")) == 1


def test_from_edges(make_edge):
    """Test the alternative constructor."""
    graph = Graph.from_edges([make_edge("A", "B")])
    assert graph.get_neighbors("A") == ["B"]
