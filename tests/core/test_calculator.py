"""Tests for the store-backed graph calculator."""

import pytest

from graphdiagram.core.calculator import GraphCalculator
from graphdiagram.core.exceptions import (
    GraphOperationError,
    NegativeCostError,
    NegativeCycleError,
    ValidationError,
)
from graphdiagram.infrastructure.cache import LRUCache
from graphdiagram.infrastructure.storage import MemoryEdgeStore


async def connect(store, departure, destination, **fields):
    """Create an edge straight through the store."""
    return await store.create_edge(departure, destination, **fields)


@pytest.mark.timeout(10)
async def test_reachability_over_cycle(store, calculator):
    """A -> B -> C -> A plus A -> D."""
    for departure, destination in [("A", "B"), ("B", "C"), ("C", "A"), ("A", "D")]:
        await connect(store, departure, destination)

    assert await calculator.is_reachable("A", "D")
    assert await calculator.is_reachable("C", "D")
    assert not await calculator.is_reachable("D", "A")


async def test_reachability_through_undirected_edges(store, calculator):
    """Undirected edges are walkable both ways, directed edges only forwards."""
    await connect(store, "B", "A", directed=False)
    await connect(store, "B", "C")

    assert await calculator.is_reachable("A", "C")
    assert await calculator.is_reachable("B", "A")
    assert not await calculator.is_reachable("C", "A")


async def test_node_reachable_from_itself(calculator):
    """Every node reaches itself, known or not."""
    assert await calculator.is_reachable("ghost", "ghost")
    assert not await calculator.is_reachable("ghost", "other")


async def test_shortest_path(store, calculator):
    """A -> B (4), A -> C (1), C -> B (1) gives [A -> C, C -> B] at cost 2."""
    await connect(store, "A", "B", cost=4)
    await connect(store, "A", "C", cost=1)
    await connect(store, "C", "B", cost=1)

    result = await calculator.shortest_path("A", "B")

    assert result is not None
    assert result.total_cost == 2
    assert [(e.departure, e.destination) for e in result.path] == [("A", "C"), ("C", "B")]
    assert result.nodes == ["A", "C", "B"]


async def test_shortest_path_absent(store, calculator):
    """No path gives None; a node to itself gives an empty path."""
    await connect(store, "A", "B")

    assert await calculator.shortest_path("B", "A") is None
    assert await calculator.shortest_path("A", "nowhere") is None
    same = await calculator.shortest_path("A", "A")
    assert same.path == []
    assert same.total_cost == 0


async def test_shortest_path_negative_costs(store, calculator):
    """Negative costs need allow_negative; negative cycles are errors."""
    await connect(store, "A", "B", cost=3)
    await connect(store, "A", "C", cost=5)
    await connect(store, "C", "B", cost=-4)

    with pytest.raises(NegativeCostError):
        await calculator.shortest_path("A", "B")

    result = await calculator.shortest_path("A", "B", allow_negative=True)
    assert result.total_cost == 1

    await connect(store, "B", "C", cost=1)
    with pytest.raises(NegativeCycleError):
        await calculator.shortest_path("A", "B", allow_negative=True)


async def test_negative_edge_outside_reach_is_ignored(store, calculator):
    """Only the reached sub-graph is checked for negative costs."""
    await connect(store, "A", "B", cost=1)
    await connect(store, "X", "Y", cost=-5)

    result = await calculator.shortest_path("A", "B")
    assert result.total_cost == 1


async def test_degree(store, calculator):
    """Two outgoing directed edges and one undirected connection give degree 3."""
    await connect(store, "A", "B")
    await connect(store, "A", "C")
    await connect(store, "D", "A", directed=False)

    assert await calculator.degree("A") == 3
    assert await calculator.degree("D") == 1
    assert await calculator.degree("unknown") == 0


async def test_degree_versus_connecting_count(store, calculator):
    """connecting_count ignores undirected edges; degree does not."""
    await connect(store, "A", "B")
    await connect(store, "C", "A")
    await connect(store, "A", "D", directed=False)
    await connect(store, "A", "A")

    assert await calculator.connecting_count("A") == 4
    assert await calculator.degree("A") == 5


async def test_reachable_nodes_and_traverse(store, calculator):
    """Traversal order is breadth-first or depth-first by ascending id."""
    await connect(store, "A", "C")
    await connect(store, "A", "B")
    await connect(store, "B", "D")

    assert await calculator.reachable_nodes("A") == ["A", "B", "C", "D"]
    assert await calculator.traverse("A", "dfs") == [("A", 0), ("B", 1), ("D", 2), ("C", 1)]
    assert await calculator.traverse("A") == [("A", 0), ("B", 1), ("C", 1), ("D", 2)]
    with pytest.raises(ValueError):
        await calculator.traverse("A", "sideways")


async def test_connected_components(store, calculator):
    """Components are computed over every stored edge."""
    await connect(store, "A", "B")
    await connect(store, "C", "B")
    await connect(store, "X", "Y", directed=False)

    assert await calculator.connected_components() == [{"A", "B", "C"}, {"X", "Y"}]


async def test_invalid_node_reference(calculator):
    """Malformed node references fail fast."""
    with pytest.raises(ValidationError):
        await calculator.is_reachable("", "A")
    with pytest.raises(ValidationError):
        await calculator.degree(None)


async def test_max_nodes_limit(store):
    """Exploration beyond max_nodes is an error."""
    for leaf in ["B", "C", "D"]:
        await connect(store, "A", leaf)

    limited = GraphCalculator(store, max_nodes=2)
    with pytest.raises(GraphOperationError):
        await limited.reachable_nodes("A")
    assert await GraphCalculator(store, max_nodes=4).reachable_nodes("A") == ["A", "B", "C", "D"]


def test_max_nodes_must_be_positive():
    """A zero exploration limit is rejected."""
    with pytest.raises(ValueError):
        GraphCalculator(MemoryEdgeStore(), max_nodes=0)


async def test_cache_is_invalidated_by_mutation(store):
    """Cached neighbourhoods are keyed by store revision."""
    cache = LRUCache(max_size=100)
    calculator = GraphCalculator(store, cache=cache)

    await connect(store, "A", "B")
    assert await calculator.degree("A") == 1
    assert await calculator.degree("A") == 1
    assert cache.get_metrics()["hits"] == 1.0

    await connect(store, "A", "C")
    assert await calculator.degree("A") == 2

    edge = (await store.edges_where(departure="A", destination="B"))[0]
    await store.destroy_edge(edge)
    assert not await calculator.is_reachable("A", "B")
