"""Shared test fixtures."""

from typing import Callable

import pytest

from graphdiagram.core.calculator import GraphCalculator
from graphdiagram.core.models import Edge
from graphdiagram.core.node import Node
from graphdiagram.infrastructure.storage import (
    EdgeStore,
    JsonEdgeStore,
    MemoryEdgeStore,
    SqliteEdgeStore,
)
from graphdiagram.repositories import EdgeRepository


@pytest.fixture(params=["memory", "json", "sqlite"])
async def store(request, tmp_path) -> EdgeStore:
    """Fixture providing an initialized edge store for every backend."""
    if request.param == "memory":
        edge_store: EdgeStore = MemoryEdgeStore()
    elif request.param == "json":
        edge_store = JsonEdgeStore(str(tmp_path / "json"))
    else:
        edge_store = SqliteEdgeStore(str(tmp_path / "sqlite"))
    await edge_store.initialize()
    yield edge_store
    await edge_store.cleanup()


@pytest.fixture
async def memory_store() -> MemoryEdgeStore:
    """Fixture providing an in-memory edge store."""
    edge_store = MemoryEdgeStore()
    await edge_store.initialize()
    return edge_store


@pytest.fixture
def repository(store) -> EdgeRepository:
    """Fixture providing an edge repository over the parametrised store."""
    return EdgeRepository(store)


@pytest.fixture
def calculator(store) -> GraphCalculator:
    """Fixture providing a graph calculator over the parametrised store."""
    return GraphCalculator(store)


@pytest.fixture
def make_node(repository, calculator) -> Callable[[str], Node]:
    """Fixture returning a factory for nodes bound to the shared store."""

    def factory(node_id: str) -> Node:
        return Node(node_id, repository, calculator)

    return factory


@pytest.fixture
def make_edge() -> Callable[..., Edge]:
    """Fixture returning a factory for detached edges with sequential ids."""
    counter = iter(range(1, 10000))

    def factory(departure: str, destination: str, **fields) -> Edge:
        return Edge(id=str(next(counter)), departure=departure, destination=destination, **fields)

    return factory
