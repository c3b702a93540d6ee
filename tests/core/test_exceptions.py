"""
Tests for custom exceptions.
"""

import pytest

from graphdiagram.core.exceptions import (
    ConfigurationError,
    DuplicateEdgeError,
    GraphOperationError,
    NegativeCostError,
    NegativeCycleError,
    StorageError,
    ValidationError,
)


def test_validation_error_message():
    """Validation errors carry a prefix."""
    assert str(ValidationError("bad cost")) == "Validation Error: bad cost"


def test_graph_operation_error_message():
    """Graph operation errors carry a prefix, subclasses included."""
    assert str(GraphOperationError("too big")) == "Graph Operation Error: too big"
    assert str(NegativeCycleError("loop")) == "Graph Operation Error: loop"


@pytest.mark.parametrize(
    "error, parent",
    [
        (DuplicateEdgeError, StorageError),
        (NegativeCostError, GraphOperationError),
        (NegativeCycleError, GraphOperationError),
    ],
)
def test_hierarchy(error, parent):
    """Specific errors can be caught by their family."""
    assert issubclass(error, parent)


def test_configuration_error_is_independent():
    """Configuration errors are not storage errors."""
    assert not issubclass(ConfigurationError, StorageError)
