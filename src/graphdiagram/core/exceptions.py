"""
Custom exceptions for the graph diagram system.

This module defines the exceptions raised by the connection manager, the
storage backends and the graph calculator. Absence of an edge or a path is
never an exception: lookups return ``None`` and predicates return ``False``.
Exceptions are reserved for malformed input and for failures of the
underlying storage.
"""


class ValidationError(Exception):
    """
    Raised when input fails validation.

    This is the one place malformed input is surfaced instead of being
    treated as "no edges".

    Examples:
        * Empty or non-string node identifier
        * Cost that is not an integer
        * Comment that is not a string
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class StorageError(Exception):
    """
    Raised when storage operations fail.

    Examples:
        * Database connection failures
        * File system access errors
        * Corrupt persisted edge records
    """


class DuplicateEdgeError(StorageError):
    """
    Raised when an insert collides with an existing edge.

    Stores raise this when a concurrent writer won the race for the same
    edge key. It never leaves the repository: ``first_or_create`` resolves it
    by reading the winning edge back.
    """


class GraphOperationError(Exception):
    """
    Raised when graph calculations cannot produce a meaningful answer.

    Examples:
        * Negative costs where only non-negative costs are allowed
        * Negative cycles reachable from the start node
        * Exploration limit exceeded
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class NegativeCostError(GraphOperationError):
    """Raised when a negative-cost edge is met by a non-negative search."""


class NegativeCycleError(GraphOperationError):
    """Raised when a negative cycle is reachable from the start node."""


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid.

    Examples:
        * Unsupported storage type
        * Invalid cache sizing
    """
