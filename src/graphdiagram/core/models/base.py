"""
Common helpers shared by the graph diagram models.

Nodes are opaque identities. Every operation that takes "a node" accepts
either a ``Node`` object or the plain identifier string; ``node_id_of``
normalises both forms and rejects anything else.
"""

from typing import Any

from ...utils.validation import validate_node_id


def node_id_of(node: Any) -> str:
    """
    Resolve a node reference to its identifier.

    Args:
        node: A ``Node`` (anything exposing an ``id`` attribute) or an id string

    Returns:
        The node identifier

    Raises:
        ValidationError: If the reference does not resolve to a valid identifier
    """
    node_id = node if isinstance(node, str) else getattr(node, "id", node)
    validate_node_id(node_id)
    return node_id
