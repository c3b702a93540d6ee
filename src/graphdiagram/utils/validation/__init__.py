"""
Validation package for the graph diagram system.

This package provides the JSON schemas and helpers that reject malformed
node identifiers and edge records.
"""

from .schema import (
    EDGE_FIELDS_SCHEMA,
    EDGE_FILE_SCHEMA,
    EDGE_RECORD_SCHEMA,
    NODE_ID_SCHEMA,
    validate_edge_fields,
    validate_edge_file,
    validate_edge_record,
    validate_node_id,
)

__all__ = [
    "NODE_ID_SCHEMA",
    "EDGE_FIELDS_SCHEMA",
    "EDGE_RECORD_SCHEMA",
    "EDGE_FILE_SCHEMA",
    "validate_node_id",
    "validate_edge_fields",
    "validate_edge_record",
    "validate_edge_file",
]
