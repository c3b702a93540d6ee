"""
Schema validation for edge records.

This module holds the JSON schemas describing an edge and the helpers that
check values against them. The same schemas guard two boundaries:

- fields passed to ``Edge`` and to the connection manager (fail fast on
  malformed input)
- records read back from persistent storage (reject corrupt files)
"""

from typing import Any, Dict

from jsonschema import Draft202012Validator, validators
from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from ...core.exceptions import ValidationError


def _is_strict_integer(checker: Any, instance: Any) -> bool:
    """Only real ints are integers; 5.0 and True are not."""
    return isinstance(instance, int) and not isinstance(instance, bool)


# Draft 2020-12 treats integral floats as integers; costs and ids must be ints.
StrictValidator = validators.extend(
    Draft202012Validator,
    type_checker=Draft202012Validator.TYPE_CHECKER.redefine("integer", _is_strict_integer),
)

NODE_ID_SCHEMA: Dict[str, Any] = {"type": "string", "minLength": 1, "pattern": r"\S"}

EDGE_FIELDS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "departure": NODE_ID_SCHEMA,
        "destination": NODE_ID_SCHEMA,
        "directed": {"type": "boolean"},
        "cost": {"type": "integer"},
        "comment": {"type": "string"},
    },
    "required": ["departure", "destination", "directed", "cost", "comment"],
}

EDGE_RECORD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        **EDGE_FIELDS_SCHEMA["properties"],
        "id": {"type": "string", "minLength": 1},
        "created_at": {"type": "string"},
    },
    "required": EDGE_FIELDS_SCHEMA["required"] + ["id", "created_at"],
}

EDGE_FILE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "next_id": {"type": "integer", "minimum": 1},
        "edges": {"type": "array", "items": EDGE_RECORD_SCHEMA},
    },
    "required": ["next_id", "edges"],
}


def _check(instance: Any, schema: Dict[str, Any], what: str) -> None:
    try:
        json_validate(instance=instance, schema=schema, cls=StrictValidator)
    except JsonSchemaError as e:
        location = ".".join(str(part) for part in e.absolute_path) or "value"
        raise ValidationError(f"Invalid {what} ({location}): {e.message}") from e


def validate_node_id(node_id: Any) -> None:
    """Raise ValidationError unless node_id is a non-blank string."""
    _check(node_id, NODE_ID_SCHEMA, "node identifier")


def validate_edge_fields(fields: Dict[str, Any]) -> None:
    """
    Validate the user-supplied fields of an edge.

    Args:
        fields: Mapping with departure, destination, directed, cost and comment

    Raises:
        ValidationError: If any field has the wrong type or is missing
    """
    _check(fields, EDGE_FIELDS_SCHEMA, "edge")


def validate_edge_record(record: Dict[str, Any]) -> None:
    """Validate a serialized edge record, including its id and timestamp."""
    _check(record, EDGE_RECORD_SCHEMA, "edge record")


def validate_edge_file(document: Dict[str, Any]) -> None:
    """Validate the whole document written by the JSON edge store."""
    _check(document, EDGE_FILE_SCHEMA, "edge file")
