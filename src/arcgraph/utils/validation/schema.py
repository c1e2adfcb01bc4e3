"""
Schema Validation Components for arcgraph

This module provides JSON schema-based validation of the debug snapshot
returned by ``Graph.to_dict()``. The snapshot has no contractual format; the
schema pins down its current shape so that debugging tools built on it notice
when it changes.
"""

from typing import Any, Dict

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from ...core.exceptions import ValidationError
from .base import ValidationResult

_KEY_LIST = {
    "type": "array",
    "items": {"type": "string"},
    "uniqueItems": True,
}

SNAPSHOT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "node_count": {"type": "integer", "minimum": 0},
        "arc_count": {"type": "integer", "minimum": 0},
        "nodes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "key": {"type": "string"},
                    "value": {"type": "string"},
                    "outgoing": _KEY_LIST,
                    "incoming": _KEY_LIST,
                },
                "required": ["key", "value", "outgoing", "incoming"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["node_count", "arc_count", "nodes"],
    "additionalProperties": False,
}


def validate_snapshot(snapshot: Dict[str, Any], strict: bool = False) -> ValidationResult:
    """
    Validate a graph snapshot against SNAPSHOT_SCHEMA.

    Beyond the schema, the declared counts are checked against the node list.

    Args:
        snapshot: Output of ``Graph.to_dict()``
        strict: Raise instead of returning an invalid result

    Returns:
        ValidationResult containing any errors found

    Raises:
        ValidationError: If ``strict`` is set and the snapshot is invalid

    Example:
        >>> graph = Graph()
        >>> graph.add_arc("A", "B")
        True
        >>> validate_snapshot(graph.to_dict()).is_valid
        True
    """
    errors = []

    try:
        json_validate(instance=snapshot, schema=SNAPSHOT_SCHEMA)
    except JsonSchemaError as e:
        errors.append(f"Schema validation failed: {e.message}")
    else:
        nodes = snapshot["nodes"]
        if snapshot["node_count"] != len(nodes):
            errors.append(
                f"node_count is {snapshot['node_count']} but {len(nodes)} nodes are listed"
            )
        arcs = sum(len(node["outgoing"]) for node in nodes)
        if snapshot["arc_count"] != arcs:
            errors.append(f"arc_count is {snapshot['arc_count']} but {arcs} arcs are listed")

    if strict and errors:
        raise ValidationError("; ".join(errors))

    return ValidationResult.from_errors(errors, context={"schema": "graph_snapshot"})
