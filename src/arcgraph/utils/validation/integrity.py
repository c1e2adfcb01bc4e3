"""
Adjacency Integrity Validation for arcgraph

This module checks the structural invariants of a graph:
- every node is stored under its own identity key
- every adjacency key names a node that is in the graph
- every outgoing entry is mirrored by an incoming entry, and vice versa
- no node has an arc to itself

Graph operations maintain these invariants on their own. The validator exists
for tests and for callers that reach into nodes directly.
"""

from typing import TYPE_CHECKING, List

from ...core.exceptions import GraphIntegrityError
from .base import ValidationResult

if TYPE_CHECKING:
    from ...core.graph import Graph


class AdjacencyIntegrityValidator:
    """Validator for the arc mirror invariant of a graph."""

    @staticmethod
    def validate(graph: "Graph") -> ValidationResult:
        """
        Validate every node of ``graph``.

        Args:
            graph: Graph to inspect

        Returns:
            ValidationResult: Result listing every broken invariant
        """
        nodes = dict(graph._nodes)
        errors: List[str] = []

        for key, node in nodes.items():
            if node.key != key:
                errors.append(f"Node {node.key} is stored under key {key}")
            if node.key in node.outgoing:
                errors.append(f"Self-loop on node {key}")

            for target_key in node.outgoing:
                target = nodes.get(target_key)
                if target is None:
                    errors.append(f"Arc {key} -> {target_key} points to a missing node")
                elif key not in target.incoming:
                    errors.append(f"Arc {key} -> {target_key} is not mirrored on {target_key}")

            for source_key in node.incoming:
                source = nodes.get(source_key)
                if source is None:
                    errors.append(f"Arc {source_key} -> {key} comes from a missing node")
                elif key not in source.outgoing:
                    errors.append(f"Arc {source_key} -> {key} is not mirrored on {source_key}")

        return ValidationResult.from_errors(errors, context={"node_count": len(nodes)})

    @classmethod
    def assert_valid(cls, graph: "Graph") -> None:
        """
        Raise if ``graph`` breaks any adjacency invariant.

        Raises:
            GraphIntegrityError: With every error found, one per line
        """
        result = cls.validate(graph)
        if not result.is_valid:
            raise GraphIntegrityError("\n".join(result.errors))
