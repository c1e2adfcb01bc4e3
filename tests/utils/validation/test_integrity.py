"""
Tests for adjacency integrity validation.
"""

import pytest

from arcgraph.core.exceptions import GraphIntegrityError
from arcgraph.core.keys import node_key
from arcgraph.utils.validation import AdjacencyIntegrityValidator


def test_valid_graph(graph):
    """Test a graph built through its API validates cleanly."""
    graph.add_edge("A", "B")
    graph.add_arc("B", "C")
    graph.delete_node("A")

    result = AdjacencyIntegrityValidator.validate(graph)

    assert result.is_valid
    assert result.errors == []
    assert result.context == {"node_count": 2}


def test_unmirrored_arc(graph):
    """Test an outgoing entry without its incoming mirror is reported."""
    graph.add_node("A")
    graph.add_node("B")
    graph.get_node("A")._outgoing.add(node_key("B"))

    result = AdjacencyIntegrityValidator.validate(graph)

    assert not result.is_valid
    assert any("is not mirrored" in error for error in result.errors)


def test_dangling_key(graph):
    """Test adjacency pointing outside the graph is reported."""
    graph.add_node("A")
    graph.get_node("A")._incoming.add("ghost")

    result = AdjacencyIntegrityValidator.validate(graph)

    assert result.errors == [f"Arc ghost -> {node_key('A')} comes from a missing node"]


def test_assert_valid_raises(graph):
    """Test assert_valid raises with every error message."""
    graph.add_node("A")
    node = graph.get_node("A")
    node._outgoing.add(node.key)
    node._incoming.add(node.key)

    with pytest.raises(GraphIntegrityError, match="Self-loop"):
        AdjacencyIntegrityValidator.assert_valid(graph)
