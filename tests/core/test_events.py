"""
Tests for graph mutation events.
"""

import logging
import threading

import pytest

from arcgraph.core.config import GraphConfig
from arcgraph.core.events import GraphEvent, GraphEventManager
from arcgraph.core.exceptions import EventDispatchError
from arcgraph.core.graph import Graph
from arcgraph.core.keys import node_key


class FailingListener:
    """Listener that always raises."""

    def on_state_change(self, event, details):
        raise RuntimeError("listener failure")


def test_node_added_event(graph, listener):
    """Test NODE_ADDED is emitted once per new node."""
    graph.add_listener(listener)

    graph.add_node("A")
    graph.add_node("A")

    assert listener.events == [(GraphEvent.NODE_ADDED, {"node": node_key("A")})]


def test_add_arc_events(graph, listener):
    """Test implicit node creation is reported before the arc."""
    graph.add_listener(listener)

    graph.add_arc("A", "B")

    assert [event for event, _ in listener.events] == [
        GraphEvent.NODE_ADDED,
        GraphEvent.NODE_ADDED,
        GraphEvent.ARC_ADDED,
    ]
    assert listener.of_type(GraphEvent.ARC_ADDED) == [
        {"from_node": node_key("A"), "to_node": node_key("B")}
    ]


def test_no_events_for_no_ops(graph, listener):
    """Test refused or redundant operations stay silent."""
    graph.add_arc("A", "B")
    graph.add_listener(listener)

    graph.add_arc("A", "B")
    graph.add_arc("A", "A")
    graph.delete_arc("B", "A")
    graph.delete_edge("A", "B")
    graph.delete_node("missing")

    assert listener.events == []


def test_add_edge_events(graph, listener):
    """Test only newly created directions are reported."""
    graph.add_arc("A", "B")
    graph.add_listener(listener)

    graph.add_edge("A", "B")

    assert listener.events == [
        (GraphEvent.ARC_ADDED, {"from_node": node_key("B"), "to_node": node_key("A")})
    ]


def test_delete_node_events(graph, listener):
    """Test deleting a node reports each severed arc and then the node."""
    graph.add_edge("A", "B")
    graph.add_arc("C", "A")
    graph.add_listener(listener)

    graph.delete_node("A")

    removed = listener.of_type(GraphEvent.ARC_REMOVED)
    assert len(removed) == 3
    assert {"from_node": node_key("C"), "to_node": node_key("A")} in removed
    assert listener.events[-1] == (GraphEvent.NODE_REMOVED, {"node": node_key("A")})


def test_delete_edge_events(graph, listener):
    """Test deleting an edge reports both arcs."""
    graph.add_edge("A", "B")
    graph.add_listener(listener)

    graph.delete_edge("A", "B")

    assert len(listener.of_type(GraphEvent.ARC_REMOVED)) == 2


def test_remove_listener(graph, listener):
    """Test a removed listener is no longer notified."""
    graph.add_listener(listener)
    graph.remove_listener(listener)

    graph.add_node("A")

    assert listener.events == []


def test_events_disabled(listener):
    """Test emit_events=False silences listeners."""
    graph = Graph(GraphConfig(emit_events=False))
    graph.add_listener(listener)

    graph.add_edge("A", "B")

    assert listener.events == []


def test_listener_errors_are_logged(graph, listener, caplog):
    """Test a failing listener does not stop the operation or other listeners."""
    graph.add_listener(FailingListener())
    graph.add_listener(listener)

    with caplog.at_level(logging.ERROR, logger="arcgraph.core.events"):
        assert graph.add_arc("A", "B") is True

    assert graph.has_arc("A", "B")
    assert len(listener.events) == 3
    assert "Error notifying listener" in caplog.text


def test_listener_errors_propagate_after_mutation():
    """Test propagated listener errors leave the edge fully created."""
    graph = Graph(GraphConfig(propagate_listener_errors=True))
    graph.add_listener(FailingListener())

    with pytest.raises(EventDispatchError):
        graph.add_edge("A", "B")

    assert graph.has_edge("A", "B")


def test_listener_errors_propagate_after_all_events(listener):
    """Test a failure on one event does not hold back the rest of the operation's events."""

    class FailOnNodeAdded:
        def on_state_change(self, event, details):
            if event == GraphEvent.NODE_ADDED:
                raise RuntimeError("listener failure")

    graph = Graph(GraphConfig(propagate_listener_errors=True))
    graph.add_listener(FailOnNodeAdded())
    graph.add_listener(listener)

    with pytest.raises(EventDispatchError):
        graph.add_edge("A", "B")

    assert len(listener.of_type(GraphEvent.NODE_ADDED)) == 2
    assert len(listener.of_type(GraphEvent.ARC_ADDED)) == 2
    assert graph.has_edge("A", "B")


def test_listeners_run_outside_the_graph_lock(graph):
    """Test another thread can read the graph while a listener is running."""
    seen = []

    class CrossThreadReader:
        def on_state_change(self, event, details):
            worker = threading.Thread(target=lambda: seen.append(graph.has_node("A")))
            worker.start()
            worker.join(timeout=5)

    graph.add_listener(CrossThreadReader())

    graph.add_node("A")

    assert seen == [True]


def test_event_manager_deduplicates_listeners(listener):
    """Test adding the same listener twice notifies it once."""
    manager = GraphEventManager()
    manager.add_listener(listener)
    manager.add_listener(listener)

    manager.notify(GraphEvent.NODE_ADDED, {"node": "x"})

    assert len(listener.events) == 1
    assert manager.has_listeners()

    manager.clear_listeners()
    assert not manager.has_listeners()
