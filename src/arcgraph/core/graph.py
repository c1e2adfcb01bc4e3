"""
Core graph data structure built on an arena of nodes.

This module provides the Graph class, which owns every node in a ``key -> Node``
mapping and exposes node, arc and edge operations on caller values. Values are
looked up through their identity key, so structurally-equal values always map to
the same node.

Arcs are directed and stored on both endpoints. Edges are not stored at all: an
edge between two values exists exactly when both directional arcs exist.

Operations never raise on normal use. They report whether they changed anything
through their return values, and a request that would create a self-loop is
refused with False.
"""

import logging
from contextlib import nullcontext
from threading import RLock
from typing import Any, ContextManager, Dict, List, Optional, Tuple

from .config import GraphConfig
from .events import GraphEvent, GraphEventListener, GraphEventManager
from .exceptions import ConfigurationError, EventDispatchError
from .models import Node

logger = logging.getLogger(__name__)

# Events collected while an operation runs, dispatched once it has finished
_Pending = List[Tuple[GraphEvent, Dict[str, Any]]]


class Graph:
    """
    Graph of caller values connected by directed arcs.

    Every public operation runs under a single re-entrant lock (unless the
    configuration disables it) so that arc changes, which touch two nodes,
    appear atomic to other threads. Listeners are notified once the
    operation's mutations are complete and the lock has been released.

    Attributes:
        config (GraphConfig): Settings of this graph
        event_manager (GraphEventManager): Dispatches mutation events
        _nodes (Dict[str, Node]): Arena owning every node by identity key
        _lock: Lock guarding the arena
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        """
        Initialize an empty graph.

        Args:
            config (Optional[GraphConfig]): Graph settings, defaults when None
        """
        self.config = config if config is not None else GraphConfig()
        self.event_manager = GraphEventManager(
            propagate_errors=self.config.propagate_listener_errors
        )
        self._nodes: Dict[str, Node] = {}
        self._lock: ContextManager = RLock() if self.config.thread_safe else nullcontext()

    def add_listener(self, listener: GraphEventListener) -> None:
        """Add a listener for state changes."""
        self.event_manager.add_listener(listener)

    def remove_listener(self, listener: GraphEventListener) -> None:
        """Remove a state change listener."""
        self.event_manager.remove_listener(listener)

    def _dispatch(self, pending: _Pending) -> None:
        """
        Deliver the events of a finished operation.

        Called after the graph lock has been released. Every event is
        delivered even when a listener fails; the first EventDispatchError is
        re-raised once all of them have been sent.
        """
        if not self.config.emit_events:
            return
        first_error = None
        for event, details in pending:
            try:
                self.event_manager.notify(event, details)
            except EventDispatchError as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    def _key(self, value: Any) -> str:
        key = self.config.key_func(value)
        if not isinstance(key, str):
            raise ConfigurationError(
                f"key_func returned {type(key).__name__} instead of str for {value!r}"
            )
        return key

    def _lookup(self, value: Any) -> Optional[Node]:
        return self._nodes.get(self._key(value))

    def _ensure_node(self, value: Any, pending: _Pending) -> Tuple[bool, Node]:
        key = self._key(value)
        node = self._nodes.get(key)
        if node is not None:
            return False, node

        node = Node(key, value, self._nodes)
        self._nodes[key] = node
        logger.debug(f"Added node {key}")
        pending.append((GraphEvent.NODE_ADDED, {"node": key}))
        return True, node

    def _remove_node(self, node: Node, pending: _Pending) -> None:
        for key in sorted(node.incoming):
            pending.append((GraphEvent.ARC_REMOVED, {"from_node": key, "to_node": node.key}))
        for key in sorted(node.outgoing):
            pending.append((GraphEvent.ARC_REMOVED, {"from_node": node.key, "to_node": key}))
        node.delete_all_arcs()
        del self._nodes[node.key]
        logger.debug(f"Deleted node {node.key}")
        pending.append((GraphEvent.NODE_REMOVED, {"node": node.key}))

    def _add_arc(self, from_node: Node, to_node: Node, pending: _Pending) -> bool:
        added = from_node.add_arc_to(to_node)
        if added:
            logger.debug(f"Added arc {from_node.key} -> {to_node.key}")
            pending.append(
                (GraphEvent.ARC_ADDED, {"from_node": from_node.key, "to_node": to_node.key})
            )
        return added

    def _delete_arc(self, from_node: Node, to_node: Node, pending: _Pending) -> bool:
        deleted = from_node.delete_arc_to(to_node)
        if deleted:
            logger.debug(f"Deleted arc {from_node.key} -> {to_node.key}")
            pending.append(
                (GraphEvent.ARC_REMOVED, {"from_node": from_node.key, "to_node": to_node.key})
            )
        return deleted

    # -----------------
    # NODE OPERATIONS
    # -----------------

    def add_node(self, value: Any) -> Tuple[bool, Node]:
        """
        Add a node for ``value`` if it does not exist yet.

        An existing node is returned as is; its stored value is never replaced.

        Args:
            value (Any): Value to wrap

        Returns:
            Tuple[bool, Node]: Whether the node was created, and the node
        """
        pending: _Pending = []
        with self._lock:
            result = self._ensure_node(value, pending)
        self._dispatch(pending)
        return result

    def has_node(self, value: Any) -> bool:
        """Check if a node for ``value`` exists in the graph."""
        with self._lock:
            return self._key(value) in self._nodes

    def get_node(self, value: Any) -> Optional[Node]:
        """Get the node stored for ``value``, or None if there is none."""
        with self._lock:
            return self._lookup(value)

    def delete_node(self, value: Any) -> bool:
        """
        Delete the node for ``value`` along with every arc touching it.

        Returns:
            bool: True if the node was deleted, False if it did not exist
        """
        pending: _Pending = []
        with self._lock:
            node = self._lookup(value)
            if node is None:
                return False
            self._remove_node(node, pending)
        self._dispatch(pending)
        return True

    def get_nodes(self) -> List[Node]:
        """Get all nodes in the graph."""
        with self._lock:
            return list(self._nodes.values())

    def get_node_count(self) -> int:
        with self._lock:
            return len(self._nodes)

    def clear(self) -> None:
        """Remove every node, and with them every arc."""
        pending: _Pending = []
        with self._lock:
            for key in sorted(self._nodes):
                self._remove_node(self._nodes[key], pending)
        self._dispatch(pending)

    # -----------------
    # ARC OPERATIONS
    # -----------------

    def add_arc(self, from_value: Any, to_value: Any) -> bool:
        """
        Add a directed arc between two values, creating missing nodes.

        Returns:
            bool: True if the arc was created, False if it already existed or
                both values are the same node
        """
        pending: _Pending = []
        with self._lock:
            _, from_node = self._ensure_node(from_value, pending)
            _, to_node = self._ensure_node(to_value, pending)
            added = self._add_arc(from_node, to_node, pending)
        self._dispatch(pending)
        return added

    def has_arc(self, from_value: Any, to_value: Any) -> bool:
        """Check if there is an arc from ``from_value`` to ``to_value``."""
        with self._lock:
            from_node = self._lookup(from_value)
            to_node = self._lookup(to_value)
            if from_node is None or to_node is None:
                return False
            return from_node.has_arc_to(to_node)

    def delete_arc(self, from_value: Any, to_value: Any) -> bool:
        """
        Delete the arc from ``from_value`` to ``to_value``.

        Missing nodes are not created.

        Returns:
            bool: True if the arc was deleted, False if it did not exist
        """
        pending: _Pending = []
        with self._lock:
            from_node = self._lookup(from_value)
            to_node = self._lookup(to_value)
            if from_node is None or to_node is None:
                return False
            deleted = self._delete_arc(from_node, to_node, pending)
        self._dispatch(pending)
        return deleted

    def get_arc_count(self) -> int:
        """Get the total number of arcs in the graph."""
        with self._lock:
            return sum(node.out_degree for node in self._nodes.values())

    # -----------------
    # EDGE OPERATIONS
    # -----------------

    def add_edge(self, value1: Any, value2: Any) -> Tuple[bool, bool]:
        """
        Add an undirected edge as a pair of arcs, creating missing nodes.

        Each direction is attempted independently. ``(True, False)`` means the
        arc from ``value1`` to ``value2`` was created and the reverse arc
        already existed. Both values being the same node gives ``(False, False)``.

        Returns:
            Tuple[bool, bool]: Creation result for each direction
        """
        pending: _Pending = []
        with self._lock:
            _, node1 = self._ensure_node(value1, pending)
            _, node2 = self._ensure_node(value2, pending)
            added = (
                self._add_arc(node1, node2, pending),
                self._add_arc(node2, node1, pending),
            )
        self._dispatch(pending)
        return added

    def has_edge(self, value1: Any, value2: Any) -> bool:
        """Check if arcs exist in both directions between two values."""
        with self._lock:
            node1 = self._lookup(value1)
            node2 = self._lookup(value2)
            if node1 is None or node2 is None:
                return False
            return node1.has_arc_to(node2) and node2.has_arc_to(node1)

    def delete_edge(self, value1: Any, value2: Any) -> bool:
        """
        Delete the edge between two values.

        Only a complete edge is deleted. When a single direction exists, it is
        left in place and False is returned.

        Returns:
            bool: True if both arcs were deleted, False otherwise
        """
        pending: _Pending = []
        with self._lock:
            node1 = self._lookup(value1)
            node2 = self._lookup(value2)
            if node1 is None or node2 is None:
                return False
            if not (node1.has_arc_to(node2) and node2.has_arc_to(node1)):
                return False
            self._delete_arc(node1, node2, pending)
            self._delete_arc(node2, node1, pending)
        self._dispatch(pending)
        return True

    def get_edge_count(self) -> int:
        """Get the number of node pairs joined by arcs in both directions."""
        with self._lock:
            mutual = sum(
                1
                for node in self._nodes.values()
                for key in node.outgoing
                if key in node.incoming
            )
            return mutual // 2

    # -----------------
    # DEBUGGING
    # -----------------

    def to_dict(self) -> Dict[str, Any]:
        """
        Build a snapshot of the graph for debugging.

        Values are rendered with ``repr``; the snapshot cannot be turned back
        into a graph.
        """
        with self._lock:
            nodes = [
                {
                    "key": node.key,
                    "value": repr(node.value),
                    "outgoing": sorted(node.outgoing),
                    "incoming": sorted(node.incoming),
                }
                for node in sorted(self._nodes.values(), key=lambda n: n.key)
            ]
            return {
                "node_count": len(nodes),
                "arc_count": sum(len(n["outgoing"]) for n in nodes),
                "nodes": nodes,
            }

    def dump(self) -> str:
        """Render the graph as human-readable text, one node per line."""
        snapshot = self.to_dict()
        lines = [f"Graph({snapshot['node_count']} nodes, {snapshot['arc_count']} arcs)"]
        for node in snapshot["nodes"]:
            targets = ", ".join(node["outgoing"]) or "-"
            lines.append(f"  {node['key']} -> {targets}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return self.get_node_count()

    def __contains__(self, value: Any) -> bool:
        return self.has_node(value)

    def __repr__(self) -> str:
        return f"Graph(nodes={self.get_node_count()}, arcs={self.get_arc_count()})"
