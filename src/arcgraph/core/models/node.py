"""
Node model for the graph system.

A node wraps one caller-supplied value together with its direct adjacency.
Adjacency is stored as sets of identity keys rather than node objects; the keys
are resolved to live nodes through the arena the node was created in, which is
the owning graph's ``key -> Node`` mapping.
"""

from typing import Any, Dict, FrozenSet, Set


class Node:
    """
    Vertex in the graph.

    Every arc touching a node is mirrored on both endpoints: when ``B.key`` is
    in ``A``'s outgoing set, ``A.key`` is in ``B``'s incoming set, and both keys
    name nodes in the shared arena.

    Attributes:
        key (str): Identity key derived from the value
        value (Any): The value the node was created with
    """

    __slots__ = ("key", "value", "_arena", "_outgoing", "_incoming")

    def __init__(self, key: str, value: Any, arena: Dict[str, "Node"]):
        """
        Initialize an isolated node.

        Args:
            key (str): Identity key of the value
            value (Any): Caller-supplied value
            arena (Dict[str, Node]): Mapping used to resolve neighbour keys
        """
        self.key = key
        self.value = value
        self._arena = arena
        self._outgoing: Set[str] = set()
        self._incoming: Set[str] = set()

    @property
    def outgoing(self) -> FrozenSet[str]:
        """Keys of the nodes this node has an arc to."""
        return frozenset(self._outgoing)

    @property
    def incoming(self) -> FrozenSet[str]:
        """Keys of the nodes that have an arc to this node."""
        return frozenset(self._incoming)

    @property
    def out_degree(self) -> int:
        return len(self._outgoing)

    @property
    def in_degree(self) -> int:
        return len(self._incoming)

    @property
    def is_isolated(self) -> bool:
        return not self._outgoing and not self._incoming

    @property
    def is_attached(self) -> bool:
        """Whether this node is the one stored in its arena under its key."""
        return self._arena.get(self.key) is self

    def has_arc_to(self, other: "Node") -> bool:
        """Check if there is an arc from this node to ``other``."""
        return other.key in self._outgoing

    def add_arc_to(self, other: "Node") -> bool:
        """
        Add a directed arc from this node to ``other``.

        Args:
            other (Node): Target node

        Returns:
            bool: True if the arc was created, False if it already existed,
                ``other`` is this node, or either node is no longer in the arena
        """
        if other.key == self.key or other.key in self._outgoing:
            return False
        if not (self.is_attached and other.is_attached and other._arena is self._arena):
            return False
        self._outgoing.add(other.key)
        other._incoming.add(self.key)
        return True

    def delete_arc_to(self, other: "Node") -> bool:
        """
        Delete the arc from this node to ``other``.

        Returns:
            bool: True if the arc was deleted, False if it did not exist
        """
        if other.key not in self._outgoing:
            return False
        self._outgoing.discard(other.key)
        other._incoming.discard(self.key)
        return True

    def delete_incoming_arcs(self) -> None:
        """Remove every arc pointing to this node, on both endpoints."""
        for source_key in self._incoming:
            self._arena[source_key]._outgoing.discard(self.key)
        self._incoming.clear()

    def delete_outgoing_arcs(self) -> None:
        """Remove every arc leaving this node, on both endpoints."""
        for target_key in self._outgoing:
            self._arena[target_key]._incoming.discard(self.key)
        self._outgoing.clear()

    def delete_all_arcs(self) -> None:
        """Isolate the node by removing all incoming and outgoing arcs."""
        self.delete_incoming_arcs()
        self.delete_outgoing_arcs()

    def __repr__(self) -> str:
        return (
            f"Node(key={self.key!r}, value={self.value!r}, "
            f"outgoing={sorted(self._outgoing)}, incoming={sorted(self._incoming)})"
        )
