"""Shared test fixtures."""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import pytest

from arcgraph.core.events import GraphEvent
from arcgraph.core.graph import Graph


@dataclass(frozen=True)
class Point:
    """Dataclass value used as a composite node."""

    x: int
    y: int


class Opaque:
    """Plain object compared by identity."""


class RecordingListener:
    """Listener that stores every event it receives."""

    def __init__(self):
        self.events: List[Tuple[GraphEvent, Dict[str, Any]]] = []

    def on_state_change(self, event: GraphEvent, details: Dict[str, Any]) -> None:
        self.events.append((event, details))

    def of_type(self, event: GraphEvent) -> List[Dict[str, Any]]:
        return [details for kind, details in self.events if kind == event]


@pytest.fixture
def graph() -> Graph:
    """Fixture providing an empty graph."""
    return Graph()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def mixed_values() -> List[Any]:
    """Fixture providing values of many shapes, all pairwise distinct."""
    return [1, 3.14, "foo", None, [1, 2, 3], Opaque(), Point(10, 20)]
