"""Core graph functionality."""

from .config import GraphConfig
from .events import GraphEvent, GraphEventListener, GraphEventManager
from .exceptions import (
    ConfigurationError,
    EventDispatchError,
    EventError,
    GraphIntegrityError,
    GraphOperationError,
    ValidationError,
)
from .keys import node_key
from .models import Node
from .graph import Graph

__all__ = [
    "ConfigurationError",
    "EventDispatchError",
    "EventError",
    "Graph",
    "GraphConfig",
    "GraphEvent",
    "GraphEventListener",
    "GraphEventManager",
    "GraphIntegrityError",
    "GraphOperationError",
    "Node",
    "ValidationError",
    "node_key",
]
