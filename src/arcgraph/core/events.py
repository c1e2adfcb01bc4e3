"""
Graph event system.

This module provides an event system for graph operations, allowing components
to subscribe to and be notified of changes in the graph state. Events are only
emitted for mutations that actually happened; idempotent no-ops stay silent.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from threading import RLock
from typing import Any, Dict, List, Protocol

from .exceptions import EventDispatchError

logger = logging.getLogger(__name__)


class GraphEvent(Enum):
    """Events that can occur in the graph."""

    NODE_ADDED = auto()
    NODE_REMOVED = auto()
    ARC_ADDED = auto()
    ARC_REMOVED = auto()


class GraphEventListener(Protocol):
    """Protocol for objects that listen to graph state changes."""

    def on_state_change(self, event: GraphEvent, details: Dict[str, Any]) -> None:
        """
        Called when the graph state changes.

        Args:
            event (GraphEvent): Type of event that occurred
            details (Dict[str, Any]): Keys of the affected nodes
        """
        ...


@dataclass
class GraphEventManager:
    """
    Manages graph event subscriptions and notifications.

    Attributes:
        propagate_errors (bool): Re-raise listener failures as EventDispatchError
        _listeners (List[GraphEventListener]): Registered event listeners
        _lock (RLock): Thread lock for synchronization
    """

    propagate_errors: bool = False
    _listeners: List[GraphEventListener] = field(default_factory=list)
    _lock: RLock = field(default_factory=RLock)

    def add_listener(self, listener: GraphEventListener) -> None:
        """Add a listener for graph events. Adding it twice has no effect."""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: GraphEventListener) -> None:
        """Remove a graph event listener."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def has_listeners(self) -> bool:
        with self._lock:
            return bool(self._listeners)

    def notify(self, event: GraphEvent, details: Dict[str, Any]) -> None:
        """
        Notify all listeners of a graph event.

        Every listener is called even if an earlier one fails. Failures are
        logged; with ``propagate_errors`` set, the first one is re-raised once
        all listeners have run.

        Args:
            event (GraphEvent): The type of event that occurred
            details (Dict[str, Any]): Additional information about the event

        Raises:
            EventDispatchError: If a listener failed and errors propagate
        """
        with self._lock:
            listeners = self._listeners.copy()

        first_error = None
        for listener in listeners:
            try:
                listener.on_state_change(event, details)
            except Exception as e:
                logger.exception(f"Error notifying listener {listener!r} of {event.name}")
                if first_error is None:
                    first_error = e

        if first_error is not None and self.propagate_errors:
            raise EventDispatchError(
                f"Listener failed while handling {event.name}"
            ) from first_error

    def clear_listeners(self) -> None:
        """Remove all event listeners."""
        with self._lock:
            self._listeners.clear()
