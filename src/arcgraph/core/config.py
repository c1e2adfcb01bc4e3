"""
Configuration for graph instances.

Graphs are configured through a plain dataclass passed to the constructor.
Values are validated once, when the configuration is created.
"""

from dataclasses import dataclass, field

from .exceptions import ConfigurationError
from .keys import KeyFunc, node_key


@dataclass(frozen=True)
class GraphConfig:
    """
    Settings for a Graph.

    Attributes:
        key_func (KeyFunc): Derives the identity key of a value
        thread_safe (bool): Guard every public operation with a re-entrant lock
        emit_events (bool): Dispatch mutation events to listeners
        propagate_listener_errors (bool): Re-raise listener failures after
            the mutation has been applied instead of only logging them
    """

    key_func: KeyFunc = field(default=node_key)
    thread_safe: bool = True
    emit_events: bool = True
    propagate_listener_errors: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        if not callable(self.key_func):
            raise ConfigurationError("key_func must be callable")
        for name in ("thread_safe", "emit_events", "propagate_listener_errors"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be a boolean")
