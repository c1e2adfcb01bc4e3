"""
Custom exceptions for the graph system.

Graph and node operations report their outcomes through return values and never
raise during normal use. The exceptions below belong to the surrounding layers:
configuration, event dispatch and validation of graph state.
"""


class ValidationError(Exception):
    """
    Raised when data validation fails.

    This exception is raised when a value checked by the validation utilities
    does not meet its expected structure.

    Examples:
        * Debug snapshot not matching its JSON schema
        * Snapshot entries of the wrong type
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid.

    Examples:
        * Key function that is not callable
        * Key function returning something other than a string
    """


class GraphOperationError(Exception):
    """
    Raised when graph operations fail.

    Normal node, arc and edge operations never raise this. It is reserved for
    explicit integrity assertions over the graph structure.

    Examples:
        * Graph integrity violations
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class GraphIntegrityError(GraphOperationError):
    """
    Raised when the adjacency mirror invariant does not hold.

    Examples:
        * Outgoing entry without the matching incoming entry
        * Adjacency entry naming a node that is not in the graph
    """


class EventError(Exception):
    """
    Raised when event operations fail.

    Examples:
        * Event handler exceptions
    """


class EventDispatchError(EventError):
    """Raised when a listener fails and listener errors are configured to propagate."""
