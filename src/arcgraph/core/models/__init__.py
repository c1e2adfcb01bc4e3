"""
Core domain models package for the graph system.

This package provides the node structure that the graph owns and mutates.
"""

from .node import Node

__all__ = [
    "Node",
]
