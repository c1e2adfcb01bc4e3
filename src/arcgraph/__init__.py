"""
arcgraph - In-memory graph of arbitrary values

This package provides a graph abstract data type whose nodes wrap arbitrary
caller values, identified by structure rather than by object identity. It
includes:

- Directed arcs and undirected edges with mirrored adjacency on both endpoints
- Structural identity keys for scalars, containers, dataclasses and opaque objects
- Mutation events for listeners
- Validation utilities for adjacency integrity and debug snapshots
"""

__version__ = "0.1.0"
__author__ = "arcgraph Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 11):
    raise RuntimeError("arcgraph requires Python 3.11 or higher")

# Import commonly used components for easier access
from .core.config import GraphConfig
from .core.graph import Graph
from .core.keys import node_key
from .core.models import Node

__all__ = [
    "Graph",
    "GraphConfig",
    "Node",
    "node_key",
]
