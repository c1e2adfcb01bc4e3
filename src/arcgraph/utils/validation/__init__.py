"""
Validation package for arcgraph.

This package provides validation utilities for checking graph structure and the
shape of debug snapshots.
"""

from .base import ValidationResult
from .integrity import AdjacencyIntegrityValidator
from .schema import SNAPSHOT_SCHEMA, validate_snapshot

__all__ = [
    "ValidationResult",
    "AdjacencyIntegrityValidator",
    "SNAPSHOT_SCHEMA",
    "validate_snapshot",
]
