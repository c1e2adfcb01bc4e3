"""Utility packages for arcgraph."""
