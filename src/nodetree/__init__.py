"""
NODETREE - An in-memory engine for cursor-addressed node trees.

This package provides tools for adding, editing, soft-deleting, reordering,
persisting, exporting and importing ordered trees of nodes.
"""

__version__ = "0.1.0"
