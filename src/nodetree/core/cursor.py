"""
Cursor parsing and resolution.

A cursor is a string of zero-based indices joined by dots, for example
``"2.3.5"`` addresses the 6th child of the 4th child of the 3rd root node.
Resolution never raises: a cursor that does not address an existing node
resolves to None.
"""

from typing import Iterable, Optional

from .models import Location, Node
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)

CURSOR_SEPARATOR = "."


def parse_cursor(cursor: Optional[str]) -> Optional[list[int]]:
    """
    Split a cursor into its list of indices.

    Args:
        cursor: Cursor string such as "2.3.5".

    Returns:
        List of non-negative indices, or None if the cursor is empty or any
        segment is not a non-negative decimal integer.
    """
    if not cursor:
        return None

    indices = []
    for segment in cursor.split(CURSOR_SEPARATOR):
        # isdecimal() rejects '', '-1', '+1' and ' 1'
        if not segment.isdecimal():
            return None
        indices.append(int(segment))
    return indices


def format_cursor(indices: Iterable[int]) -> str:
    """Join indices back into a cursor string."""
    return CURSOR_SEPARATOR.join(str(index) for index in indices)


def child_cursor(cursor: Optional[str], index: int) -> str:
    """
    Build the cursor of the child at index below cursor.

    Args:
        cursor: Parent cursor, or None for the root level.
        index: Index of the child.

    Returns:
        The child's cursor.
    """
    if cursor is None:
        return str(index)
    return f"{cursor}{CURSOR_SEPARATOR}{index}"


def cursor_depth(cursor: Optional[str]) -> int:
    """Number of segments in a cursor, 0 if it cannot be parsed."""
    indices = parse_cursor(cursor)
    return len(indices) if indices is not None else 0


def locate(nodes: Optional[list[Node]], cursor: Optional[str]) -> Optional[Location]:
    """
    Resolve a cursor down to its final segment.

    Walks the root list, then repeatedly into ``children``. Any out-of-range
    index, missing ``children`` list or non-node entry along the way yields
    None.

    Args:
        nodes: The root list of the tree.
        cursor: Cursor string.

    Returns:
        The Location of the addressed node, or None if not found.
    """
    indices = parse_cursor(cursor)
    if nodes is None or indices is None:
        return None

    siblings = nodes
    parent: Optional[Node] = None
    parent_siblings: Optional[list[Node]] = None
    node: Optional[Node] = None

    for depth, index in enumerate(indices):
        if depth > 0:
            # Descend into the previous node's children
            if not isinstance(node.children, list):
                logger.debug(f"Cursor {cursor!r}: no children at segment {depth}")
                return None
            parent_siblings = siblings
            parent = node
            siblings = node.children

        if index >= len(siblings) or not isinstance(siblings[index], Node):
            logger.debug(f"Cursor {cursor!r}: index {index} not found at segment {depth}")
            return None
        node = siblings[index]

    return Location(
        node=node,
        siblings=siblings,
        index=indices[-1],
        parent=parent,
        parent_siblings=parent_siblings,
    )


def resolve(nodes: Optional[list[Node]], cursor: Optional[str]) -> Optional[Node]:
    """
    Find the node addressed by a cursor.

    Args:
        nodes: The root list of the tree.
        cursor: Cursor string.

    Returns:
        The node, or None if the cursor does not address an existing node.
    """
    location = locate(nodes, cursor)
    return location.node if location is not None else None
