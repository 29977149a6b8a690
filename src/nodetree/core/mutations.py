"""
Node mutations: add, get, set field, soft delete and swap.

All functions work in place on a list of root nodes addressed by cursors.
Failures to resolve a cursor are reported through None/False return values,
never through exceptions.
"""

from typing import Any, Optional

from .cursor import child_cursor, resolve
from .models import Node
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)


def swap_nodes(a: Node, b: Node) -> None:
    """
    Exchange the complete field sets of two nodes in place.

    A field present on only one side ends up on the other side only, so
    nothing stale is left behind. Children move with their node. Applying
    the swap twice restores both nodes.

    Args:
        a: First node.
        b: Second node.
    """
    a.type, b.type = b.type, a.type
    a.visible, b.visible = b.visible, a.visible
    a.children, b.children = b.children, a.children
    a.fields, b.fields = b.fields, a.fields


def swap_slots(
    siblings_a: list[Node],
    index_a: int,
    siblings_b: list[Node],
    index_b: int
) -> None:
    """
    Exchange the nodes held by two list slots.

    This is the ownership transfer used by every move: each slot keeps its
    position, only its occupant changes, so cursors of uninvolved nodes keep
    addressing the same content.

    Args:
        siblings_a: List holding the first slot.
        index_a: Index of the first slot.
        siblings_b: List holding the second slot.
        index_b: Index of the second slot.
    """
    siblings_a[index_a], siblings_b[index_b] = siblings_b[index_b], siblings_a[index_a]


def add_node(nodes: list[Node], cursor: Optional[str], new_node: Node) -> Optional[str]:
    """
    Append a node to the roots or to the children of the node at cursor.

    Args:
        nodes: The root list of the tree.
        cursor: Cursor of the parent node, or None to add a root node.
        new_node: The node to add.

    Returns:
        The cursor of the new node, or None if cursor does not resolve.
    """
    if cursor is None:
        nodes.append(new_node)
        return child_cursor(None, len(nodes) - 1)

    parent = resolve(nodes, cursor)
    if parent is None:
        logger.debug(f"add_node: cursor {cursor!r} not found")
        return None
    if parent.has_malformed_children:
        logger.debug(f"add_node: node at {cursor!r} has malformed children")
        return None

    children = parent.ensure_children()
    children.append(new_node)
    return child_cursor(cursor, len(children) - 1)


def get_node(nodes: list[Node], cursor: Optional[str]) -> Optional[Node]:
    """Return the node at cursor, or None."""
    return resolve(nodes, cursor)


def set_node_field(nodes: list[Node], cursor: Optional[str], name: str, value: Any) -> bool:
    """
    Set a field on the node at cursor.

    Args:
        nodes: The root list of the tree.
        cursor: Cursor of the node.
        name: Field name (structural or domain).
        value: New value.

    Returns:
        True on success, False if cursor does not resolve.
    """
    node = resolve(nodes, cursor)
    if node is None:
        logger.debug(f"set_node_field: cursor {cursor!r} not found")
        return False

    node.set_field(name, value)
    return True


def delete_node(nodes: list[Node], cursor: Optional[str]) -> bool:
    """
    Soft-delete the node at cursor by setting its ``visible`` field to 0.

    Children keep their own visibility and stay reachable by cursor.

    Returns:
        True on success, False if cursor does not resolve.
    """
    return set_node_field(nodes, cursor, "visible", 0)
