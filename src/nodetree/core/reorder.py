"""
Swap-based reordering of nodes.

Moves never renumber anything: they exchange the occupants of two existing
slots (see ``swap_slots``). Moving a node to another level first appends a
placeholder at the destination and then exchanges the node with it, which
leaves the placeholder in the vacated slot.

Every move returns True on success. On failure (cursor not found, no usable
partner) the tree is left untouched and False is returned. Invisible
siblings are never chosen, and scans never wrap around.
"""

from typing import Callable, Iterable, Optional

from .cursor import locate
from .models import Node, make_placeholder
from .mutations import swap_slots
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)


def _find_sibling(
    siblings: list[Node],
    indices: Iterable[int],
    accept: Callable[[Node], bool]
) -> Optional[int]:
    """
    Scan sibling indices in order and return the first accepted one.

    Args:
        siblings: List to scan.
        indices: Indices to visit, in scan order.
        accept: Predicate a sibling must satisfy.

    Returns:
        The index of the first accepted sibling, or None.
    """
    for index in indices:
        sibling = siblings[index]
        if isinstance(sibling, Node) and accept(sibling):
            return index
    return None


def _is_visible(node: Node) -> bool:
    return node.is_visible


def _is_visible_folder(node: Node) -> bool:
    return node.is_visible and node.is_folder


def move_node_backward(nodes: list[Node], cursor: str) -> bool:
    """
    Swap the node at cursor with the previous visible sibling.

    Args:
        nodes: The root list of the tree.
        cursor: Cursor of the node to move.

    Returns:
        True on success, False if there is no visible sibling before it.
    """
    location = locate(nodes, cursor)
    if location is None:
        return False

    other = _find_sibling(location.siblings, range(location.index - 1, -1, -1), _is_visible)
    if other is None:
        logger.debug(f"move_node_backward: no visible sibling before {cursor!r}")
        return False

    swap_slots(location.siblings, location.index, location.siblings, other)
    logger.debug(f"Moved {cursor!r} backward to index {other}")
    return True


def move_node_forward(nodes: list[Node], cursor: str) -> bool:
    """
    Swap the node at cursor with the next visible sibling.

    Args:
        nodes: The root list of the tree.
        cursor: Cursor of the node to move.

    Returns:
        True on success, False if there is no visible sibling after it.
    """
    location = locate(nodes, cursor)
    if location is None:
        return False

    other = _find_sibling(
        location.siblings,
        range(location.index + 1, len(location.siblings)),
        _is_visible
    )
    if other is None:
        logger.debug(f"move_node_forward: no visible sibling after {cursor!r}")
        return False

    swap_slots(location.siblings, location.index, location.siblings, other)
    logger.debug(f"Moved {cursor!r} forward to index {other}")
    return True


def move_node_upward(nodes: list[Node], cursor: str, placeholder: Optional[Node] = None) -> bool:
    """
    Move the node at cursor out of its parent, to the end of the parent's list.

    The destination is the list holding the parent: the children of the
    grandparent, or the roots when the parent is a root node. Root-level
    nodes cannot move upward.

    Args:
        nodes: The root list of the tree.
        cursor: Cursor of the node to move.
        placeholder: Node left in the vacated slot; a fresh invisible
            placeholder is used when omitted.

    Returns:
        True on success, False for root-level or unknown cursors.
    """
    location = locate(nodes, cursor)
    if location is None or location.parent_siblings is None:
        logger.debug(f"move_node_upward: {cursor!r} cannot move upward")
        return False

    if placeholder is None:
        placeholder = make_placeholder()

    destination = location.parent_siblings
    destination.append(placeholder)
    swap_slots(location.siblings, location.index, destination, len(destination) - 1)
    logger.debug(f"Moved {cursor!r} upward to index {len(destination) - 1}")
    return True


def move_node_downward(nodes: list[Node], cursor: str, placeholder: Optional[Node] = None) -> bool:
    """
    Move the node at cursor into the next visible folder sibling.

    The node is appended to the folder's children (created if absent).

    Args:
        nodes: The root list of the tree.
        cursor: Cursor of the node to move.
        placeholder: Node left in the vacated slot; a fresh invisible
            placeholder is used when omitted.

    Returns:
        True on success, False if no visible folder follows the node.
    """
    location = locate(nodes, cursor)
    if location is None:
        return False

    folder_index = _find_sibling(
        location.siblings,
        range(location.index + 1, len(location.siblings)),
        _is_visible_folder
    )
    if folder_index is None:
        logger.debug(f"move_node_downward: no visible folder after {cursor!r}")
        return False

    folder = location.siblings[folder_index]
    if folder.has_malformed_children:
        return False

    if placeholder is None:
        placeholder = make_placeholder()

    destination = folder.ensure_children()
    destination.append(placeholder)
    swap_slots(location.siblings, location.index, destination, len(destination) - 1)
    logger.debug(f"Moved {cursor!r} downward into folder at index {folder_index}")
    return True
