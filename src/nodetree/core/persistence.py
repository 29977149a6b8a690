"""
Persistence of node trees to a key-value store.

Only live root nodes are written; soft-deleted nodes deeper in the tree are
kept as they are.
"""

import json
from typing import Optional

from .models import Node, nodes_from_data, nodes_to_data
from ..infrastructure.storage import KeyValueStore
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)


def visible_roots(nodes: list[Node]) -> list[Node]:
    """
    Drop soft-deleted root nodes.

    Descendants are not inspected.

    Args:
        nodes: The root list of the tree.

    Returns:
        A new list holding only the visible root nodes.
    """
    return [node for node in nodes if not isinstance(node, Node) or node.is_visible]


def serialize_nodes(nodes: list[Node]) -> str:
    """
    Serialize the visible root nodes to compact JSON.

    Args:
        nodes: The root list of the tree.

    Returns:
        JSON text.
    """
    data = nodes_to_data(visible_roots(nodes))
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def load_nodes(store: KeyValueStore, key: str) -> Optional[list[Node]]:
    """
    Load a tree from the store.

    Args:
        store: Key-value store to read from.
        key: Key the tree was saved under.

    Returns:
        The loaded root list, or None if nothing (or an empty value) is stored.

    Raises:
        json.JSONDecodeError: If the stored content is corrupt.
        ValueError: If the stored content is not a list.
    """
    raw = store.get(key)
    if not raw:
        logger.info(f"No nodes stored under {key!r}")
        return None

    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Stored value under {key!r} is not a list of nodes")

    nodes = nodes_from_data(data)
    logger.info(f"Loaded {len(nodes)} root nodes from {key!r}")
    return nodes


def save_nodes(nodes: list[Node], store: KeyValueStore, key: str) -> None:
    """
    Save the visible root nodes to the store.

    Args:
        nodes: The root list of the tree.
        store: Key-value store to write to.
        key: Key to save under.
    """
    store.set(key, serialize_nodes(nodes))
    logger.info(f"Saved nodes under {key!r}")
