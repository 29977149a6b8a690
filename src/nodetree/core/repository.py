"""
Repository pattern for working with a stored node tree.

This module binds a tree to a key-value store so callers can load it, edit it
through cursors and save it back without handling the pieces separately.
"""

from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from .export import (
    DEFAULT_FORMAT_ERROR_TEXT,
    DEFAULT_LOAD_ERROR_TEXT,
    ImportResult,
    export_nodes,
    import_nodes,
)
from .models import Node
from .mutations import add_node, delete_node, get_node, set_node_field
from .persistence import load_nodes, save_nodes
from .reorder import move_node_backward, move_node_downward, move_node_forward, move_node_upward
from ..infrastructure.files import FileHandle, FileReader, FileSaver
from ..infrastructure.storage import KeyValueStore
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)


class NodeRepository:
    """
    Repository for a node tree kept in a key-value store.

    The tree lives in memory in ``nodes`` and is written back only when
    ``save`` is called.
    """

    def __init__(self, store: KeyValueStore, key: str, nodes: Optional[list[Node]] = None):
        """
        Initialize the repository.

        Args:
            store: Key-value store holding the tree.
            key: Key the tree is stored under.
            nodes: Initial tree. If None, starts empty until load() is called.
        """
        self.store = store
        self.key = key
        self.nodes: list[Node] = nodes if nodes is not None else []

    def load(self) -> list[Node]:
        """
        Load the tree from the store.

        Returns:
            The loaded root list (empty if nothing was stored).

        Raises:
            ValueError: If the stored content is corrupt.
        """
        loaded = load_nodes(self.store, self.key)
        self.nodes = loaded if loaded is not None else []
        return self.nodes

    def save(self) -> None:
        """Save the visible root nodes back to the store."""
        save_nodes(self.nodes, self.store, self.key)

    def add(self, node: Node, cursor: Optional[str] = None) -> Optional[str]:
        """Add a node at the root or under cursor; return its cursor."""
        return add_node(self.nodes, cursor, node)

    def get(self, cursor: str) -> Optional[Node]:
        return get_node(self.nodes, cursor)

    def set_field(self, cursor: str, name: str, value: Any) -> bool:
        return set_node_field(self.nodes, cursor, name, value)

    def delete(self, cursor: str) -> bool:
        return delete_node(self.nodes, cursor)

    def move_backward(self, cursor: str) -> bool:
        return move_node_backward(self.nodes, cursor)

    def move_forward(self, cursor: str) -> bool:
        return move_node_forward(self.nodes, cursor)

    def move_upward(self, cursor: str, placeholder: Optional[Node] = None) -> bool:
        return move_node_upward(self.nodes, cursor, placeholder)

    def move_downward(self, cursor: str, placeholder: Optional[Node] = None) -> bool:
        return move_node_downward(self.nodes, cursor, placeholder)

    def export(
        self,
        base_name: str,
        saver: Optional[FileSaver] = None,
        moment: Optional[datetime] = None
    ) -> str:
        """
        Export the visible root nodes to a timestamped file.

        Returns:
            The name of the exported file.
        """
        return export_nodes(self.nodes, base_name, saver, moment)

    async def import_file(
        self,
        file: Optional[FileHandle],
        required_fields: Iterable[str],
        merge: bool = False,
        reader: Optional[FileReader] = None,
        on_load_error: Optional[Callable[[str], Any]] = None,
        on_format_error: Optional[Callable[[str], Any]] = None,
        on_success: Optional[Callable[[], Any]] = None,
        tolerant: bool = True,
        load_error_text: str = DEFAULT_LOAD_ERROR_TEXT,
        format_error_text: str = DEFAULT_FORMAT_ERROR_TEXT
    ) -> ImportResult:
        """
        Import nodes from a file into the tree.

        See ``import_nodes`` for the merge and replace semantics and for the
        callbacks.

        Returns:
            The ImportResult describing the outcome.
        """
        return await import_nodes(
            self.nodes,
            file,
            required_fields,
            merge=merge,
            reader=reader,
            on_load_error=on_load_error,
            on_format_error=on_format_error,
            on_success=on_success,
            tolerant=tolerant,
            load_error_text=load_error_text,
            format_error_text=format_error_text
        )
