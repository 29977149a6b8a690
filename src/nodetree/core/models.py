"""
Core domain models for node tree representation.

This module contains pure data models for the nodes of a tree and for the
result of resolving a cursor against it. These models know nothing about
storage or files.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class _Missing(Enum):
    """Marker type for a structural field that is not present at all."""

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing.MISSING
"""Value of a structural attribute whose field is absent (distinct from null)."""

FOLDER_TYPE = "folder"
"""Value of the ``type`` field that marks a container node."""

PLACEHOLDER_TYPE = "empty"
"""Value of the ``type`` field used for generated placeholder nodes."""

STRUCTURAL_FIELDS = ("type", "visible", "children")
"""Field names stored in the typed node header rather than in ``fields``."""


@dataclass
class Node:
    """
    A single node of a tree.

    The three structural fields live in a typed header; every other field is
    kept, in insertion order, in ``fields``. A structural attribute set to
    MISSING counts as an absent field; None is a present JSON null.
    """

    type: Union[str, None, _Missing] = MISSING
    """Node type; 'folder' for container nodes, anything else for leaves."""

    visible: Union[int, None, _Missing] = MISSING
    """Visibility flag; 0 means the node is soft-deleted."""

    children: Union[list["Node"], None, _Missing] = MISSING
    """Ordered child nodes, created lazily on the first added child."""

    fields: dict[str, Any] = field(default_factory=dict)
    """Domain fields, opaque to the engine (e.g., {'title': 'Groceries'})."""

    @property
    def is_folder(self) -> bool:
        """Whether this node is a container node."""
        return self.type == FOLDER_TYPE

    @property
    def is_visible(self) -> bool:
        """Whether this node is live (an absent flag counts as live)."""
        return self.visible != 0

    def ensure_children(self) -> list["Node"]:
        """
        Return the children list, creating an empty one if absent or null.

        Returns:
            The (possibly new) list of children.
        """
        if self.children is MISSING or self.children is None:
            self.children = []
        return self.children

    @property
    def has_malformed_children(self) -> bool:
        """Whether ``children`` holds something other than a list, null or nothing."""
        return (
            self.children is not MISSING
            and self.children is not None
            and not isinstance(self.children, list)
        )

    def has_field(self, name: str) -> bool:
        """
        Check whether a field is present on this node.

        Args:
            name: Structural or domain field name.

        Returns:
            True if the field is present.
        """
        if name in STRUCTURAL_FIELDS:
            return getattr(self, name) is not MISSING
        return name in self.fields

    def get_field(self, name: str, default: Any = None) -> Any:
        """
        Get the value of a structural or domain field.

        Args:
            name: Field name.
            default: Value returned when the field is absent.

        Returns:
            The field value, or default.
        """
        if name in STRUCTURAL_FIELDS:
            value = getattr(self, name)
            return default if value is MISSING else value
        return self.fields.get(name, default)

    def set_field(self, name: str, value: Any) -> None:
        """
        Set a structural or domain field.

        No validation is done on the name or the value.

        Args:
            name: Field name.
            value: New value.
        """
        if name in STRUCTURAL_FIELDS:
            setattr(self, name, value)
        else:
            self.fields[name] = value

    def clear_field(self, name: str) -> None:
        """Remove a field, leaving it absent."""
        if name in STRUCTURAL_FIELDS:
            setattr(self, name, MISSING)
        else:
            self.fields.pop(name, None)

    def field_names(self) -> list[str]:
        """
        Get the names of all present fields.

        Returns:
            Structural names first (only those present), then domain names.
        """
        names = [name for name in STRUCTURAL_FIELDS if getattr(self, name) is not MISSING]
        names.extend(self.fields.keys())
        return names

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the node and its descendants to JSON-ready data.

        Returns:
            Dictionary with present structural keys first, then domain fields.
        """
        data: dict[str, Any] = {}
        if self.type is not MISSING:
            data["type"] = self.type
        if self.visible is not MISSING:
            data["visible"] = self.visible
        if isinstance(self.children, list):
            data["children"] = nodes_to_data(self.children)
        elif self.children is not MISSING:
            data["children"] = self.children
        # Structural names win over a same-named domain key
        for key, value in self.fields.items():
            data.setdefault(key, value)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """
        Build a node (recursively) from parsed JSON data.

        A ``children`` value that is not a list is kept as-is, and null
        structural values stay null, so that no data is lost on a round trip.

        Args:
            data: Mapping as produced by json.loads.

        Returns:
            A new Node.
        """
        node = cls(type=data.get("type", MISSING), visible=data.get("visible", MISSING))
        children = data.get("children", MISSING)
        if isinstance(children, list):
            node.children = [
                cls.from_dict(child) if isinstance(child, dict) else child
                for child in children
            ]
        else:
            node.children = children
        for key, value in data.items():
            if key not in STRUCTURAL_FIELDS:
                node.fields[key] = value
        return node


@dataclass
class Location:
    """
    Where a cursor points inside a tree.

    Produced by resolving a cursor down to its final segment.
    """

    node: Node
    """The node addressed by the cursor."""

    siblings: list[Node]
    """The list holding the node (the roots at depth 1)."""

    index: int
    """Index of the node within siblings."""

    parent: Optional[Node] = None
    """The parent node, or None for root-level nodes."""

    parent_siblings: Optional[list[Node]] = None
    """The list holding the parent, or None for root-level nodes."""


def make_placeholder() -> Node:
    """
    Create a blank, invisible node for use as a move destination.

    Returns:
        A fresh placeholder Node.
    """
    return Node(type=PLACEHOLDER_TYPE, visible=0)


def nodes_from_data(data: list) -> list[Node]:
    """
    Convert a parsed JSON list into a list of nodes.

    Args:
        data: List of mappings.

    Returns:
        List of Node objects.
    """
    return [Node.from_dict(item) for item in data]


def nodes_to_data(nodes: list) -> list:
    """
    Convert a list of nodes into JSON-ready data.

    Entries that are not Node objects are passed through unchanged.

    Args:
        nodes: List of Node objects.

    Returns:
        List of dictionaries.
    """
    return [node.to_dict() if isinstance(node, Node) else node for node in nodes]
