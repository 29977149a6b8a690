"""
Required-field validation for node trees.

Works on both Node objects and raw parsed JSON (lists of dictionaries), so
the same check can run before and after conversion.
"""

from collections.abc import Mapping
from typing import Any, Iterable

from .models import Node
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)


def _has_field(item: Any, name: str) -> bool:
    """Check a field on a Node or a raw mapping (a null value counts as present)."""
    if isinstance(item, Node):
        return item.has_field(name)
    return name in item


def _get_children(item: Any) -> Any:
    """Return the raw children value of a Node or mapping."""
    if isinstance(item, Node):
        return item.get_field("children")
    return item.get("children")


def _check(nodes: Any, required_fields: list[str], tolerant: bool, nested: bool) -> bool:
    """Recursive worker for all_fields_present."""
    if nodes is None:
        return True

    if not isinstance(nodes, list):
        logger.debug(
            f"Malformed node sequence of type {type(nodes).__name__} "
            f"{'accepted' if tolerant else 'rejected'}"
        )
        return tolerant

    for item in nodes:
        if not isinstance(item, (Node, Mapping)):
            if tolerant and nested:
                logger.debug(f"Malformed child of type {type(item).__name__} accepted")
                continue
            return False

        for name in required_fields:
            if not _has_field(item, name):
                return False

        children = _get_children(item)
        if children is None:
            continue
        if not isinstance(children, list):
            logger.debug(
                f"Malformed children of type {type(children).__name__} "
                f"{'accepted' if tolerant else 'rejected'}"
            )
            if tolerant:
                continue
            return False

        if not _check(children, required_fields, tolerant, nested=True):
            return False

    return True


def all_fields_present(
    nodes: Any,
    required_fields: Iterable[str],
    tolerant: bool = True
) -> bool:
    """
    Check that every node, and every descendant, has all required fields.

    An empty or None sequence is vacuously valid. When a ``children`` value is
    malformed (not a list, or a list holding entries that are not nodes) the
    subtree is treated according to the tolerance policy: with
    ``tolerant=True`` (the default) it passes, otherwise it fails. The same
    policy applies to a top-level value that is not a list, but a top-level
    entry that is not a node always fails. Absent or None ``children``
    always pass, as leaves have no children.

    Args:
        nodes: List of Node objects or of parsed JSON mappings.
        required_fields: Names of the fields every node must carry.
        tolerant: Whether malformed subtrees pass.

    Returns:
        True if all nodes carry all required fields.
    """
    return _check(nodes, list(required_fields), tolerant, nested=False)
