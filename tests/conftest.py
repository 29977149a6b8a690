"""
Pytest configuration and shared fixtures.

This file contains pytest configuration and reusable test fixtures.
"""

import json
from pathlib import Path

import pytest

from nodetree.core.models import Node
from nodetree.infrastructure.storage import MemoryStore


def item(title: str, visible: int = 1) -> Node:
    """Create a leaf node with a title."""
    return Node(type="item", visible=visible, fields={"title": title})


def folder(title: str, children=None, visible: int = 1) -> Node:
    """Create a folder node with a title (and no children field unless given)."""
    node = Node(type="folder", visible=visible, fields={"title": title})
    if children is not None:
        node.children = children
    return node


def titles(nodes) -> list:
    """Titles of a list of nodes, in order."""
    return [node.get_field("title") for node in nodes]


@pytest.fixture
def sample_nodes() -> list[Node]:
    """
    Create a sample tree for testing.

    Layout (cursor: title):
        0: Work (folder)
            0.0: Report
            0.1: Slides
            0.2: Archive (folder)
                0.2.0: Old
        1: Milk
        2: Eggs (deleted)
        3: Home (folder, no children list)

    Returns:
        The root list.
    """
    return [
        folder("Work", [
            item("Report"),
            item("Slides"),
            folder("Archive", [item("Old")]),
        ]),
        item("Milk"),
        item("Eggs", visible=0),
        folder("Home"),
    ]


@pytest.fixture
def memory_store() -> MemoryStore:
    """An empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def write_json(tmp_path: Path):
    """
    Factory writing data as a JSON file in a temporary directory.

    Returns:
        Function(name, data) -> Path.
    """
    def _write(name: str, data) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
