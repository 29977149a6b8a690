"""
Tests for swap-based reordering.

These tests verify the four move directions, that failed moves leave the tree
untouched, and that cursors of uninvolved nodes keep their meaning.
"""

import copy

import pytest

from nodetree.core.cursor import resolve
from nodetree.core.models import PLACEHOLDER_TYPE, Node
from nodetree.core.reorder import (
    move_node_backward,
    move_node_downward,
    move_node_forward,
    move_node_upward,
)

from conftest import folder, item, titles


class TestMoveBackward:
    """Tests for move_node_backward."""

    def test_swap_with_previous(self, sample_nodes):
        """Test swapping with the directly previous sibling."""
        assert move_node_backward(sample_nodes, "1")
        assert titles(sample_nodes) == ["Milk", "Work", "Eggs", "Home"]

    def test_skips_invisible_sibling(self, sample_nodes):
        """Test that deleted siblings are never swap partners."""
        assert move_node_backward(sample_nodes, "3")
        assert titles(sample_nodes) == ["Work", "Home", "Eggs", "Milk"]

    def test_first_node_cannot_move(self, sample_nodes):
        """Test that there is no wraparound at the start."""
        before = copy.deepcopy(sample_nodes)

        assert not move_node_backward(sample_nodes, "0")
        assert sample_nodes == before

    def test_nested_move_keeps_children(self, sample_nodes):
        """Test that a moved folder takes its children along."""
        assert move_node_backward(sample_nodes, "0.2")

        assert titles(sample_nodes[0].children) == ["Report", "Archive", "Slides"]
        assert resolve(sample_nodes, "0.1.0").get_field("title") == "Old"

    def test_only_invisible_before(self):
        """Test that a node preceded only by deleted nodes cannot move."""
        nodes = [item("A", visible=0), item("B", visible=0), item("C")]

        assert not move_node_backward(nodes, "2")


class TestMoveForward:
    """Tests for move_node_forward."""

    def test_swap_with_next_visible(self, sample_nodes):
        """Test skipping a deleted sibling while scanning forward."""
        assert move_node_forward(sample_nodes, "1")
        assert titles(sample_nodes) == ["Work", "Home", "Eggs", "Milk"]

    def test_last_node_cannot_move(self, sample_nodes):
        """Test that there is no wraparound at the end."""
        before = copy.deepcopy(sample_nodes)

        assert not move_node_forward(sample_nodes, "3")
        assert sample_nodes == before

    def test_forward_then_backward_restores(self, sample_nodes):
        """Test that two adjacent moves cancel out."""
        before = copy.deepcopy(sample_nodes)

        assert move_node_forward(sample_nodes, "0.0")
        assert move_node_backward(sample_nodes, "0.1")
        assert sample_nodes == before

    def test_uninvolved_cursors_unchanged(self, sample_nodes):
        """Test that only the two swapped slots change."""
        archive = resolve(sample_nodes, "0.2")

        assert move_node_forward(sample_nodes, "0.0")
        assert resolve(sample_nodes, "0.2") is archive
        assert resolve(sample_nodes, "1").get_field("title") == "Milk"


class TestMoveUpward:
    """Tests for move_node_upward."""

    def test_root_node_cannot_move(self, sample_nodes):
        """Test that depth-1 cursors fail without mutation."""
        before = copy.deepcopy(sample_nodes)

        assert not move_node_upward(sample_nodes, "1", Node())
        assert sample_nodes == before

    def test_move_to_roots(self, sample_nodes):
        """Test that a child of a root node moves to the end of the roots."""
        placeholder = Node(type="blank", visible=0)

        assert move_node_upward(sample_nodes, "0.1", placeholder)

        assert len(sample_nodes) == 5
        assert titles(sample_nodes)[-1] == "Slides"
        assert sample_nodes[0].children[1] is placeholder
        assert titles(sample_nodes[0].children) == ["Report", None, "Archive"]

    def test_move_to_grandparent(self, sample_nodes):
        """Test that a deeper node moves into its grandparent's children."""
        assert move_node_upward(sample_nodes, "0.2.0")

        work_children = sample_nodes[0].children
        assert titles(work_children) == ["Report", "Slides", "Archive", "Old"]
        assert work_children[2].children[0].type == PLACEHOLDER_TYPE
        assert len(sample_nodes) == 4

    def test_default_placeholder_is_invisible(self, sample_nodes):
        """Test that the vacated slot holds a deleted blank node."""
        assert move_node_upward(sample_nodes, "0.0")

        vacated = resolve(sample_nodes, "0.0")
        assert vacated.type == PLACEHOLDER_TYPE
        assert not vacated.is_visible

    def test_unknown_cursor(self, sample_nodes):
        """Test that an unresolvable cursor fails."""
        assert not move_node_upward(sample_nodes, "0.9")


class TestMoveDownward:
    """Tests for move_node_downward."""

    def test_move_into_next_folder(self, sample_nodes):
        """Test moving into a folder without a children list."""
        assert move_node_downward(sample_nodes, "1")

        assert titles(sample_nodes[3].children) == ["Milk"]
        assert sample_nodes[1].type == PLACEHOLDER_TYPE
        assert len(sample_nodes) == 4

    def test_move_into_nested_folder(self, sample_nodes):
        """Test appending to an existing children list."""
        placeholder = Node()

        assert move_node_downward(sample_nodes, "0.0", placeholder)

        archive = sample_nodes[0].children[2]
        assert titles(archive.children) == ["Old", "Report"]
        assert sample_nodes[0].children[0] is placeholder

    def test_no_following_folder(self, sample_nodes):
        """Test that a missing destination leaves the tree unchanged."""
        before = copy.deepcopy(sample_nodes)

        assert not move_node_downward(sample_nodes, "3", Node())
        assert sample_nodes == before

    def test_skips_invisible_folder(self):
        """Test that deleted folders are never destinations."""
        nodes = [item("A"), folder("Gone", [], visible=0)]
        before = copy.deepcopy(nodes)

        assert not move_node_downward(nodes, "0")
        assert nodes == before

    def test_skips_leaves(self):
        """Test that the scan passes over visible leaves."""
        nodes = [item("A"), item("B"), folder("Box")]

        assert move_node_downward(nodes, "0")
        assert titles(nodes[2].children) == ["A"]
        assert titles(nodes)[1:] == ["B", "Box"]

    def test_previous_folder_not_used(self):
        """Test that only folders after the node count."""
        nodes = [folder("Box"), item("A")]

        assert not move_node_downward(nodes, "1")

    @pytest.mark.parametrize("cursor", ["8", "0.8", "bad"])
    def test_unknown_cursor(self, sample_nodes, cursor):
        """Test that unresolvable cursors fail."""
        assert not move_node_downward(sample_nodes, cursor)
