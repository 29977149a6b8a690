"""
Tests for saving and loading trees through key-value stores.
"""

import json
from pathlib import Path

import pytest

from nodetree.core.persistence import load_nodes, save_nodes, serialize_nodes, visible_roots
from nodetree.infrastructure.storage import JsonFileStore, MemoryStore

from conftest import folder, item, titles


class TestSaveAndLoad:
    """Tests for the persistence adapter."""

    def test_round_trip_drops_invisible_roots(self, sample_nodes, memory_store):
        """Test that visible roots survive and deleted roots are gone."""
        save_nodes(sample_nodes, memory_store, "nodes")
        loaded = load_nodes(memory_store, "nodes")

        assert titles(loaded) == ["Work", "Milk", "Home"]
        assert loaded == visible_roots(sample_nodes)

    def test_nested_invisible_nodes_are_kept(self, memory_store):
        """Test that pruning is shallow."""
        nodes = [folder("Work", [item("Gone", visible=0)])]

        save_nodes(nodes, memory_store, "nodes")
        loaded = load_nodes(memory_store, "nodes")

        assert loaded[0].children[0].visible == 0

    def test_saved_text_is_compact_json(self, memory_store):
        """Test the stored representation."""
        save_nodes([item("Milk")], memory_store, "nodes")

        assert memory_store.get("nodes") == '[{"type":"item","visible":1,"title":"Milk"}]'

    def test_save_does_not_modify_tree(self, sample_nodes, memory_store):
        """Test that pruning only affects the stored copy."""
        save_nodes(sample_nodes, memory_store, "nodes")

        assert len(sample_nodes) == 4

    def test_load_absent_key(self, memory_store):
        """Test that nothing stored yields None."""
        assert load_nodes(memory_store, "missing") is None

    def test_load_empty_value(self):
        """Test that an empty stored value yields None."""
        assert load_nodes(MemoryStore({"nodes": ""}), "nodes") is None

    def test_load_corrupt_value_raises(self):
        """Test that corrupt stored content propagates to the caller."""
        with pytest.raises(json.JSONDecodeError):
            load_nodes(MemoryStore({"nodes": "[{"}), "nodes")

    def test_load_non_list_raises(self):
        """Test that a stored value must be a list."""
        with pytest.raises(ValueError):
            load_nodes(MemoryStore({"nodes": '{"type": "item"}'}), "nodes")

    def test_serialize_empty_tree(self):
        """Test serializing nothing."""
        assert serialize_nodes([]) == "[]"


class TestJsonFileStore:
    """Tests for the JSON file store."""

    def test_round_trip_across_instances(self, tmp_path: Path):
        """Test that values persist on disk."""
        path = tmp_path / "sub" / "store.json"
        JsonFileStore(path).set("nodes", "[]")
        JsonFileStore(path).set("other", "x")

        store = JsonFileStore(path)
        assert store.get("nodes") == "[]"
        assert store.get("other") == "x"
        assert not path.with_suffix(".tmp").exists()

    def test_missing_file(self, tmp_path: Path):
        """Test reading from a store that was never written."""
        assert JsonFileStore(tmp_path / "none.json").get("nodes") is None

    def test_corrupt_file_raises(self, tmp_path: Path):
        """Test that a corrupt store file propagates the parse error."""
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            JsonFileStore(path).get("nodes")

    def test_save_and_load_through_file(self, sample_nodes, tmp_path: Path):
        """Test the persistence adapter on a file store."""
        store = JsonFileStore(tmp_path / "store.json")

        save_nodes(sample_nodes, store, "nodes")

        assert titles(load_nodes(store, "nodes")) == ["Work", "Milk", "Home"]
