"""
Tests for key-value stores.
"""

import json
import logging

from pokercoach.coach.storage import JsonFileStore, MemoryStore


class TestMemoryStore:

    def test_get_set(self):
        store = MemoryStore({"a": 1})
        assert store.get("a") == 1
        assert store.get("missing") is None
        store.set("b", [1, 2])
        assert store.get("b") == [1, 2]


class TestJsonFileStore:
    """One JSON object per file, replaced atomically."""

    def test_missing_file(self, tmp_path):
        assert JsonFileStore(str(tmp_path / "data.json")).get("pokerProfile") is None

    def test_keys_share_one_file(self, tmp_path):
        path = tmp_path / "nested" / "data.json"
        store = JsonFileStore(str(path))
        store.set("pokerProfile", {"games_played": 3})
        store.set("pokerHistory", [{"id": "x"}])

        reopened = JsonFileStore(str(path))
        assert reopened.get("pokerProfile") == {"games_played": 3}
        assert reopened.get("pokerHistory") == [{"id": "x"}]
        assert json.loads(path.read_text(encoding="utf-8")).keys() == {"pokerProfile", "pokerHistory"}
        # No temp files left behind
        assert [p.name for p in path.parent.iterdir()] == ["data.json"]

    def test_corrupt_file_starts_empty(self, tmp_path, caplog):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFileStore(str(path))
        with caplog.at_level(logging.ERROR):
            assert store.get("pokerProfile") is None
        assert "Corrupt store" in caplog.text

        store.set("pokerProfile", {"games_played": 1})
        assert store.get("pokerProfile") == {"games_played": 1}

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonFileStore(str(path)).get("pokerProfile") is None
