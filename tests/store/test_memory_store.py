"""Tests for the in-memory and JSON file stores."""

import json

import pytest

from wvruns.config import Settings, StoreBackend
from wvruns.errors import StoreError
from wvruns.store import JsonFileStore, MemoryStore, get_store, join_path, split_path


class TestPaths:
    def test_split(self):
        assert split_path("/athletes/jane-doe/") == ["athletes", "jane-doe"]

    def test_split_empty(self):
        with pytest.raises(ValueError):
            split_path("//")

    def test_join(self):
        assert join_path("archived_seasons", 2025) == "archived_seasons/2025"


class TestMemoryStore:
    """Tests for the nested-dict store."""

    def test_set_and_get(self):
        store = MemoryStore()
        store.set("athletes/jane", {"name": "Jane"})

        assert store.get("athletes/jane") == {"name": "Jane"}
        assert store.get("athletes") == {"jane": {"name": "Jane"}}

    def test_missing(self):
        store = MemoryStore()
        assert store.get("athletes/nobody") is None
        assert store.get("athletes") is None

    def test_reads_are_copies(self):
        store = MemoryStore()
        store.set("athletes/jane", {"name": "Jane"})

        record = store.get("athletes/jane")
        record["name"] = "Changed"

        assert store.get("athletes/jane") == {"name": "Jane"}

    def test_set_replaces(self):
        store = MemoryStore()
        store.set("athletes/jane", {"name": "Jane", "gender": "F"})
        store.set("athletes/jane", {"name": "Jane Doe"})

        assert store.get("athletes/jane") == {"name": "Jane Doe"}

    def test_update_merges(self):
        store = MemoryStore()
        store.set("athletes/jane", {"name": "Jane", "graduation_year": 2026})
        store.update("athletes/jane", {"graduation_year": 2025})

        assert store.get("athletes/jane") == {"name": "Jane", "graduation_year": 2025}

    def test_query(self):
        store = MemoryStore()
        store.set("results/a", {"meet_slug": "m1"})
        store.set("results/b", {"meet_slug": "m2"})
        store.set("results/c", {"meet_slug": "m1"})

        assert set(store.query("results", "meet_slug", "m1")) == {"a", "c"}
        assert store.query("missing", "meet_slug", "m1") == {}

    def test_append_reserves_unique_children(self):
        store = MemoryStore()
        first = store.append("results")
        second = store.append("results")

        assert first != second
        assert split_path(first)[0] == "results"
        assert store.get("results") is None

    def test_append_all(self):
        store = MemoryStore()
        paths = store.append_all("results", [{"athlete_name": "A"}, {"athlete_name": "B"}])

        assert len(paths) == 2
        assert [store.get(p)["athlete_name"] for p in paths] == ["A", "B"]

    def test_remove(self):
        store = MemoryStore()
        store.set("athletes/jane", {"name": "Jane"})
        store.remove("athletes/jane")
        store.remove("athletes/nobody")
        store.remove("schools/x")

        assert store.get("athletes/jane") is None


class TestJsonFileStore:
    """Tests for the JSON file store."""

    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "data.json"
        JsonFileStore(path).set("seasons/current", {"year": 2025})

        assert JsonFileStore(path).get("seasons/current") == {"year": 2025}
        assert json.loads(path.read_text()) == {"seasons": {"current": {"year": 2025}}}

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "nested" / "data.json")
        assert store.dump() == {}

        store.set("schools/bridgeport", {"name": "Bridgeport High"})
        assert (tmp_path / "nested" / "data.json").exists()

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json")

        with pytest.raises(StoreError, match="Cannot read"):
            JsonFileStore(path)

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1, 2]")

        with pytest.raises(StoreError):
            JsonFileStore(path)


class TestGetStore:
    """Tests for backend selection."""

    def test_memory(self):
        assert isinstance(get_store(Settings(store_backend=StoreBackend.MEMORY)), MemoryStore)

    def test_json(self, tmp_path):
        store = get_store(Settings(store_backend=StoreBackend.JSON, data_file=tmp_path / "d.json"))

        assert isinstance(store, JsonFileStore)
        assert store.path == tmp_path / "d.json"

    def test_supabase_requires_credentials(self):
        settings = Settings(store_backend=StoreBackend.SUPABASE, supabase_url=None, supabase_key=None)

        with pytest.raises(StoreError, match="SUPABASE_URL"):
            get_store(settings)
