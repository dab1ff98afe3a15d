"""Tests for the Supabase store adapter, against a mocked client."""

from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from wvruns.config import Settings, StoreBackend
from wvruns.errors import StoreError
from wvruns.store.supabase_store import SupabaseStore


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def store(client) -> SupabaseStore:
    return SupabaseStore(client)


class TestReads:
    def test_get_record(self, client, store):
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = [{"slug": "jane", "name": "Jane"}]

        assert store.get("athletes/jane") == {"slug": "jane", "name": "Jane"}
        client.table.assert_called_with("athletes")
        client.table.return_value.select.return_value.eq.assert_called_with("slug", "jane")

    def test_get_missing_record(self, client, store):
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = []

        assert store.get("athletes/nobody") is None

    def test_get_collection_keyed_by_key_column(self, client, store):
        client.table.return_value.select.return_value.execute.return_value.data = [
            {"archive_year": 2024, "year": 2024, "start_month": 7, "end_month": 10},
            {"archive_year": 2025, "year": 2025, "start_month": 7, "end_month": 10},
        ]

        assert set(store.get("archived_seasons")) == {"2024", "2025"}

    def test_query(self, client, store):
        client.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            {"id": "r1", "meet_slug": "m1"},
        ]

        assert store.query("results", "meet_slug", "m1") == {"r1": {"id": "r1", "meet_slug": "m1"}}


class TestWrites:
    def test_set_upserts_with_key(self, client, store):
        store.set("seasons/current", {"year": 2025, "start_month": 7, "end_month": 10})

        client.table.return_value.upsert.assert_called_once_with(
            {"key": "current", "year": 2025, "start_month": 7, "end_month": 10},
            on_conflict="key",
        )

    def test_archive_key_kept_apart_from_year(self, client, store):
        store.set("archived_seasons/2024", {"year": 2025, "start_month": 7, "end_month": 10})

        client.table.return_value.upsert.assert_called_once_with(
            {"archive_year": "2024", "year": 2025, "start_month": 7, "end_month": 10},
            on_conflict="archive_year",
        )

    def test_update(self, client, store):
        store.update("athletes/jane", {"graduation_year": 2025})

        client.table.return_value.update.assert_called_once_with({"graduation_year": 2025})
        client.table.return_value.update.return_value.eq.assert_called_once_with("slug", "jane")

    def test_append_all_single_insert(self, client, store):
        paths = store.append_all("results", [{"athlete_name": "A"}, {"athlete_name": "B"}])

        client.table.return_value.insert.assert_called_once()
        rows = client.table.return_value.insert.call_args.args[0]
        assert [r["athlete_name"] for r in rows] == ["A", "B"]
        assert paths == [f"results/{r['id']}" for r in rows]

    def test_remove(self, client, store):
        store.remove("meets/old-meet")

        client.table.return_value.delete.return_value.eq.assert_called_once_with("slug", "old-meet")


class TestErrors:
    def test_request_failure_becomes_store_error(self, client, store):
        client.table.return_value.select.return_value.execute.side_effect = RuntimeError("boom")

        with pytest.raises(StoreError, match="boom") as exc_info:
            store.get("meets")
        assert exc_info.value.path == "meets"

    def test_unknown_collection(self, store):
        with pytest.raises(ValueError, match="Unknown collection"):
            store.get("coaches/x")

    def test_nested_path(self, store):
        with pytest.raises(ValueError, match="Nested"):
            store.get("athletes/jane/results")

    def test_from_settings_requires_key(self):
        settings = Settings(
            store_backend=StoreBackend.SUPABASE,
            supabase_url="https://example.supabase.co",
            supabase_key=None,
        )
        with pytest.raises(StoreError):
            SupabaseStore.from_settings(settings)

    def test_from_settings_builds_client(self, monkeypatch):
        created = MagicMock()
        monkeypatch.setattr("wvruns.store.supabase_store.create_client", created)
        settings = Settings(
            supabase_url="https://example.supabase.co",
            supabase_key=SecretStr("secret"),
        )

        store = SupabaseStore.from_settings(settings)

        created.assert_called_once_with("https://example.supabase.co", "secret")
        assert store.client is created.return_value
