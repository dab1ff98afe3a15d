"""Store adapter over Supabase (PostgREST) tables.

Each collection maps to a table with one key column:

    schools/<slug>            -> schools.slug
    meets/<slug>              -> meets.slug
    athletes/<slug>           -> athletes.slug
    results/<id>              -> results.id
    seasons/current           -> seasons.key
    archived_seasons/<year>   -> archived_seasons.archive_year

See sql/schema.sql for the table definitions.
"""

from typing import Any
from uuid import uuid4

from supabase import Client, create_client

from wvruns.config import Settings
from wvruns.errors import StoreError
from wvruns.logging import get_logger
from wvruns.store.base import Record, Store, join_path, split_path

logger = get_logger(__name__)

KEY_COLUMNS: dict[str, str] = {
    "schools": "slug",
    "meets": "slug",
    "athletes": "slug",
    "results": "id",
    "seasons": "key",
    "archived_seasons": "archive_year",
}


class SupabaseStore(Store):
    """Store whose collections are Supabase tables."""

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStore":
        """Create a store from application settings."""
        if not settings.supabase_url or not settings.supabase_key:
            raise StoreError("SUPABASE_URL and SUPABASE_KEY must be set for the supabase backend")
        client = create_client(settings.supabase_url, settings.supabase_key.get_secret_value())
        return cls(client)

    def get(self, path: str) -> Any | None:
        table, key_column, key = self._resolve(path)
        query = self.client.table(table).select("*")
        if key is None:
            rows = self._execute(query, path)
            return {str(row[key_column]): row for row in rows}

        rows = self._execute(query.eq(key_column, key).limit(1), path)
        return rows[0] if rows else None

    def query(self, path: str, field: str, equals: Any) -> dict[str, Record]:
        table, key_column, key = self._resolve(path)
        if key is not None:
            raise ValueError(f"query needs a collection path, got '{path}'")
        rows = self._execute(self.client.table(table).select("*").eq(field, equals), path)
        return {str(row[key_column]): row for row in rows}

    def set(self, path: str, value: Record) -> None:
        table, key_column, key = self._require_record(path)
        data = {key_column: key, **value}
        self._execute(self.client.table(table).upsert(data, on_conflict=key_column), path)

    def update(self, path: str, fields: Record) -> None:
        table, key_column, key = self._require_record(path)
        self._execute(self.client.table(table).update(fields).eq(key_column, key), path)

    def append(self, path: str) -> str:
        self._resolve(path)
        return join_path(path, uuid4().hex)

    def append_all(self, path: str, values: list[Record]) -> list[str]:
        """Insert all values with one request."""
        table, key_column, key = self._resolve(path)
        if key is not None:
            raise ValueError(f"append_all needs a collection path, got '{path}'")
        if not values:
            return []

        keys = [uuid4().hex for _ in values]
        rows = [{key_column: k, **v} for k, v in zip(keys, values, strict=True)]
        self._execute(self.client.table(table).insert(rows), path)
        return [join_path(path, k) for k in keys]

    def remove(self, path: str) -> None:
        table, key_column, key = self._require_record(path)
        self._execute(self.client.table(table).delete().eq(key_column, key), path)

    def _resolve(self, path: str) -> tuple[str, str, str | None]:
        parts = split_path(path)
        table = parts[0]
        if table not in KEY_COLUMNS:
            raise ValueError(f"Unknown collection: '{table}'")
        if len(parts) > 2:
            raise ValueError(f"Nested paths are not supported: '{path}'")
        return table, KEY_COLUMNS[table], parts[1] if len(parts) == 2 else None

    def _require_record(self, path: str) -> tuple[str, str, str]:
        table, key_column, key = self._resolve(path)
        if key is None:
            raise ValueError(f"Expected a record path, got '{path}'")
        return table, key_column, key

    def _execute(self, query, path: str) -> list[Record]:
        try:
            result = query.execute()
        except Exception as e:
            logger.error("supabase_request_failed", path=path, error=str(e))
            raise StoreError(f"Supabase request failed for '{path}': {e}", path=path) from e
        return result.data or []
