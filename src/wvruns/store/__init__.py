"""Storage backends behind the key-path Store interface."""

from wvruns.config import Settings, StoreBackend
from wvruns.store.base import Record, Store, join_path, split_path
from wvruns.store.json_file import JsonFileStore
from wvruns.store.memory import MemoryStore


def get_store(settings: Settings) -> Store:
    """Build the store selected by settings.store_backend."""
    if settings.store_backend == StoreBackend.MEMORY:
        return MemoryStore()
    if settings.store_backend == StoreBackend.SUPABASE:
        from wvruns.store.supabase_store import SupabaseStore

        return SupabaseStore.from_settings(settings)
    return JsonFileStore(settings.data_file)


__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "Record",
    "Store",
    "get_store",
    "join_path",
    "split_path",
]
