"""Base DAO over the key-path store."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from wvruns.store.base import Record, Store, join_path

T = TypeVar("T", bound=BaseModel)


class BaseDAO(Generic[T]):
    """Base Data Access Object with common record operations.

    Subclasses name their collection and map between models and stored
    records in _to_model/_to_db.
    """

    collection: str
    model_class: type[T]

    def __init__(self, store: Store):
        """Initialize the DAO.

        Args:
            store: Store holding the collection
        """
        self.store = store

    def path(self, key: str | int | None = None) -> str:
        """Key path of the collection, or of one record in it."""
        if key is None:
            return self.collection
        return join_path(self.collection, key)

    def get(self, key: str) -> T | None:
        """Get a single record by key.

        Returns:
            The model instance or None if not found
        """
        row = self.store.get(self.path(key))
        if row is None:
            return None
        return self._to_model(row, key)

    def get_all(self) -> list[T]:
        """Get every record in the collection."""
        return self._to_models(self.store.get(self.path()) or {})

    def exists(self, key: str) -> bool:
        return self.store.get(self.path(key)) is not None

    def save(self, key: str, model: T) -> T:
        """Write a record under key, replacing any existing one."""
        self.store.set(self.path(key), self._to_db(model))
        return model

    def delete(self, key: str) -> bool:
        """Delete a record by key.

        Returns:
            True if deleted, False if not found
        """
        if not self.exists(key):
            return False
        self.store.remove(self.path(key))
        return True

    def count(self) -> int:
        return len(self.store.get(self.path()) or {})

    def find_by(self, field: str, value) -> list[T]:
        """Find records whose stored field equals value."""
        return self._to_models(self.store.query(self.path(), field, value))

    def _to_models(self, rows: dict[str, Record]) -> list[T]:
        return [self._to_model(row, key) for key, row in rows.items()]

    def _to_model(self, row: Record, key: str | None = None) -> T:
        """Convert a stored record to a model instance.

        Override this method for custom mapping logic.
        """
        return self.model_class(**row)

    def _to_db(self, model: T) -> Record:
        """Convert a model instance to a stored record.

        Override this method for custom mapping logic.
        """
        return model.model_dump(mode="json", exclude_none=True)
