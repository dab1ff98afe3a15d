"""Key-path document store interface.

Records live under slash-separated paths such as ``athletes/jane-doe`` or
``seasons/current``. The first segment names a collection; the rest
addresses a record inside it. Values are plain JSON-ready dicts.

The core relies only on the operations below: no joins, no transactions
across paths, and no schema enforcement. Cross-entity references such as
``school_slug`` are advisory.
"""

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


def split_path(path: str) -> list[str]:
    """Split a key path into segments, ignoring stray slashes."""
    parts = [p for p in path.strip("/").split("/") if p]
    if not parts:
        raise ValueError(f"Invalid store path: '{path}'")
    return parts


def join_path(*parts: str | int) -> str:
    """Join segments into a key path."""
    return "/".join(str(p).strip("/") for p in parts)


class Store(ABC):
    """Abstract key-path store."""

    @abstractmethod
    def get(self, path: str) -> Any | None:
        """Return the value at path, or None if absent.

        For a collection path the value is a dict of child key -> record.
        """

    @abstractmethod
    def query(self, path: str, field: str, equals: Any) -> dict[str, Record]:
        """Return children of a collection whose field equals a value."""

    @abstractmethod
    def set(self, path: str, value: Record) -> None:
        """Write value at path, replacing anything already there."""

    @abstractmethod
    def update(self, path: str, fields: Record) -> None:
        """Merge fields into the record at path."""

    @abstractmethod
    def append(self, path: str) -> str:
        """Reserve a new unique child under a collection and return its path.

        Nothing is written until the caller sets a value at the new path.
        """

    @abstractmethod
    def remove(self, path: str) -> None:
        """Delete the value at path. Removing an absent path is a no-op."""

    def append_all(self, path: str, values: list[Record]) -> list[str]:
        """Append several records to a collection in one call.

        Backends that support a native batch insert override this. The
        default writes one child at a time, so a failure part way through
        leaves the earlier children in place.
        """
        paths = []
        for value in values:
            child = self.append(path)
            self.set(child, value)
            paths.append(child)
        return paths
