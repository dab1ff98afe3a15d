"""In-process store backed by nested dicts."""

import copy
from typing import Any
from uuid import uuid4

from wvruns.store.base import Record, Store, join_path, split_path


class MemoryStore(Store):
    """Store that keeps everything in a nested dict.

    Used by the test suite and as the base of the JSON file store. Reads
    return deep copies so callers cannot mutate stored state by accident.
    """

    def __init__(self, data: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}

    def get(self, path: str) -> Any | None:
        node: Any = self._data
        for part in split_path(path):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return copy.deepcopy(node)

    def query(self, path: str, field: str, equals: Any) -> dict[str, Record]:
        children = self.get(path)
        if not isinstance(children, dict):
            return {}
        return {
            key: value
            for key, value in children.items()
            if isinstance(value, dict) and value.get(field) == equals
        }

    def set(self, path: str, value: Record) -> None:
        parent, key = self._parent(path, create=True)
        parent[key] = copy.deepcopy(value)
        self._changed()

    def update(self, path: str, fields: Record) -> None:
        parent, key = self._parent(path, create=True)
        current = parent.get(key)
        if not isinstance(current, dict):
            current = {}
        current.update(copy.deepcopy(fields))
        parent[key] = current
        self._changed()

    def append(self, path: str) -> str:
        split_path(path)
        return join_path(path, uuid4().hex)

    def remove(self, path: str) -> None:
        parent, key = self._parent(path, create=False)
        if parent is not None and key in parent:
            del parent[key]
            self._changed()

    def dump(self) -> dict[str, Any]:
        """Return a deep copy of everything in the store."""
        return copy.deepcopy(self._data)

    def _parent(self, path: str, create: bool) -> tuple[dict | None, str]:
        parts = split_path(path)
        node: Any = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                if not create:
                    return None, parts[-1]
                child = {}
                node[part] = child
            node = child
        return node, parts[-1]

    def _changed(self) -> None:
        """Hook for subclasses that persist after each write."""
