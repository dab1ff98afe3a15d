"""Store persisted as a single JSON document on the local filesystem."""

import json
from pathlib import Path

from wvruns.errors import StoreError
from wvruns.logging import get_logger
from wvruns.store.memory import MemoryStore

logger = get_logger(__name__)


class JsonFileStore(MemoryStore):
    """MemoryStore that rewrites its JSON file after every change.

    Meant for a single operator running the CLI locally. The whole document
    is rewritten on each write, so it is not safe for concurrent writers.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read store file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store file {self.path} does not hold a JSON object")
        return data

    def _changed(self) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            logger.error("store_write_failed", path=str(self.path), error=str(e))
            raise StoreError(f"Cannot write store file {self.path}: {e}") from e
