from __future__ import annotations

import logging
import threading
from pathlib import Path

from advisor.application.ports.key_value_store import KeyValueStorePort


class JsonKeyValueStore(KeyValueStorePort):
    """File-backed key-value store: one file per key under data_dir, created on first write."""

    def __init__(self, data_dir: str | Path = "./data/sessions/default") -> None:
        self._data_dir = Path(data_dir)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, key: str) -> threading.Lock:
        """Get or create a lock for a key."""
        with self._lock_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def _get_file_path(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        file_path = self._get_file_path(key)
        with self._get_lock(key):
            if not file_path.exists():
                return None
            return file_path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        """Write the value atomically through a temp file."""
        file_path = self._get_file_path(key)
        temp_path = file_path.with_suffix(".json.tmp")

        with self._get_lock(key):
            try:
                self._data_dir.mkdir(parents=True, exist_ok=True)
                temp_path.write_text(value, encoding="utf-8")
                temp_path.replace(file_path)
            except Exception:
                if temp_path.exists():
                    try:
                        temp_path.unlink()
                    except OSError:
                        self._logger.warning("Temp file cleanup failed", extra={"reason": str(temp_path)})
                raise

    def delete(self, key: str) -> None:
        with self._get_lock(key):
            self._get_file_path(key).unlink(missing_ok=True)
