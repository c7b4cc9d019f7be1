"""
String key-value stores backing the quota counter.

These mirror the browser's localStorage contract: keys and values are strings,
``get_item`` returns None for a missing key, and ``set_item`` is durable as
soon as it returns. A store that cannot be read or written raises StoreError.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from ..errors import StoreError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface for a string key-value store."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError


class InMemoryStore(KeyValueStore):
    """Process-local store, lost on restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})
        self._lock = Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = str(value)


class JsonFileStore(KeyValueStore):
    """
    Store persisted as a single JSON object in one file.

    The whole file is rewritten on every ``set_item`` so a reload always sees
    the last written value.
    """

    def __init__(self, path: Path):
        self.path = path
        self._lock = Lock()

    def _load_data(self) -> Dict[str, str]:
        """Load store contents from file. A missing file is an empty store."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading store {self.path}: {e}")
            raise StoreError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store file {self.path} does not hold a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _save_data(self, data: Dict[str, str]) -> None:
        """Save store contents to file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error(f"Error saving store {self.path}: {e}")
            raise StoreError(f"Cannot write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load_data().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load_data()
            data[key] = str(value)
            self._save_data(data)
