"""
Key-value persistence for the profile and hand history.

Values are JSON-compatible data; the store does not interpret them.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import json
import logging
import os
import tempfile


logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Opaque load/save boundary used by GameSession."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None if the key was never set."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under ``key``."""


class MemoryStore(KeyValueStore):
    """In-process store, used for tests and ephemeral servers."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    All keys in one JSON object file.

    Writes go to a temp file in the same directory and are moved into
    place with os.replace, so a crash never leaves a half-written file.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                logger.error(f"Corrupt store {self.path}, starting empty: {e}")
                return {}
        if not isinstance(data, dict):
            logger.error(f"Store {self.path} does not hold a JSON object, starting empty")
            return {}
        return data

    def get(self, key: str) -> Optional[Any]:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def __repr__(self) -> str:
        return f"JsonFileStore({self.path})"
