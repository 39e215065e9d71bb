"""
kv.py — String key-value media backing the script library.

The library only ever needs ``get(key)`` and ``set(key, value)`` over string
values, the same contract a browser's local storage offers.  Writes to
different keys are independent; there is no transaction spanning two keys.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(ABC):
    """Interface for a persistent string key-value medium."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or ``None`` when *key* was never set."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Forget *key*; a missing key is not an error."""


class InMemoryKeyValueStore(KeyValueStore):
    """Keep values in process memory (tests, throwaway sessions)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(_validate_key(key))

    def set(self, key: str, value: str) -> None:
        self._data[_validate_key(key)] = value

    def remove(self, key: str) -> None:
        self._data.pop(_validate_key(key), None)


class FileKeyValueStore(KeyValueStore):
    """Persist each key as ``<key>.json`` under *storage_dir*.

    Values are written verbatim as UTF-8 text; the directory is created on
    first write.
    """

    def __init__(self, storage_dir: str | Path) -> None:
        self.storage_dir = Path(storage_dir)

    def get(self, key: str) -> Optional[str]:
        path = self._key_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        path = self._key_path(key)
        with open(path, "w", encoding="utf-8") as f:
            f.write(value)
        logger.debug("Wrote %d chars to %s", len(value), path)

    def remove(self, key: str) -> None:
        path = self._key_path(key)
        if path.exists():
            path.unlink()

    def _key_path(self, key: str) -> Path:
        return self.storage_dir / f"{_validate_key(key)}.json"


def _validate_key(key: str) -> str:
    if not isinstance(key, str):
        raise TypeError("key must be a string")
    if not _VALID_KEY.match(key):
        raise ValueError(f"Invalid store key {key!r}")
    return key
