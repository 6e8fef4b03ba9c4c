"""Durable key-value storage backends.

A backend maps string keys to JSON documents. It is the only place that
touches the underlying medium; the record store and the auth provider each
own a disjoint set of keys on top of it.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from eventease.core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Abstract base for durable key-value storage."""

    @abstractmethod
    def read_raw(self, key: str) -> str | None:
        """Return the stored text for ``key``, or None if absent."""

    @abstractmethod
    def write_raw(self, key: str, text: str) -> None:
        """Store ``text`` under ``key``."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""

    @abstractmethod
    def keys(self) -> list[str]:
        """List all stored keys."""

    def get(self, key: str) -> Any | None:
        """Load and decode the JSON document under ``key``.

        Returns:
            Decoded value, or None if the key is absent

        Raises:
            StorageUnavailableError: If the stored text cannot be decoded
        """
        text = self.read_raw(key)
        if text is None:
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageUnavailableError(
                f"Corrupt data under '{key}'", key=key, details={"error": str(e)}
            ) from e

    def set(self, key: str, value: Any) -> None:
        """Encode ``value`` as JSON and store it under ``key``."""
        self.write_raw(key, json.dumps(value, default=str))

    def contains(self, key: str) -> bool:
        return self.read_raw(key) is not None


class MemoryKeyValueStorage(KeyValueStorage):
    """In-memory storage (for testing/single-process use).

    Values are kept as encoded text so readers never share mutable state
    with writers.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def read_raw(self, key: str) -> str | None:
        return self._data.get(key)

    def write_raw(self, key: str, text: str) -> None:
        self._data[key] = text
        logger.debug(f"Saved key to memory: {key}")

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            logger.debug(f"Deleted key from memory: {key}")

    def keys(self) -> list[str]:
        return list(self._data)


class FileKeyValueStorage(KeyValueStorage):
    """File-based storage (one JSON file per key)."""

    def __init__(self, storage_dir: Path | str) -> None:
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Using file storage at: {self.storage_dir}")

    def _get_path(self, key: str) -> Path:
        """Get file path for a key."""
        safe_key = key.replace("/", "_").replace(":", "_")
        return self.storage_dir / f"{safe_key}.json"

    def read_raw(self, key: str) -> str | None:
        path = self._get_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageUnavailableError(
                f"Could not read '{key}'", key=key, details={"error": str(e)}
            ) from e

    def write_raw(self, key: str, text: str) -> None:
        path = self._get_path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            tmp_path.write_text(text, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageUnavailableError(
                f"Could not write '{key}'", key=key, details={"error": str(e)}
            ) from e
        logger.debug(f"Saved key to file: {path}")

    def remove(self, key: str) -> None:
        path = self._get_path(key)
        if path.exists():
            path.unlink()
            logger.debug(f"Deleted key file: {path}")

    def keys(self) -> list[str]:
        return sorted(path.stem for path in self.storage_dir.glob("*.json"))
