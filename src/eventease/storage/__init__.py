"""Durable key-value storage for EventEase."""

from eventease.storage.backends import (
    FileKeyValueStorage,
    KeyValueStorage,
    MemoryKeyValueStorage,
)

__all__ = [
    "KeyValueStorage",
    "MemoryKeyValueStorage",
    "FileKeyValueStorage",
]
