"""Pytest configuration and fixtures for EventEase tests."""

import os
import random
import sys
from typing import Any

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from eventease.core.config import Config  # noqa: E402
from eventease.storage.backends import MemoryKeyValueStorage  # noqa: E402
from eventease.store.record_store import LocalRecordStore  # noqa: E402


@pytest.fixture
def config(tmp_path) -> Config:
    """Config with no simulated latency and an isolated storage directory."""
    return Config(
        storage_dir=tmp_path / "storage",
        seed_fixtures=True,
        latency_min=0.0,
        latency_max=0.0,
        security_log_limit=500,
    )


@pytest.fixture
def storage() -> MemoryKeyValueStorage:
    """Empty in-memory key-value storage."""
    return MemoryKeyValueStorage()


@pytest.fixture
def store(storage, config) -> LocalRecordStore:
    """Record store seeded with the default fixtures."""
    return LocalRecordStore(storage=storage, config=config, rng=random.Random(7))


@pytest.fixture
def empty_store(storage, config) -> LocalRecordStore:
    """Record store with no fixture data."""
    return LocalRecordStore(storage=storage, config=config, fixtures={}, rng=random.Random(7))


@pytest.fixture
def slow_store(config) -> LocalRecordStore:
    """Record store with a small non-zero latency so calls overlap."""
    config.latency_min = 0.005
    config.latency_max = 0.02
    return LocalRecordStore(storage=MemoryKeyValueStorage(), config=config, fixtures={})


@pytest.fixture
def event_fields() -> dict[str, Any]:
    """Minimal valid event creation fields."""
    return {
        "title": "Demo",
        "organizer_id": "organizer_user_1",
        "date": "2025-01-01",
        "category": "technology",
    }


@pytest.fixture
def ticket_fields() -> dict[str, Any]:
    """Valid ticket type fields (without event_id)."""
    return {
        "name": "General Admission",
        "price": 25.0,
        "quantity": 100,
        "sale_start": "2024-12-01T00:00:00+00:00",
        "sale_end": "2024-12-31T23:59:59+00:00",
    }
