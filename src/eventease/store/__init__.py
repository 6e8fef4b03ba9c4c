"""Local record store for events and their dependent records."""

from eventease.store.fixtures import (
    ANALYTICS_KEY,
    ATTENDEES_KEY,
    CAMPAIGNS_KEY,
    COLLECTION_KEYS,
    EVENTS_KEY,
    TICKET_TYPES_KEY,
    default_fixtures,
)
from eventease.store.ids import IdGenerator, TokenIdGenerator, UUIDIdGenerator
from eventease.store.interfaces import EventFilters, RecordService
from eventease.store.record_store import LocalRecordStore

__all__ = [
    # Service contract
    "RecordService",
    "EventFilters",
    "LocalRecordStore",
    # Identity
    "IdGenerator",
    "TokenIdGenerator",
    "UUIDIdGenerator",
    # Collections
    "EVENTS_KEY",
    "TICKET_TYPES_KEY",
    "ATTENDEES_KEY",
    "ANALYTICS_KEY",
    "CAMPAIGNS_KEY",
    "COLLECTION_KEYS",
    "default_fixtures",
]
