"""In-memory views over store snapshots for the admin and organizer dashboards."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Iterable

from eventease.models.records import AnalyticsSnapshot, EventRecord, EventStatus
from eventease.models.results import StoreResult
from eventease.store.interfaces import EventFilters, RecordService

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

SORT_KEYS = {
    "date": lambda e: (e.date, e.time),
    "title": lambda e: e.title.lower(),
    "created_at": lambda e: e.created_at,
    "updated_at": lambda e: e.updated_at,
    "status": lambda e: e.status.value,
}


def filter_events(
    events: Iterable[EventRecord],
    search: str = "",
    category: str = ALL_CATEGORIES,
) -> list[EventRecord]:
    """Filter events by a search term and a category.

    The search term matches case-insensitively against the title or the
    category.

    Args:
        events: Events to filter
        search: Free-text search term (empty matches everything)
        category: Category to keep, or "all"

    Returns:
        Matching events in their original order
    """
    term = search.strip().lower()
    matching = []
    for event in events:
        if term and term not in event.title.lower() and term not in event.category.lower():
            continue
        if category != ALL_CATEGORIES and event.category != category.lower():
            continue
        matching.append(event)
    return matching


def sort_events(
    events: Iterable[EventRecord], key: str = "date", descending: bool = False
) -> list[EventRecord]:
    """Sort events by one of ``SORT_KEYS``.

    Raises:
        ValueError: If ``key`` is not a known sort key
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key '{key}'. Choose from: {', '.join(SORT_KEYS)}")
    return sorted(events, key=SORT_KEYS[key], reverse=descending)


@dataclass
class DashboardStats:
    """Headline numbers for an organizer dashboard."""

    total_events: int = 0
    published_events: int = 0
    draft_events: int = 0
    upcoming_events: int = 0
    completed_events: int = 0
    total_tickets_sold: int = 0
    total_revenue: float = 0.0
    average_attendance: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def dashboard_stats(
    events: Iterable[EventRecord],
    analytics: Iterable[AnalyticsSnapshot],
    today: date | None = None,
) -> DashboardStats:
    """Summarize events and their analytics.

    Only snapshots that belong to one of ``events`` are counted. An event is
    upcoming when it is published and scheduled after ``today``.

    Args:
        events: Events to summarize
        analytics: Analytics snapshots (extra snapshots are ignored)
        today: Reference date (defaults to today)

    Returns:
        DashboardStats for the given events
    """
    events = list(events)
    today = today or date.today()
    event_ids = {e.id for e in events}
    snapshots = [a for a in analytics if a.event_id in event_ids]

    def is_upcoming(event: EventRecord) -> bool:
        try:
            return date.fromisoformat(event.date[:10]) > today
        except ValueError:
            return False

    total = len(events)
    sold = sum(a.registrations for a in snapshots)
    return DashboardStats(
        total_events=total,
        published_events=sum(1 for e in events if e.status == EventStatus.PUBLISHED),
        draft_events=sum(1 for e in events if e.status == EventStatus.DRAFT),
        upcoming_events=sum(
            1 for e in events if e.status == EventStatus.PUBLISHED and is_upcoming(e)
        ),
        completed_events=sum(1 for e in events if e.status == EventStatus.COMPLETED),
        total_tickets_sold=sold,
        total_revenue=sum(a.revenue for a in snapshots),
        average_attendance=sold / total if total else 0.0,
    )


async def load_dashboard_stats(
    service: RecordService,
    organizer_id: str | None = None,
    today: date | None = None,
) -> StoreResult[DashboardStats]:
    """Fetch an organizer's events and analytics and summarize them."""
    listed = await service.list_events(EventFilters(organizer_id=organizer_id))
    if not listed.success:
        return StoreResult.fail(listed.error, listed.error_kind)

    snapshots = []
    for event in listed.payload:
        result = await service.get_analytics(event.id)
        if result.success:
            snapshots.append(result.payload)
        else:
            logger.warning(f"Skipping analytics for {event.id}: {result.error}")
    return StoreResult.ok(dashboard_stats(listed.payload, snapshots, today=today))
