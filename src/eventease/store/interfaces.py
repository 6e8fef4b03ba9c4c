"""Record service interface (repository pattern).

The local record store and any hosted backend adapter implement the same
async contract, so callers such as the authoring wizard and the dashboards
can be handed either one. Every method returns a ``StoreResult`` instead of
raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping

from eventease.models.records import (
    AnalyticsSnapshot,
    Attendee,
    CheckInStatus,
    EventRecord,
    EventStatus,
    MarketingCampaign,
    TicketType,
)
from eventease.models.results import StoreResult
from eventease.models.updates import CampaignUpdate, EventUpdate, TicketTypeUpdate


@dataclass
class EventFilters:
    """Equality filters and pagination for ``list_events``.

    Attributes:
        status: Only events with this status
        category: Only events in this category
        organizer_id: Only events owned by this organizer
        offset: Number of matching events to skip
        limit: Maximum number of events to return
    """

    status: EventStatus | None = None
    category: str | None = None
    organizer_id: str | None = None
    offset: int = 0
    limit: int | None = None

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if self.offset < 0:
            errors["offset"] = "Offset cannot be negative"
        if self.limit is not None and self.limit < 0:
            errors["limit"] = "Limit cannot be negative"
        return errors

    def matches(self, event: EventRecord) -> bool:
        if self.status is not None and event.status != self.status:
            return False
        if self.category is not None and event.category != self.category.lower():
            return False
        if self.organizer_id is not None and event.organizer_id != self.organizer_id:
            return False
        return True

    def paginate(self, events: list[EventRecord]) -> list[EventRecord]:
        end = None if self.limit is None else self.offset + self.limit
        return events[self.offset:end]


class RecordService(ABC):
    """Interface for event record persistence."""

    # Events

    @abstractmethod
    async def create_event(self, fields: Mapping[str, Any]) -> StoreResult[EventRecord]:
        """Create an event and its analytics snapshot."""

    @abstractmethod
    async def list_events(
        self, filters: EventFilters | None = None
    ) -> StoreResult[list[EventRecord]]:
        """Return events matching ``filters``."""

    @abstractmethod
    async def get_event(self, event_id: str) -> StoreResult[EventRecord]:
        """Return one event, or a not-found result."""

    @abstractmethod
    async def update_event(
        self, event_id: str, patch: EventUpdate
    ) -> StoreResult[EventRecord]:
        """Merge ``patch`` into an existing event."""

    @abstractmethod
    async def delete_event(self, event_id: str) -> StoreResult[None]:
        """Delete an event and everything that references it."""

    # Ticket types

    @abstractmethod
    async def create_ticket_type(self, fields: Mapping[str, Any]) -> StoreResult[TicketType]:
        """Create a ticket type for an existing event."""

    @abstractmethod
    async def list_ticket_types(self, event_id: str) -> StoreResult[list[TicketType]]:
        """Return the ticket types of an event."""

    @abstractmethod
    async def update_ticket_type(
        self, ticket_id: str, patch: TicketTypeUpdate
    ) -> StoreResult[TicketType]:
        """Merge ``patch`` into an existing ticket type."""

    @abstractmethod
    async def delete_ticket_type(self, ticket_id: str) -> StoreResult[None]:
        """Delete a ticket type that has no sales."""

    # Analytics and attendees

    @abstractmethod
    async def get_analytics(self, event_id: str) -> StoreResult[AnalyticsSnapshot]:
        """Return the analytics snapshot of an event."""

    @abstractmethod
    async def list_attendees(self, event_id: str) -> StoreResult[list[Attendee]]:
        """Return the attendees of an event."""

    @abstractmethod
    async def set_attendee_check_in(
        self, attendee_id: str, status: CheckInStatus
    ) -> StoreResult[Attendee]:
        """Update the check-in status of an attendee."""

    # Marketing campaigns

    @abstractmethod
    async def create_campaign(
        self, event_id: str, fields: Mapping[str, Any]
    ) -> StoreResult[MarketingCampaign]:
        """Create a campaign for an existing event."""

    @abstractmethod
    async def list_campaigns(self, event_id: str) -> StoreResult[list[MarketingCampaign]]:
        """Return the campaigns of an event, newest first."""

    @abstractmethod
    async def update_campaign(
        self, campaign_id: str, patch: CampaignUpdate
    ) -> StoreResult[MarketingCampaign]:
        """Merge ``patch`` into an existing campaign."""

    @abstractmethod
    async def delete_campaign(self, campaign_id: str) -> StoreResult[None]:
        """Delete a campaign."""
