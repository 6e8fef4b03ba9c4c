"""Data models for EventEase."""

from eventease.models.records import (
    AnalyticsSnapshot,
    Attendee,
    CampaignChannel,
    CampaignStatus,
    CheckInStatus,
    EventRecord,
    EventStatus,
    MarketingCampaign,
    PaymentStatus,
    TicketType,
    Venue,
    Visibility,
)
from eventease.models.results import ErrorKind, StoreResult
from eventease.models.updates import CampaignUpdate, EventUpdate, TicketTypeUpdate

__all__ = [
    # Records
    "EventRecord",
    "EventStatus",
    "Visibility",
    "Venue",
    "TicketType",
    "Attendee",
    "CheckInStatus",
    "PaymentStatus",
    "AnalyticsSnapshot",
    "MarketingCampaign",
    "CampaignChannel",
    "CampaignStatus",
    # Updates
    "EventUpdate",
    "TicketTypeUpdate",
    "CampaignUpdate",
    # Results
    "ErrorKind",
    "StoreResult",
]
