"""Typed partial updates.

Each update is a struct of optional fields. ``None`` means "leave unchanged";
only assigned fields are merged into the stored record. Updates are
validated on their own before the store merges them, and the merged record
is validated again where the invariant spans several fields.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any

from eventease.models.records import (
    CampaignChannel,
    CampaignStatus,
    EventStatus,
    Venue,
    Visibility,
)


@dataclass
class _PartialUpdate:
    def changes(self) -> dict[str, Any]:
        """Return only the fields that were assigned."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.changes()

    def validate(self) -> dict[str, str]:
        return {}


@dataclass
class EventUpdate(_PartialUpdate):
    """Field assignments for an existing event."""

    title: str | None = None
    description: str | None = None
    category: str | None = None
    date: str | None = None
    time: str | None = None
    end_time: str | None = None
    venue: Venue | None = None
    image_url: str | None = None
    status: EventStatus | None = None
    visibility: Visibility | None = None
    price: float | None = None
    currency: str | None = None
    tags: list[str] | None = None

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if self.title is not None and not self.title.strip():
            errors["title"] = "Title cannot be blank"
        if self.category is not None and not self.category.strip():
            errors["category"] = "Category cannot be blank"
        if self.date is not None:
            try:
                datetime.fromisoformat(self.date)
            except ValueError:
                errors["date"] = "Date must be in ISO format (YYYY-MM-DD)"
        if self.price is not None and self.price < 0:
            errors["price"] = "Price cannot be negative"
        if self.venue is not None and self.venue.capacity < 0:
            errors["venue.capacity"] = "Capacity cannot be negative"
        if self.status is not None and not isinstance(self.status, EventStatus):
            errors["status"] = "Unknown status"
        if self.visibility is not None and not isinstance(self.visibility, Visibility):
            errors["visibility"] = "Unknown visibility"
        return errors


@dataclass
class TicketTypeUpdate(_PartialUpdate):
    """Field assignments for an existing ticket type."""

    name: str | None = None
    description: str | None = None
    price: float | None = None
    currency: str | None = None
    quantity: int | None = None
    sold: int | None = None
    sale_start: datetime | None = None
    sale_end: datetime | None = None
    is_active: bool | None = None
    benefits: list[str] | None = None
    restrictions: list[str] | None = None

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if self.name is not None and not self.name.strip():
            errors["name"] = "Ticket name cannot be blank"
        if self.price is not None and self.price < 0:
            errors["price"] = "Price cannot be negative"
        if self.quantity is not None and self.quantity < 0:
            errors["quantity"] = "Quantity cannot be negative"
        if self.sold is not None and self.sold < 0:
            errors["sold"] = "Sold cannot be negative"
        return errors


@dataclass
class CampaignUpdate(_PartialUpdate):
    """Field assignments for an existing marketing campaign."""

    name: str | None = None
    channel: CampaignChannel | None = None
    subject: str | None = None
    content: str | None = None
    audience: str | None = None
    status: CampaignStatus | None = None
    open_rate: float | None = None
    click_rate: float | None = None

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if self.name is not None and not self.name.strip():
            errors["name"] = "Campaign name cannot be blank"
        for name in ("open_rate", "click_rate"):
            value = getattr(self, name)
            if value is not None and not 0 <= value <= 100:
                errors[name] = "Rate must be between 0 and 100"
        return errors
