"""Persisted record models for EventEase.

Every record round-trips through ``to_dict()`` / ``from_dict()`` so the
record store can keep each collection as a JSON array under one storage key.
Timestamps are timezone-aware UTC datetimes in memory and ISO-8601 strings
on disk; enums are stored by value.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from eventease.core.exceptions import ValidationError
from eventease.utils.sanitization import sanitize_input, sanitize_url


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 string (or pass through a datetime)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class EventStatus(str, Enum):
    """Lifecycle status of an event.

    Statuses only move forward along ``draft -> published -> ongoing ->
    completed``. Any non-terminal status may also move to ``cancelled``.
    """

    DRAFT = "draft"
    PUBLISHED = "published"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Check if no further transition is possible."""
        return self in (EventStatus.COMPLETED, EventStatus.CANCELLED)

    def can_transition_to(self, target: EventStatus) -> bool:
        """Check whether moving from this status to ``target`` is allowed."""
        if target == self:
            return True
        if self.is_terminal:
            return False
        if target == EventStatus.CANCELLED:
            return True
        return STATUS_ORDER.index(target) > STATUS_ORDER.index(self)


STATUS_ORDER = [
    EventStatus.DRAFT,
    EventStatus.PUBLISHED,
    EventStatus.ONGOING,
    EventStatus.COMPLETED,
]


class Visibility(str, Enum):
    """Who can discover an event."""

    PUBLIC = "public"
    PRIVATE = "private"
    UNLISTED = "unlisted"


class CheckInStatus(str, Enum):
    """Attendance state of an attendee."""

    PENDING = "pending"
    CHECKED_IN = "checked-in"
    NO_SHOW = "no-show"


class PaymentStatus(str, Enum):
    """Payment state reported by the payment collaborator."""

    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"


class CampaignChannel(str, Enum):
    """Delivery channel of a marketing campaign."""

    EMAIL = "email"
    SOCIAL = "social"
    SMS = "sms"
    PUSH = "push"


class CampaignStatus(str, Enum):
    """Status of a marketing campaign."""

    DRAFT = "draft"
    SCHEDULED = "scheduled"
    SENT = "sent"
    CANCELLED = "cancelled"


def coerce_enum(enum_cls: type[Enum], value: Any, field_name: str) -> Any:
    """Convert ``value`` to ``enum_cls`` or raise a field-level ValidationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {field_name}",
            field_errors={field_name: f"Must be one of: {allowed}"},
        ) from None


@dataclass
class Venue:
    """Where an event takes place.

    Attributes:
        name: Venue name
        address: Street address (optional)
        capacity: Maximum number of attendees
    """

    name: str = ""
    address: str = ""
    capacity: int = 0

    @classmethod
    def from_value(cls, value: Any) -> Venue:
        """Build a Venue from a dict, a plain venue name, or a Venue."""
        if isinstance(value, Venue):
            return value
        if not value:
            return cls()
        if isinstance(value, str):
            return cls(name=sanitize_input(value, max_len=300))
        return cls(
            name=sanitize_input(value.get("name"), max_len=300),
            address=sanitize_input(value.get("address"), max_len=500),
            capacity=int(value.get("capacity") or 0),
        )


REQUIRED_EVENT_FIELDS = ("title", "organizer_id", "date", "category")


@dataclass
class EventRecord:
    """The canonical persisted representation of an event.

    Attributes:
        id: Unique identity within the store
        organizer_id: Identity of the owning organizer
        title: Event title
        category: Category tag (e.g. "technology")
        date: Scheduled date, ISO format (YYYY-MM-DD)
        time: Start time (HH:MM)
        end_time: End time (HH:MM)
        description: Long description
        venue: Venue descriptor
        image_url: Cover image reference
        status: Lifecycle status
        visibility: Discovery visibility
        price: Headline price (optional)
        currency: Currency for ``price``
        tags: Free-form tags
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    organizer_id: str
    title: str
    category: str
    date: str
    created_at: datetime
    updated_at: datetime
    time: str = ""
    end_time: str = ""
    description: str = ""
    venue: Venue = field(default_factory=Venue)
    image_url: str = ""
    status: EventStatus = EventStatus.DRAFT
    visibility: Visibility = Visibility.PUBLIC
    price: float | None = None
    currency: str | None = None
    tags: list[str] = field(default_factory=list)

    @staticmethod
    def validate_fields(fields: Mapping[str, Any]) -> dict[str, str]:
        """Check caller-supplied creation fields.

        Returns:
            Map of field name to message (empty if valid)
        """
        errors: dict[str, str] = {}
        for name in REQUIRED_EVENT_FIELDS:
            if not str(fields.get(name) or "").strip():
                errors[name] = f"{name.replace('_', ' ').capitalize()} is required"

        date_value = fields.get("date")
        if date_value and "date" not in errors:
            try:
                datetime.fromisoformat(str(date_value))
            except ValueError:
                errors["date"] = "Date must be in ISO format (YYYY-MM-DD)"

        price = fields.get("price")
        if price is not None:
            try:
                if float(price) < 0:
                    errors["price"] = "Price cannot be negative"
            except (TypeError, ValueError):
                errors["price"] = "Price must be a number"

        venue = fields.get("venue")
        if isinstance(venue, Mapping):
            try:
                if int(venue.get("capacity") or 0) < 0:
                    errors["venue.capacity"] = "Capacity cannot be negative"
            except (TypeError, ValueError):
                errors["venue.capacity"] = "Capacity must be a whole number"
        return errors

    @classmethod
    def from_fields(
        cls,
        record_id: str,
        fields: Mapping[str, Any],
        now: datetime | None = None,
    ) -> EventRecord:
        """Build a new record from creation fields, substituting defaults.

        Raises:
            ValidationError: If a required field is missing or malformed
        """
        errors = cls.validate_fields(fields)
        if errors:
            raise ValidationError("Invalid event fields", field_errors=errors)

        now = now or utcnow()
        price = fields.get("price")
        return cls(
            id=record_id,
            organizer_id=str(fields["organizer_id"]),
            title=sanitize_input(fields["title"], max_len=200),
            category=sanitize_input(fields["category"], max_len=50).lower(),
            date=str(fields["date"]),
            time=sanitize_input(fields.get("time"), max_len=20),
            end_time=sanitize_input(fields.get("end_time"), max_len=20),
            description=sanitize_input(fields.get("description"), max_len=5000),
            venue=Venue.from_value(fields.get("venue")),
            image_url=sanitize_url(fields.get("image_url")),
            status=coerce_enum(EventStatus, fields.get("status") or EventStatus.DRAFT, "status"),
            visibility=coerce_enum(
                Visibility, fields.get("visibility") or Visibility.PUBLIC, "visibility"
            ),
            price=float(price) if price is not None else None,
            currency=fields.get("currency"),
            tags=list(fields.get("tags") or []),
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["status"] = self.status.value
        data["visibility"] = self.visibility.value
        data["created_at"] = _iso(self.created_at)
        data["updated_at"] = _iso(self.updated_at)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventRecord:
        """Create EventRecord from dictionary."""
        data = dict(data)
        data["venue"] = Venue.from_value(data.get("venue"))
        data["status"] = EventStatus(data.get("status", "draft"))
        data["visibility"] = Visibility(data.get("visibility", "public"))
        data["created_at"] = parse_datetime(data["created_at"])
        data["updated_at"] = parse_datetime(data["updated_at"])
        return cls(**data)


@dataclass
class TicketType:
    """A purchasable ticket tier belonging to one event.

    ``sold`` never exceeds ``quantity`` and the sale window, when closed,
    must end after it starts. A ticket type with sales is kept for revenue
    reporting and cannot be deleted.
    """

    id: str
    event_id: str
    name: str
    price: float
    quantity: int
    sale_start: datetime
    created_at: datetime
    currency: str = "USD"
    description: str = ""
    sold: int = 0
    sale_end: datetime | None = None
    is_active: bool = True
    benefits: list[str] = field(default_factory=list)
    restrictions: list[str] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return max(self.quantity - self.sold, 0)

    @property
    def is_sold_out(self) -> bool:
        return self.remaining == 0

    def validate(self) -> dict[str, str]:
        """Check ticket invariants.

        Returns:
            Map of field name to message (empty if valid)
        """
        errors: dict[str, str] = {}
        if not self.name:
            errors["name"] = "Ticket name is required"
        if self.price < 0:
            errors["price"] = "Price cannot be negative"
        if self.quantity < 0:
            errors["quantity"] = "Quantity cannot be negative"
        if self.sold < 0:
            errors["sold"] = "Sold cannot be negative"
        elif self.sold > self.quantity:
            errors["sold"] = "Sold cannot exceed quantity"
        if self.sale_end is not None and self.sale_end <= self.sale_start:
            errors["sale_end"] = "Sale end must be after sale start"
        return errors

    @classmethod
    def from_fields(
        cls,
        record_id: str,
        fields: Mapping[str, Any],
        now: datetime | None = None,
    ) -> TicketType:
        """Build a new ticket type from creation fields.

        Raises:
            ValidationError: If a field is missing or violates an invariant
        """
        now = now or utcnow()
        errors: dict[str, str] = {}
        if not fields.get("event_id"):
            errors["event_id"] = "Event id is required"
        try:
            price = float(fields.get("price", 0))
        except (TypeError, ValueError):
            errors["price"] = "Price must be a number"
            price = 0.0
        try:
            quantity = int(fields.get("quantity", 0))
            sold = int(fields.get("sold", 0))
        except (TypeError, ValueError):
            errors["quantity"] = "Quantity must be a whole number"
            quantity = sold = 0
        try:
            sale_start = parse_datetime(fields.get("sale_start")) or now
            sale_end = parse_datetime(fields.get("sale_end"))
        except ValueError:
            errors["sale_start"] = "Sale window must use ISO-8601 timestamps"
            sale_start, sale_end = now, None

        ticket = cls(
            id=record_id,
            event_id=str(fields.get("event_id") or ""),
            name=sanitize_input(fields.get("name"), max_len=100),
            description=sanitize_input(fields.get("description"), max_len=1000),
            price=price,
            currency=str(fields.get("currency") or "USD"),
            quantity=quantity,
            sold=sold,
            sale_start=sale_start,
            sale_end=sale_end,
            is_active=bool(fields.get("is_active", True)),
            benefits=[sanitize_input(b, max_len=200) for b in fields.get("benefits") or []],
            restrictions=[
                sanitize_input(r, max_len=200) for r in fields.get("restrictions") or []
            ],
            created_at=now,
        )
        errors.update({k: v for k, v in ticket.validate().items() if k not in errors})
        if errors:
            raise ValidationError("Invalid ticket type fields", field_errors=errors)
        return ticket

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["sale_start"] = _iso(self.sale_start)
        data["sale_end"] = _iso(self.sale_end)
        data["created_at"] = _iso(self.created_at)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TicketType:
        data = dict(data)
        for name in ("sale_start", "sale_end", "created_at"):
            data[name] = parse_datetime(data.get(name))
        return cls(**data)


@dataclass
class Attendee:
    """A registration of a user for an event."""

    id: str
    event_id: str
    user_id: str
    registration_date: datetime
    ticket_type_id: str | None = None
    check_in_status: CheckInStatus = CheckInStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    additional_info: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["registration_date"] = _iso(self.registration_date)
        data["check_in_status"] = self.check_in_status.value
        data["payment_status"] = self.payment_status.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Attendee:
        data = dict(data)
        data["registration_date"] = parse_datetime(data["registration_date"])
        data["check_in_status"] = CheckInStatus(data.get("check_in_status", "pending"))
        data["payment_status"] = PaymentStatus(data.get("payment_status", "pending"))
        return cls(**data)


@dataclass
class AnalyticsSnapshot:
    """Traffic and revenue counters for one event.

    Attributes:
        id: Snapshot identity
        event_id: The event this snapshot belongs to (one-to-one)
        views: Page views
        registrations: Completed registrations
        revenue: Cumulative revenue
        top_referrers: Referrer sources, best first
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    event_id: str
    created_at: datetime
    updated_at: datetime
    views: int = 0
    registrations: int = 0
    revenue: float = 0.0
    top_referrers: list[str] = field(default_factory=list)

    @property
    def conversion_rate(self) -> float:
        """Registrations per view (0 when there are no views)."""
        if self.views == 0:
            return 0.0
        return self.registrations / self.views

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["conversion_rate"] = self.conversion_rate
        data["created_at"] = _iso(self.created_at)
        data["updated_at"] = _iso(self.updated_at)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalyticsSnapshot:
        data = dict(data)
        # Derived on read
        data.pop("conversion_rate", None)
        data["created_at"] = parse_datetime(data["created_at"])
        data["updated_at"] = parse_datetime(data["updated_at"])
        return cls(**data)


@dataclass
class MarketingCampaign:
    """A promotional campaign for one event.

    ``sent_at`` is only set while the campaign status is ``sent``.
    """

    id: str
    event_id: str
    name: str
    channel: CampaignChannel
    created_at: datetime
    subject: str = ""
    content: str = ""
    audience: str = ""
    status: CampaignStatus = CampaignStatus.DRAFT
    sent_at: datetime | None = None
    open_rate: float = 0.0
    click_rate: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["channel"] = self.channel.value
        data["status"] = self.status.value
        data["sent_at"] = _iso(self.sent_at)
        data["created_at"] = _iso(self.created_at)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MarketingCampaign:
        data = dict(data)
        data["channel"] = CampaignChannel(data["channel"])
        data["status"] = CampaignStatus(data.get("status", "draft"))
        data["sent_at"] = parse_datetime(data.get("sent_at"))
        data["created_at"] = parse_datetime(data["created_at"])
        return cls(**data)
