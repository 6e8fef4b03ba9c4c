"""Local record store backed by durable key-value storage."""

from __future__ import annotations

import asyncio
import logging
import random
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import replace
from typing import Any, AsyncIterator, Awaitable, Callable, Mapping, TypeVar

from eventease.core.config import Config
from eventease.core.exceptions import (
    DomainConflictError,
    EventEaseError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
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
    Visibility,
    coerce_enum,
    parse_datetime,
    utcnow,
)
from eventease.models.results import StoreResult
from eventease.models.updates import CampaignUpdate, EventUpdate, TicketTypeUpdate
from eventease.storage.backends import KeyValueStorage, MemoryKeyValueStorage
from eventease.store.fixtures import (
    ANALYTICS_KEY,
    ATTENDEES_KEY,
    CAMPAIGNS_KEY,
    COLLECTION_KEYS,
    EVENTS_KEY,
    TICKET_TYPES_KEY,
    default_fixtures,
)
from eventease.store.ids import IdGenerator, TokenIdGenerator
from eventease.store.interfaces import EventFilters, RecordService
from eventease.utils.sanitization import sanitize_input, sanitize_url

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Collections removed together with their parent event
DEPENDENT_KEYS = (TICKET_TYPES_KEY, ATTENDEES_KEY, ANALYTICS_KEY, CAMPAIGNS_KEY)

MODELS: dict[str, Any] = {
    EVENTS_KEY: EventRecord,
    TICKET_TYPES_KEY: TicketType,
    ATTENDEES_KEY: Attendee,
    ANALYTICS_KEY: AnalyticsSnapshot,
    CAMPAIGNS_KEY: MarketingCampaign,
}

DEFAULT_REFERRERS = ["Direct", "Social Media", "Email Campaign"]


class LocalRecordStore(RecordService):
    """Async CRUD facade over durable key-value storage.

    Each collection (events, ticket types, attendees, analytics, campaigns)
    is one JSON array under one storage key. Every operation waits for a
    simulated network latency before it resolves, and every mutation runs
    its read-modify-write cycle while holding the lock of each collection it
    touches, so overlapping calls never lose a write.

    Unreadable or missing collections are reseeded from the fixtures; they
    never surface as errors. All operations return a ``StoreResult``.

    Example:
        >>> store = LocalRecordStore(config=Config(latency_min=0, latency_max=0))
        >>> result = await store.create_event({
        ...     "title": "Demo", "organizer_id": "org_1",
        ...     "date": "2025-01-01", "category": "technology",
        ... })
        >>> result.payload.status
        <EventStatus.DRAFT: 'draft'>
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        config: Config | None = None,
        id_generator: IdGenerator | None = None,
        fixtures: Mapping[str, list[dict[str, Any]]] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the store and seed any missing collection.

        Args:
            storage: Durable storage backend. Defaults to in-memory storage.
            config: Configuration. Defaults to values from the environment.
            id_generator: Identity generator. Defaults to TokenIdGenerator.
            fixtures: Seed documents per collection key. Defaults to the
                built-in fixtures, or empty collections when seeding is
                disabled in the config.
            rng: Random source for latency and simulated metrics.
        """
        self.config = config or Config.from_env()
        self._storage = storage or MemoryKeyValueStorage()
        self._ids = id_generator or TokenIdGenerator()
        self._rng = rng or random.Random()
        if fixtures is None:
            fixtures = default_fixtures() if self.config.seed_fixtures else {}
        self._fixtures = {key: list(fixtures.get(key, [])) for key in COLLECTION_KEYS}
        self._locks = {key: asyncio.Lock() for key in COLLECTION_KEYS}
        self._bootstrap()

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _bootstrap(self) -> None:
        for key in COLLECTION_KEYS:
            try:
                present = self._storage.contains(key)
            except StorageUnavailableError as e:
                logger.warning(f"Could not inspect collection {key}: {e}")
                continue
            if not present:
                self._storage.set(key, self._fixtures[key])
                logger.debug(f"Seeded collection {key} with {len(self._fixtures[key])} records")

    def _load(self, key: str) -> list[Any]:
        """Read a collection, reseeding it when missing or unreadable."""
        model = MODELS[key]
        try:
            data = self._storage.get(key)
            if data is None:
                raise StorageUnavailableError(f"Collection '{key}' is missing", key=key)
            if not isinstance(data, list):
                raise StorageUnavailableError(f"Collection '{key}' is not a list", key=key)
            return [model.from_dict(item) for item in data]
        except (StorageUnavailableError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Reseeding collection {key}: {e}")
            seed = self._fixtures[key]
            self._storage.set(key, seed)
            return [model.from_dict(item) for item in seed]

    def _save(self, key: str, records: list[Any]) -> None:
        self._storage.set(key, [record.to_dict() for record in records])

    async def _simulate_latency(self) -> None:
        delay = self._rng.uniform(self.config.latency_min, self.config.latency_max)
        await asyncio.sleep(max(delay, 0.0))

    @asynccontextmanager
    async def _mutating(self, *keys: str) -> AsyncIterator[None]:
        """Hold the locks of ``keys`` (in a fixed order) for one write cycle."""
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self._locks[key])
            await self._simulate_latency()
            yield

    async def _run(self, operation: str, func: Callable[[], Awaitable[T]]) -> StoreResult[T]:
        """Execute ``func`` and convert its outcome to a StoreResult."""
        try:
            return StoreResult.ok(await func())
        except EventEaseError as e:
            logger.info(f"Could not {operation}: {e}")
            return StoreResult.from_error(e)
        except Exception:
            logger.exception(f"Unexpected error while trying to {operation}")
            return StoreResult.fail(f"Failed to {operation}")

    def _require_event(self, event_id: str) -> EventRecord:
        for event in self._load(EVENTS_KEY):
            if event.id == event_id:
                return event
        raise NotFoundError("Event", event_id)

    @staticmethod
    def _index_of(records: list[Any], record_id: str) -> int | None:
        for idx, record in enumerate(records):
            if record.id == record_id:
                return idx
        return None

    def _simulated_rates(self) -> tuple[float, float]:
        return (
            round(self._rng.uniform(10, 40), 1),
            round(self._rng.uniform(2, 12), 1),
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def create_event(self, fields: Mapping[str, Any]) -> StoreResult[EventRecord]:
        """Create an event and a zeroed analytics snapshot for it."""

        async def op() -> EventRecord:
            async with self._mutating(EVENTS_KEY, ANALYTICS_KEY):
                now = utcnow()
                event = EventRecord.from_fields(self._ids.new_id("evt"), fields, now)
                events = self._load(EVENTS_KEY)
                if self._index_of(events, event.id) is not None:
                    raise DomainConflictError("Event id already exists", record_id=event.id)
                events.append(event)

                analytics = self._load(ANALYTICS_KEY)
                analytics.append(
                    AnalyticsSnapshot(
                        id=self._ids.new_id("analytics"),
                        event_id=event.id,
                        created_at=now,
                        updated_at=now,
                    )
                )
                self._save(EVENTS_KEY, events)
                self._save(ANALYTICS_KEY, analytics)
            logger.info(f"Created event {event.id} ({event.status.value}): {event.title}")
            return event

        return await self._run("create event", op)

    async def list_events(
        self, filters: EventFilters | None = None
    ) -> StoreResult[list[EventRecord]]:
        filters = filters or EventFilters()

        async def op() -> list[EventRecord]:
            errors = filters.validate()
            if errors:
                raise ValidationError("Invalid event filters", field_errors=errors)
            await self._simulate_latency()
            matching = [e for e in self._load(EVENTS_KEY) if filters.matches(e)]
            return filters.paginate(matching)

        return await self._run("fetch events", op)

    async def get_event(self, event_id: str) -> StoreResult[EventRecord]:
        async def op() -> EventRecord:
            await self._simulate_latency()
            return self._require_event(event_id)

        return await self._run("fetch event", op)

    async def update_event(
        self, event_id: str, patch: EventUpdate
    ) -> StoreResult[EventRecord]:
        """Merge the assigned fields of ``patch`` and refresh ``updated_at``.

        Status changes must follow the event lifecycle; an illegal transition
        is reported as a conflict and leaves the record untouched.
        """

        async def op() -> EventRecord:
            errors = patch.validate()
            if errors:
                raise ValidationError("Invalid event update", field_errors=errors)
            changes = patch.changes()
            if "title" in changes:
                changes["title"] = sanitize_input(changes["title"], max_len=200)
            if "description" in changes:
                changes["description"] = sanitize_input(changes["description"], max_len=5000)
            if "category" in changes:
                changes["category"] = sanitize_input(changes["category"], max_len=50).lower()
            if "image_url" in changes:
                changes["image_url"] = sanitize_url(changes["image_url"])

            async with self._mutating(EVENTS_KEY):
                events = self._load(EVENTS_KEY)
                idx = self._index_of(events, event_id)
                if idx is None:
                    raise NotFoundError("Event", event_id)
                current = events[idx]
                target = changes.get("status")
                if target is not None and not current.status.can_transition_to(target):
                    raise DomainConflictError(
                        f"Cannot change event status from {current.status.value} "
                        f"to {target.value}",
                        record_id=event_id,
                    )
                updated = replace(current, **changes, updated_at=utcnow())
                events[idx] = updated
                self._save(EVENTS_KEY, events)
            logger.info(f"Updated event {event_id}: {sorted(changes)}")
            return updated

        return await self._run("update event", op)

    async def publish_event(self, event_id: str) -> StoreResult[EventRecord]:
        return await self.update_event(event_id, EventUpdate(status=EventStatus.PUBLISHED))

    async def cancel_event(self, event_id: str) -> StoreResult[EventRecord]:
        return await self.update_event(event_id, EventUpdate(status=EventStatus.CANCELLED))

    async def set_event_visibility(
        self, event_id: str, visibility: Visibility | str
    ) -> StoreResult[EventRecord]:
        try:
            value = coerce_enum(Visibility, visibility, "visibility")
        except ValidationError as e:
            return StoreResult.from_error(e)
        return await self.update_event(event_id, EventUpdate(visibility=value))

    async def delete_event(self, event_id: str) -> StoreResult[None]:
        """Delete an event and cascade to its dependent records.

        Deleting an unknown id succeeds. Dependent cleanup is best-effort:
        a failing collection is logged and skipped without affecting the
        reported outcome.
        """

        async def op() -> None:
            async with self._mutating(EVENTS_KEY, *DEPENDENT_KEYS):
                events = self._load(EVENTS_KEY)
                remaining = [e for e in events if e.id != event_id]
                if len(remaining) == len(events):
                    logger.debug(f"Event {event_id} already absent")
                self._save(EVENTS_KEY, remaining)

                for key in DEPENDENT_KEYS:
                    try:
                        records = self._load(key)
                        kept = [r for r in records if r.event_id != event_id]
                        self._save(key, kept)
                        if len(kept) != len(records):
                            logger.debug(
                                f"Removed {len(records) - len(kept)} rows from {key} "
                                f"for event {event_id}"
                            )
                    except Exception:
                        logger.exception(f"Cleanup of {key} for event {event_id} failed")
            logger.info(f"Deleted event {event_id}")

        return await self._run("delete event", op)

    # ------------------------------------------------------------------
    # Ticket types
    # ------------------------------------------------------------------

    async def create_ticket_type(self, fields: Mapping[str, Any]) -> StoreResult[TicketType]:
        async def op() -> TicketType:
            async with self._mutating(TICKET_TYPES_KEY):
                ticket = TicketType.from_fields(self._ids.new_id("ticket"), fields)
                self._require_event(ticket.event_id)
                tickets = self._load(TICKET_TYPES_KEY)
                tickets.append(ticket)
                self._save(TICKET_TYPES_KEY, tickets)
            logger.info(f"Created ticket type {ticket.id} for event {ticket.event_id}")
            return ticket

        return await self._run("create ticket type", op)

    async def list_ticket_types(self, event_id: str) -> StoreResult[list[TicketType]]:
        async def op() -> list[TicketType]:
            await self._simulate_latency()
            return [t for t in self._load(TICKET_TYPES_KEY) if t.event_id == event_id]

        return await self._run("fetch ticket types", op)

    async def update_ticket_type(
        self, ticket_id: str, patch: TicketTypeUpdate
    ) -> StoreResult[TicketType]:
        async def op() -> TicketType:
            errors = patch.validate()
            if errors:
                raise ValidationError("Invalid ticket type update", field_errors=errors)
            changes = patch.changes()
            for name in ("sale_start", "sale_end"):
                if name in changes:
                    try:
                        changes[name] = parse_datetime(changes[name])
                    except (TypeError, ValueError):
                        raise ValidationError(
                            "Invalid ticket type update",
                            field_errors={name: "Sale window must use ISO-8601 timestamps"},
                        )
            async with self._mutating(TICKET_TYPES_KEY):
                tickets = self._load(TICKET_TYPES_KEY)
                idx = self._index_of(tickets, ticket_id)
                if idx is None:
                    raise NotFoundError("Ticket type", ticket_id)
                updated = replace(tickets[idx], **changes)
                errors = updated.validate()
                if errors:
                    raise ValidationError("Invalid ticket type update", field_errors=errors)
                tickets[idx] = updated
                self._save(TICKET_TYPES_KEY, tickets)
            logger.info(f"Updated ticket type {ticket_id}")
            return updated

        return await self._run("update ticket type", op)

    async def delete_ticket_type(self, ticket_id: str) -> StoreResult[None]:
        """Delete a ticket type; refused while it has sales."""

        async def op() -> None:
            async with self._mutating(TICKET_TYPES_KEY):
                tickets = self._load(TICKET_TYPES_KEY)
                idx = self._index_of(tickets, ticket_id)
                if idx is None:
                    logger.debug(f"Ticket type {ticket_id} already absent")
                    return
                if tickets[idx].sold > 0:
                    raise DomainConflictError(
                        "Cannot delete ticket type with existing sales",
                        record_id=ticket_id,
                        details={"sold": tickets[idx].sold},
                    )
                del tickets[idx]
                self._save(TICKET_TYPES_KEY, tickets)
            logger.info(f"Deleted ticket type {ticket_id}")

        return await self._run("delete ticket type", op)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    async def get_analytics(self, event_id: str) -> StoreResult[AnalyticsSnapshot]:
        """Return the event's snapshot, filling in plausible metrics if it has none."""

        async def op() -> AnalyticsSnapshot:
            async with self._mutating(ANALYTICS_KEY):
                self._require_event(event_id)
                analytics = self._load(ANALYTICS_KEY)
                for snapshot in analytics:
                    if snapshot.event_id == event_id:
                        return snapshot
                now = utcnow()
                snapshot = AnalyticsSnapshot(
                    id=self._ids.new_id("analytics"),
                    event_id=event_id,
                    views=self._rng.randint(100, 1099),
                    registrations=self._rng.randint(10, 59),
                    revenue=float(self._rng.randint(1000, 10999)),
                    top_referrers=list(DEFAULT_REFERRERS),
                    created_at=now,
                    updated_at=now,
                )
                analytics.append(snapshot)
                self._save(ANALYTICS_KEY, analytics)
            logger.info(f"Generated analytics snapshot for event {event_id}")
            return snapshot

        return await self._run("fetch analytics", op)

    async def record_view(
        self, event_id: str, referrer: str | None = None
    ) -> StoreResult[AnalyticsSnapshot]:
        """Count one page view, optionally attributed to ``referrer``."""

        async def op() -> AnalyticsSnapshot:
            async with self._mutating(ANALYTICS_KEY):
                self._require_event(event_id)
                analytics = self._load(ANALYTICS_KEY)
                snapshot = self._snapshot_for(analytics, event_id)
                snapshot.views += 1
                if referrer and referrer not in snapshot.top_referrers:
                    snapshot.top_referrers.append(referrer)
                snapshot.updated_at = utcnow()
                self._save(ANALYTICS_KEY, analytics)
            return snapshot

        return await self._run("record view", op)

    def _snapshot_for(self, analytics: list[AnalyticsSnapshot], event_id: str) -> AnalyticsSnapshot:
        """Find the event's snapshot in ``analytics``, appending a zeroed one if absent."""
        for snapshot in analytics:
            if snapshot.event_id == event_id:
                return snapshot
        now = utcnow()
        snapshot = AnalyticsSnapshot(
            id=self._ids.new_id("analytics"),
            event_id=event_id,
            created_at=now,
            updated_at=now,
        )
        analytics.append(snapshot)
        return snapshot

    # ------------------------------------------------------------------
    # Attendees
    # ------------------------------------------------------------------

    async def register_attendee(
        self,
        event_id: str,
        user_id: str,
        ticket_type_id: str | None = None,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        additional_info: dict[str, Any] | None = None,
    ) -> StoreResult[Attendee]:
        """Register a user for an event, consuming one ticket if given.

        Revenue is only counted once the payment collaborator reports the
        payment as completed.
        """

        async def op() -> Attendee:
            if not user_id:
                raise ValidationError(
                    "Invalid registration", field_errors={"user_id": "User id is required"}
                )
            payment = coerce_enum(PaymentStatus, payment_status, "payment_status")
            async with self._mutating(ATTENDEES_KEY, TICKET_TYPES_KEY, ANALYTICS_KEY):
                self._require_event(event_id)
                attendees = self._load(ATTENDEES_KEY)
                if any(a.event_id == event_id and a.user_id == user_id for a in attendees):
                    raise DomainConflictError(
                        "User is already registered for this event", record_id=event_id
                    )

                tickets = self._load(TICKET_TYPES_KEY)
                price = 0.0
                if ticket_type_id is not None:
                    idx = self._index_of(tickets, ticket_type_id)
                    if idx is None or tickets[idx].event_id != event_id:
                        raise ValidationError(
                            "Invalid registration",
                            field_errors={
                                "ticket_type_id": "Ticket type does not belong to this event"
                            },
                        )
                    ticket = tickets[idx]
                    if not ticket.is_active:
                        raise DomainConflictError("Ticket type is not on sale", ticket.id)
                    if ticket.is_sold_out:
                        raise DomainConflictError("Ticket type is sold out", ticket.id)
                    ticket.sold += 1
                    price = ticket.price

                now = utcnow()
                attendee = Attendee(
                    id=self._ids.new_id("attendee"),
                    event_id=event_id,
                    user_id=user_id,
                    ticket_type_id=ticket_type_id,
                    registration_date=now,
                    payment_status=payment,
                    additional_info=dict(additional_info or {}),
                )
                attendees.append(attendee)

                analytics = self._load(ANALYTICS_KEY)
                snapshot = self._snapshot_for(analytics, event_id)
                snapshot.registrations += 1
                if attendee.payment_status == PaymentStatus.COMPLETED:
                    snapshot.revenue += price
                snapshot.updated_at = now

                self._save(ATTENDEES_KEY, attendees)
                self._save(TICKET_TYPES_KEY, tickets)
                self._save(ANALYTICS_KEY, analytics)
            logger.info(f"Registered attendee {attendee.id} for event {event_id}")
            return attendee

        return await self._run("register attendee", op)

    async def list_attendees(self, event_id: str) -> StoreResult[list[Attendee]]:
        async def op() -> list[Attendee]:
            await self._simulate_latency()
            return [a for a in self._load(ATTENDEES_KEY) if a.event_id == event_id]

        return await self._run("fetch attendees", op)

    async def set_attendee_check_in(
        self, attendee_id: str, status: CheckInStatus | str
    ) -> StoreResult[Attendee]:
        async def op() -> Attendee:
            value = coerce_enum(CheckInStatus, status, "check_in_status")
            async with self._mutating(ATTENDEES_KEY):
                attendees = self._load(ATTENDEES_KEY)
                idx = self._index_of(attendees, attendee_id)
                if idx is None:
                    raise NotFoundError("Attendee", attendee_id)
                attendees[idx].check_in_status = value
                self._save(ATTENDEES_KEY, attendees)
            logger.info(f"Attendee {attendee_id} check-in status: {value.value}")
            return attendees[idx]

        return await self._run("update attendee status", op)

    # ------------------------------------------------------------------
    # Marketing campaigns
    # ------------------------------------------------------------------

    async def create_campaign(
        self, event_id: str, fields: Mapping[str, Any]
    ) -> StoreResult[MarketingCampaign]:
        async def op() -> MarketingCampaign:
            name = sanitize_input(fields.get("name"), max_len=200)
            if not name:
                raise ValidationError(
                    "Invalid campaign fields", field_errors={"name": "Campaign name is required"}
                )
            channel = coerce_enum(CampaignChannel, fields.get("channel", "email"), "channel")
            status = coerce_enum(CampaignStatus, fields.get("status", "draft"), "status")

            async with self._mutating(CAMPAIGNS_KEY):
                self._require_event(event_id)
                now = utcnow()
                campaign = MarketingCampaign(
                    id=self._ids.new_id("campaign"),
                    event_id=event_id,
                    name=name,
                    channel=channel,
                    subject=sanitize_input(fields.get("subject"), max_len=300),
                    content=sanitize_input(fields.get("content"), max_len=10000),
                    audience=sanitize_input(fields.get("audience"), max_len=100),
                    status=status,
                    created_at=now,
                )
                if status == CampaignStatus.SENT:
                    campaign.sent_at = now
                    campaign.open_rate, campaign.click_rate = self._simulated_rates()
                campaigns = self._load(CAMPAIGNS_KEY)
                campaigns.append(campaign)
                self._save(CAMPAIGNS_KEY, campaigns)
            logger.info(f"Created {channel.value} campaign {campaign.id} for event {event_id}")
            return campaign

        return await self._run("create campaign", op)

    async def list_campaigns(self, event_id: str) -> StoreResult[list[MarketingCampaign]]:
        async def op() -> list[MarketingCampaign]:
            await self._simulate_latency()
            campaigns = [c for c in self._load(CAMPAIGNS_KEY) if c.event_id == event_id]
            return sorted(campaigns, key=lambda c: c.created_at, reverse=True)

        return await self._run("fetch campaigns", op)

    async def update_campaign(
        self, campaign_id: str, patch: CampaignUpdate
    ) -> StoreResult[MarketingCampaign]:
        """Merge ``patch``; moving to ``sent`` stamps ``sent_at``, leaving it clears it."""

        async def op() -> MarketingCampaign:
            errors = patch.validate()
            if errors:
                raise ValidationError("Invalid campaign update", field_errors=errors)
            changes = patch.changes()
            async with self._mutating(CAMPAIGNS_KEY):
                campaigns = self._load(CAMPAIGNS_KEY)
                idx = self._index_of(campaigns, campaign_id)
                if idx is None:
                    raise NotFoundError("Campaign", campaign_id)
                current = campaigns[idx]
                updated = replace(current, **changes)
                if updated.status == CampaignStatus.SENT:
                    if current.status != CampaignStatus.SENT:
                        updated.sent_at = utcnow()
                        if "open_rate" not in changes and "click_rate" not in changes:
                            updated.open_rate, updated.click_rate = self._simulated_rates()
                else:
                    updated.sent_at = None
                campaigns[idx] = updated
                self._save(CAMPAIGNS_KEY, campaigns)
            logger.info(f"Updated campaign {campaign_id}: {sorted(changes)}")
            return updated

        return await self._run("update campaign", op)

    async def delete_campaign(self, campaign_id: str) -> StoreResult[None]:
        async def op() -> None:
            async with self._mutating(CAMPAIGNS_KEY):
                campaigns = self._load(CAMPAIGNS_KEY)
                kept = [c for c in campaigns if c.id != campaign_id]
                self._save(CAMPAIGNS_KEY, kept)
            logger.info(f"Deleted campaign {campaign_id}")

        return await self._run("delete campaign", op)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    async def reset(self) -> StoreResult[None]:
        """Replace every collection with its fixture data."""

        async def op() -> None:
            async with self._mutating(*COLLECTION_KEYS):
                for key in COLLECTION_KEYS:
                    self._storage.set(key, self._fixtures[key])
            logger.info("Store reset to fixture data")

        return await self._run("reset store", op)
