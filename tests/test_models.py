"""Tests for EventEase data models."""

from datetime import datetime, timedelta, timezone

import pytest

from eventease.core.exceptions import (
    DomainConflictError,
    NotFoundError,
    UpgradeRequiredError,
    ValidationError,
)
from eventease.models.records import (
    AnalyticsSnapshot,
    CampaignChannel,
    EventRecord,
    EventStatus,
    MarketingCampaign,
    TicketType,
    Venue,
    Visibility,
    parse_datetime,
)
from eventease.models.results import ErrorKind, StoreResult
from eventease.models.updates import CampaignUpdate, EventUpdate, TicketTypeUpdate
from eventease.store.fixtures import EVENTS_KEY, default_fixtures

NOW = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestEventStatus:
    """Tests for EventStatus transitions."""

    def test_forward_transitions(self):
        assert EventStatus.DRAFT.can_transition_to(EventStatus.PUBLISHED)
        assert EventStatus.PUBLISHED.can_transition_to(EventStatus.ONGOING)
        assert EventStatus.ONGOING.can_transition_to(EventStatus.COMPLETED)

    def test_backward_transitions_rejected(self):
        assert not EventStatus.PUBLISHED.can_transition_to(EventStatus.DRAFT)
        assert not EventStatus.COMPLETED.can_transition_to(EventStatus.ONGOING)

    def test_cancel_from_non_terminal(self):
        for status in (EventStatus.DRAFT, EventStatus.PUBLISHED, EventStatus.ONGOING):
            assert status.can_transition_to(EventStatus.CANCELLED)

    def test_terminal_statuses(self):
        assert EventStatus.COMPLETED.is_terminal
        assert EventStatus.CANCELLED.is_terminal
        assert not EventStatus.COMPLETED.can_transition_to(EventStatus.CANCELLED)
        assert not EventStatus.CANCELLED.can_transition_to(EventStatus.PUBLISHED)

    def test_same_status_allowed(self):
        assert EventStatus.CANCELLED.can_transition_to(EventStatus.CANCELLED)


class TestEventRecord:
    """Tests for EventRecord."""

    def test_from_fields_defaults(self):
        event = EventRecord.from_fields(
            "evt_x",
            {"title": "Demo", "organizer_id": "o", "date": "2025-01-01", "category": "Tech"},
            now=NOW,
        )

        assert event.status == EventStatus.DRAFT
        assert event.visibility == Visibility.PUBLIC
        assert event.category == "tech"
        assert event.created_at == event.updated_at == NOW
        assert event.venue == Venue()

    def test_from_fields_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            EventRecord.from_fields("evt_x", {}, now=NOW)
        assert set(exc_info.value.field_errors) == {"title", "organizer_id", "date", "category"}

    def test_negative_price(self):
        errors = EventRecord.validate_fields(
            {"title": "T", "organizer_id": "o", "date": "2025-01-01", "category": "c", "price": -5}
        )
        assert errors == {"price": "Price cannot be negative"}

    def test_fixture_round_trip(self):
        """Test fixture documents load and serialize back unchanged."""
        data = default_fixtures(NOW)[EVENTS_KEY][0]

        event = EventRecord.from_dict(data)

        assert event.venue.capacity == 500
        assert event.status == EventStatus.PUBLISHED
        assert event.to_dict() == data

    def test_from_dict_accepts_zulu_timestamps(self):
        data = default_fixtures(NOW)[EVENTS_KEY][1]
        data["created_at"] = "2024-01-02T00:00:00Z"

        event = EventRecord.from_dict(data)

        assert event.created_at.tzinfo is not None


class TestVenue:
    """Tests for Venue.from_value."""

    def test_from_string(self):
        assert Venue.from_value("Main Hall") == Venue(name="Main Hall")

    def test_from_dict(self):
        venue = Venue.from_value({"name": "Hall", "address": "1 Road", "capacity": "80"})
        assert venue.capacity == 80

    def test_from_empty(self):
        assert Venue.from_value(None) == Venue()


class TestTicketType:
    """Tests for TicketType invariants."""

    def _ticket(self, **overrides) -> TicketType:
        values = {
            "id": "t",
            "event_id": "e",
            "name": "GA",
            "price": 10.0,
            "quantity": 5,
            "sale_start": NOW,
            "created_at": NOW,
        }
        values.update(overrides)
        return TicketType(**values)

    def test_valid(self):
        assert self._ticket().validate() == {}

    def test_remaining(self):
        ticket = self._ticket(sold=5)
        assert ticket.remaining == 0
        assert ticket.is_sold_out

    def test_invalid_values(self):
        errors = self._ticket(name="", price=-1, quantity=-1).validate()
        assert set(errors) == {"name", "price", "quantity", "sold"}

    def test_sale_end_must_follow_start(self):
        errors = self._ticket(sale_end=NOW).validate()
        assert errors == {"sale_end": "Sale end must be after sale start"}

    def test_from_fields_bad_timestamp(self):
        with pytest.raises(ValidationError) as exc_info:
            TicketType.from_fields("t", {"event_id": "e", "name": "GA", "sale_start": "soon"})
        assert "sale_start" in exc_info.value.field_errors


class TestAnalyticsSnapshot:
    """Tests for AnalyticsSnapshot."""

    def test_conversion_rate(self):
        snapshot = AnalyticsSnapshot(
            id="a", event_id="e", created_at=NOW, updated_at=NOW, views=200, registrations=50
        )
        assert snapshot.conversion_rate == 0.25

    def test_conversion_rate_without_views(self):
        snapshot = AnalyticsSnapshot(
            id="a", event_id="e", created_at=NOW, updated_at=NOW, registrations=3
        )
        assert snapshot.conversion_rate == 0.0

    def test_derived_field_ignored_on_load(self):
        snapshot = AnalyticsSnapshot(
            id="a", event_id="e", created_at=NOW, updated_at=NOW, views=10, registrations=1
        )
        data = snapshot.to_dict()
        data["conversion_rate"] = 99

        assert AnalyticsSnapshot.from_dict(data).conversion_rate == 0.1


class TestMarketingCampaign:
    """Tests for MarketingCampaign."""

    def test_round_trip(self):
        campaign = MarketingCampaign(
            id="c",
            event_id="e",
            name="Launch",
            channel=CampaignChannel.EMAIL,
            created_at=NOW,
            sent_at=NOW + timedelta(days=1),
        )
        loaded = MarketingCampaign.from_dict({**campaign.to_dict(), "channel": "push"})
        assert loaded.channel.value == "push"
        assert loaded.sent_at == NOW + timedelta(days=1)


class TestUpdates:
    """Tests for typed partial updates."""

    def test_changes_only_assigned(self):
        update = EventUpdate(title="New", visibility=Visibility.PRIVATE)
        assert update.changes() == {"title": "New", "visibility": Visibility.PRIVATE}

    def test_empty(self):
        assert EventUpdate().is_empty()
        assert not TicketTypeUpdate(price=0).is_empty()

    def test_event_update_validation(self):
        errors = EventUpdate(date="tomorrow", venue=Venue(capacity=-1)).validate()
        assert set(errors) == {"date", "venue.capacity"}

    def test_event_update_rejects_raw_status(self):
        errors = EventUpdate(status="published").validate()
        assert "status" in errors

    def test_ticket_update_validation(self):
        errors = TicketTypeUpdate(quantity=-1, sold=-2).validate()
        assert set(errors) == {"quantity", "sold"}

    def test_campaign_update_validation(self):
        assert CampaignUpdate(click_rate=101).validate() == {
            "click_rate": "Rate must be between 0 and 100"
        }


class TestStoreResult:
    """Tests for StoreResult."""

    def test_ok(self):
        result = StoreResult.ok({"a": 1})
        assert result.success
        assert result.unwrap() == {"a": 1}

    @pytest.mark.parametrize(
        "exc, kind",
        [
            (NotFoundError("Event", "evt_1"), ErrorKind.NOT_FOUND),
            (ValidationError(field_errors={"title": "Required"}), ErrorKind.VALIDATION),
            (DomainConflictError("Sold"), ErrorKind.CONFLICT),
            (UpgradeRequiredError(), ErrorKind.UPGRADE_REQUIRED),
        ],
    )
    def test_from_error(self, exc, kind):
        result = StoreResult.from_error(exc)
        assert not result.success
        assert result.error_kind == kind
        assert result.error == exc.message

    def test_validation_field_errors_kept(self):
        result = StoreResult.from_error(ValidationError(field_errors={"title": "Required"}))
        assert result.field_errors == {"title": "Required"}

    def test_unwrap_raises_matching_error(self):
        result = StoreResult.fail("Upgrade required", ErrorKind.UPGRADE_REQUIRED)

        assert result.is_upgrade_required
        with pytest.raises(UpgradeRequiredError):
            result.unwrap()

    def test_to_dict_serializes_payload(self):
        snapshot = AnalyticsSnapshot(id="a", event_id="e", created_at=NOW, updated_at=NOW)
        data = StoreResult.ok([snapshot]).to_dict()

        assert data["success"] is True
        assert data["payload"][0]["id"] == "a"
        assert data["error_kind"] is None


class TestParseDatetime:
    """Tests for parse_datetime."""

    def test_naive_becomes_utc(self):
        assert parse_datetime("2025-01-01T00:00:00").tzinfo == timezone.utc

    def test_empty(self):
        assert parse_datetime("") is None
        assert parse_datetime(None) is None
