"""Tests for the event authoring wizard."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from eventease.core.exceptions import UpgradeRequiredError, ValidationError
from eventease.models.records import EventStatus
from eventease.models.results import ErrorKind, StoreResult
from eventease.store.interfaces import RecordService
from eventease.wizard import (
    PHASE_FLOW,
    EventAuthoringWizard,
    OutcomeStatus,
    WizardPhase,
    get_next_phase,
    get_previous_phase,
)


def fill_draft(wizard: EventAuthoringWizard, **design) -> None:
    """Fill the phases with enough data for the store to accept the event."""
    wizard.set_summary(event_name="AI Workshop", start_date="2025-01-25")
    wizard.update(WizardPhase.REQUIREMENTS, title="AI Workshop", category="technology")
    wizard.update(WizardPhase.DESIGN, date="2025-01-25", venue_name="The Station", **design)


def advance_to_end(wizard: EventAuthoringWizard) -> None:
    for _ in range(len(PHASE_FLOW)):
        wizard.next()


def mock_service(**results) -> Mock:
    """Record service mock whose create calls return the given results."""
    service = Mock(spec=RecordService)
    service.create_event = AsyncMock(**results)
    service.create_ticket_type = AsyncMock(return_value=StoreResult.ok())
    return service


class TestPhases:
    """Tests for phase ordering helpers."""

    def test_flow_order(self):
        assert [p.value for p in PHASE_FLOW] == [
            "requirements", "design", "implementation", "verification", "maintenance",
        ]

    def test_next_and_previous(self):
        assert get_next_phase(WizardPhase.DESIGN) == WizardPhase.IMPLEMENTATION
        assert get_previous_phase(WizardPhase.DESIGN) == WizardPhase.REQUIREMENTS

    def test_ends(self):
        assert get_next_phase(WizardPhase.MAINTENANCE) is None
        assert get_previous_phase(WizardPhase.REQUIREMENTS) is None
        assert WizardPhase.MAINTENANCE.is_last
        assert WizardPhase.REQUIREMENTS.step_number == 1


class TestNavigation:
    """Tests for wizard linearity."""

    def test_starts_at_requirements(self, store):
        assert EventAuthoringWizard(store, "org").phase == WizardPhase.REQUIREMENTS

    def test_back_at_start_is_noop(self, store):
        wizard = EventAuthoringWizard(store, "org")
        assert wizard.back() == WizardPhase.REQUIREMENTS

    def test_next_reaches_maintenance_and_stops(self, store):
        wizard = EventAuthoringWizard(store, "org")

        visited = [wizard.next() for _ in range(5)]

        assert visited[3] == WizardPhase.MAINTENANCE
        assert visited[4] == WizardPhase.MAINTENANCE
        assert wizard.next() == WizardPhase.MAINTENANCE

    def test_back_moves_one_step(self, store):
        wizard = EventAuthoringWizard(store, "org")
        wizard.next()
        wizard.next()

        assert wizard.back() == WizardPhase.DESIGN


class TestDataEntry:
    """Tests for per-phase updates and validation."""

    def test_update_writes_only_named_section(self, store):
        wizard = EventAuthoringWizard(store, "org")
        wizard.update(WizardPhase.DESIGN, date="2025-01-25")

        assert wizard.draft.design.date == "2025-01-25"
        assert wizard.draft.requirements.title == ""

    def test_unknown_field_rejected(self, store):
        wizard = EventAuthoringWizard(store, "org")

        with pytest.raises(ValidationError) as exc_info:
            wizard.update(WizardPhase.REQUIREMENTS, date="2025-01-25")
        assert "date" in exc_info.value.field_errors

    def test_phase_validation_is_isolated(self, store):
        """Test a phase validates without looking at its siblings."""
        wizard = EventAuthoringWizard(store, "org")
        wizard.update(WizardPhase.REQUIREMENTS, title="Meetup", category="social")

        assert wizard.validate_phase(WizardPhase.REQUIREMENTS) == {}
        assert "date" in wizard.validate_phase(WizardPhase.DESIGN)

    def test_design_time_order(self, store):
        wizard = EventAuthoringWizard(store, "org")
        wizard.update(WizardPhase.DESIGN, date="2025-01-25", time="18:00", end_time="17:00")

        assert wizard.validate_phase(WizardPhase.DESIGN) == {
            "end_time": "End time must be after start time"
        }

    def test_implementation_ticket_validation(self, store):
        wizard = EventAuthoringWizard(store, "org")
        wizard.update(
            WizardPhase.IMPLEMENTATION,
            ticket_types=[{"name": "", "price": -1, "quantity": 10}],
        )

        errors = wizard.validate_phase(WizardPhase.IMPLEMENTATION)
        assert set(errors) == {"ticket_types[0].name", "ticket_types[0].price"}

    def test_form_style_values(self, store):
        """Test string and empty values from a form validate without raising."""
        wizard = EventAuthoringWizard(store, "org")
        wizard.update(WizardPhase.REQUIREMENTS, title=None, category="social")
        wizard.update(WizardPhase.DESIGN, date=20250125, time=None)
        wizard.update(WizardPhase.IMPLEMENTATION, capacity="10")
        wizard.update(WizardPhase.MAINTENANCE, price="12.5")

        assert wizard.validate_phase(WizardPhase.REQUIREMENTS) == {"title": "Title is required"}
        assert set(wizard.validate_phase(WizardPhase.DESIGN)) == {"date"}
        assert wizard.validate_phase(WizardPhase.IMPLEMENTATION) == {}
        assert wizard.validate_phase(WizardPhase.MAINTENANCE) == {}

    def test_non_numeric_values(self, store):
        wizard = EventAuthoringWizard(store, "org")
        wizard.update(WizardPhase.IMPLEMENTATION, capacity="many", ticket_types=["VIP"])
        wizard.update(WizardPhase.MAINTENANCE, price="free")

        assert wizard.validate_phase(WizardPhase.IMPLEMENTATION) == {
            "capacity": "Capacity must be a whole number",
            "ticket_types[0]": "Ticket type must be a mapping of fields",
        }
        assert wizard.validate_phase(WizardPhase.MAINTENANCE) == {
            "price": "Price must be a number"
        }

    def test_maintenance_visibility(self, store):
        wizard = EventAuthoringWizard(store, "org")
        wizard.update(WizardPhase.MAINTENANCE, visibility="secret")

        assert "visibility" in wizard.validate_phase(WizardPhase.MAINTENANCE)


class TestExitActions:
    """Tests for save_draft and publish."""

    @pytest.mark.asyncio
    async def test_save_draft(self, empty_store):
        saved = Mock()
        closed = Mock()
        wizard = EventAuthoringWizard(empty_store, "org", on_saved=saved, on_close=closed)
        fill_draft(wizard)
        advance_to_end(wizard)

        outcome = await wizard.save_draft()

        assert outcome.status == OutcomeStatus.SAVED
        assert outcome.event.status == EventStatus.DRAFT
        assert outcome.event.venue.name == "The Station"
        saved.assert_called_once_with(outcome.event)
        closed.assert_called_once()
        assert wizard.closed
        stored = await empty_store.get_event(outcome.event.id)
        assert stored.payload.title == "AI Workshop"

    @pytest.mark.asyncio
    async def test_publish_creates_ticket_types(self, empty_store):
        wizard = EventAuthoringWizard(empty_store, "org")
        fill_draft(wizard)
        wizard.update(
            WizardPhase.IMPLEMENTATION,
            capacity=120,
            ticket_types=[
                {"name": "Early Bird", "price": 10, "quantity": 50},
                {"name": "Regular", "price": 20, "quantity": 70},
            ],
        )
        advance_to_end(wizard)

        outcome = await wizard.publish()

        assert outcome.status == OutcomeStatus.PUBLISHED
        assert outcome.event.status == EventStatus.PUBLISHED
        assert outcome.event.venue.capacity == 120
        tickets = (await empty_store.list_ticket_types(outcome.event.id)).payload
        assert sorted(t.name for t in tickets) == ["Early Bird", "Regular"]

    @pytest.mark.asyncio
    async def test_publish_without_ticket_types(self, empty_store):
        wizard = EventAuthoringWizard(empty_store, "org")
        fill_draft(wizard)
        advance_to_end(wizard)

        outcome = await wizard.publish()

        assert outcome.success

    @pytest.mark.asyncio
    async def test_failed_ticket_type_is_a_warning(self, empty_store):
        wizard = EventAuthoringWizard(empty_store, "org")
        fill_draft(wizard)
        wizard.update(
            WizardPhase.IMPLEMENTATION,
            ticket_types=[{"name": "Oversold", "price": 10, "quantity": 1, "sold": 5}],
        )
        advance_to_end(wizard)

        outcome = await wizard.save_draft()

        assert outcome.success
        assert len(outcome.warnings) == 1
        assert "Oversold" in outcome.warnings[0]

    @pytest.mark.asyncio
    async def test_malformed_ticket_type_is_a_warning(self, empty_store):
        wizard = EventAuthoringWizard(empty_store, "org")
        fill_draft(wizard)
        wizard.update(WizardPhase.IMPLEMENTATION, ticket_types=["VIP"])
        advance_to_end(wizard)

        outcome = await wizard.save_draft()

        assert outcome.success
        assert outcome.warnings == ["Ticket type 'VIP' was not saved: not a mapping of fields"]

    @pytest.mark.asyncio
    async def test_only_available_from_maintenance(self, empty_store):
        wizard = EventAuthoringWizard(empty_store, "org")
        fill_draft(wizard)

        outcome = await wizard.save_draft()

        assert outcome.status == OutcomeStatus.FAILED
        assert "maintenance" in outcome.message
        assert (await empty_store.list_events()).payload == []

    @pytest.mark.asyncio
    async def test_publish_requires_summary(self, empty_store):
        """Test publishing needs the summary fields while a draft does not."""
        wizard = EventAuthoringWizard(empty_store, "org")
        wizard.update(WizardPhase.REQUIREMENTS, title="Meetup", category="social")
        wizard.update(WizardPhase.DESIGN, date="2025-03-01")
        advance_to_end(wizard)

        published = await wizard.publish()
        assert published.status == OutcomeStatus.FAILED
        assert set(published.field_errors) == {"summary.event_name", "summary.start_date"}

        saved = await wizard.save_draft()
        assert saved.status == OutcomeStatus.SAVED

    @pytest.mark.asyncio
    async def test_store_validation_failure_keeps_draft(self, empty_store):
        """Test the draft survives a failed submit so it can be retried."""
        wizard = EventAuthoringWizard(empty_store, "org")
        wizard.update(WizardPhase.REQUIREMENTS, title="No date", category="social")
        advance_to_end(wizard)

        first = await wizard.save_draft()
        assert first.status == OutcomeStatus.FAILED
        assert "date" in first.field_errors
        assert not wizard.closed
        assert wizard.draft.requirements.title == "No date"

        wizard.back()
        wizard.back()
        wizard.back()
        wizard.update(WizardPhase.DESIGN, date="2025-04-01")
        advance_to_end(wizard)

        second = await wizard.save_draft()
        assert second.status == OutcomeStatus.SAVED

    @pytest.mark.asyncio
    async def test_generic_failure_message(self):
        service = mock_service(return_value=StoreResult.fail("Service unavailable"))
        wizard = EventAuthoringWizard(service, "org")
        fill_draft(wizard)
        advance_to_end(wizard)

        outcome = await wizard.save_draft()

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.message == "Service unavailable"
        assert not outcome.show_upgrade_prompt


class TestUpgradeGate:
    """Tests for upgrade-required interception."""

    @pytest.mark.asyncio
    async def test_result_kind(self):
        service = mock_service(
            return_value=StoreResult.fail("Upgrade required", ErrorKind.UPGRADE_REQUIRED)
        )
        saved = Mock()
        wizard = EventAuthoringWizard(service, "org", on_saved=saved)
        fill_draft(wizard)
        advance_to_end(wizard)

        outcome = await wizard.publish()

        assert outcome.status == OutcomeStatus.UPGRADE_REQUIRED
        assert outcome.show_upgrade_prompt
        assert outcome.message == ""
        saved.assert_not_called()
        assert not wizard.closed
        assert wizard.draft.summary.event_name == "AI Workshop"

    @pytest.mark.asyncio
    async def test_raised_error(self):
        service = mock_service(side_effect=UpgradeRequiredError(plan="free"))
        wizard = EventAuthoringWizard(service, "org")
        fill_draft(wizard)
        advance_to_end(wizard)

        outcome = await wizard.save_draft()

        assert outcome.show_upgrade_prompt
        assert outcome.message == ""


class TestConcurrentSubmit:
    """Tests for the single in-flight submit rule."""

    @pytest.mark.asyncio
    async def test_second_submit_is_busy(self, slow_store):
        wizard = EventAuthoringWizard(slow_store, "org")
        fill_draft(wizard)
        advance_to_end(wizard)

        first, second = await asyncio.gather(wizard.publish(), wizard.publish())

        assert first.status == OutcomeStatus.PUBLISHED
        assert second.status == OutcomeStatus.BUSY
        assert len((await slow_store.list_events()).payload) == 1

    @pytest.mark.asyncio
    async def test_flag_cleared_after_failure(self):
        service = mock_service(return_value=StoreResult.fail("Service unavailable"))
        wizard = EventAuthoringWizard(service, "org")
        fill_draft(wizard)
        advance_to_end(wizard)

        await wizard.save_draft()

        assert not wizard.is_submitting


class TestClose:
    """Tests for abandoning the wizard."""

    @pytest.mark.asyncio
    async def test_close_discards_without_writing(self, empty_store):
        closed = Mock()
        wizard = EventAuthoringWizard(empty_store, "org", on_close=closed)
        fill_draft(wizard)

        wizard.close()

        closed.assert_called_once()
        assert wizard.draft.requirements.title == ""
        assert (await empty_store.list_events()).payload == []

    @pytest.mark.asyncio
    async def test_closed_wizard_rejects_submit(self, empty_store):
        wizard = EventAuthoringWizard(empty_store, "org")
        advance_to_end(wizard)
        wizard.close()

        outcome = await wizard.save_draft()

        assert outcome.status == OutcomeStatus.FAILED
        assert outcome.message == "Wizard is closed"
