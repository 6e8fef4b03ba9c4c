"""Event authoring wizard controller."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from eventease.core.exceptions import (
    EventEaseError,
    StateTransitionError,
    UpgradeRequiredError,
    ValidationError,
)
from eventease.models.records import EventRecord, EventStatus
from eventease.models.results import StoreResult
from eventease.store.interfaces import RecordService
from eventease.wizard.draft import WizardDraft
from eventease.wizard.phases import WizardPhase, get_next_phase, get_previous_phase

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    """Result of a wizard exit action."""

    SAVED = "saved"
    PUBLISHED = "published"
    UPGRADE_REQUIRED = "upgrade_required"
    FAILED = "failed"
    BUSY = "busy"

    @property
    def is_success(self) -> bool:
        return self in (OutcomeStatus.SAVED, OutcomeStatus.PUBLISHED)


@dataclass
class WizardOutcome:
    """What the caller should show after an exit action.

    Attributes:
        status: Outcome category
        event: The created event on success
        message: User-facing error message (empty for upgrade prompts)
        show_upgrade_prompt: Whether to show the plan upgrade prompt
        field_errors: Field-level validation messages
        warnings: Non-fatal problems (e.g. a ticket type that failed to save)
    """

    status: OutcomeStatus
    event: EventRecord | None = None
    message: str = ""
    show_upgrade_prompt: bool = False
    field_errors: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status.is_success

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "event": self.event.to_dict() if self.event else None,
            "message": self.message,
            "show_upgrade_prompt": self.show_upgrade_prompt,
            "field_errors": self.field_errors,
            "warnings": self.warnings,
        }


class EventAuthoringWizard:
    """Linear five-phase wizard that produces one event.

    The wizard holds a ``WizardDraft`` in memory while the user moves
    through the phases with ``next()`` and ``back()``. Nothing is written
    until ``save_draft()`` or ``publish()`` is called from the last phase.
    On success the draft is handed to the record service and discarded; on
    failure it is kept so the same action can be retried.

    Example:
        >>> wizard = EventAuthoringWizard(store, organizer_id="org_1")
        >>> wizard.update(WizardPhase.REQUIREMENTS, title="Meetup", category="tech")
        >>> wizard.update(WizardPhase.DESIGN, date="2025-06-01")
        >>> for _ in range(4):
        ...     wizard.next()
        >>> outcome = await wizard.save_draft()
        >>> outcome.status
        <OutcomeStatus.SAVED: 'saved'>
    """

    def __init__(
        self,
        service: RecordService,
        organizer_id: str,
        on_saved: Callable[[EventRecord], None] | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the wizard.

        Args:
            service: Record service that receives the finished event
            organizer_id: Owner of the event being authored
            on_saved: Called with the created event after a successful exit
            on_close: Called whenever the wizard closes
        """
        self.service = service
        self.organizer_id = organizer_id
        self.on_saved = on_saved
        self.on_close = on_close
        self.phase = WizardPhase.REQUIREMENTS
        self.draft = WizardDraft()
        self.closed = False
        self._submitting = False

    def _log(self, message: str, level: int = logging.INFO) -> None:
        """Log with wizard context."""
        logger.log(level, f"[wizard:{self.organizer_id}] [{self.phase.value}] {message}")

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> WizardPhase:
        """Advance one phase. No-op at the last phase."""
        if self.closed:
            return self.phase
        following = get_next_phase(self.phase)
        if following is not None:
            self.phase = following
            self._log("Entered phase", logging.DEBUG)
        return self.phase

    def back(self) -> WizardPhase:
        """Retreat one phase. No-op at the first phase."""
        if self.closed:
            return self.phase
        previous = get_previous_phase(self.phase)
        if previous is not None:
            self.phase = previous
            self._log("Entered phase", logging.DEBUG)
        return self.phase

    # ------------------------------------------------------------------
    # Data entry
    # ------------------------------------------------------------------

    def update(self, phase: WizardPhase | str, **values: Any) -> None:
        """Write fields of one phase's section.

        Raises:
            ValidationError: If a field name does not belong to the section
            StateTransitionError: If the wizard is closed
        """
        self._require_open()
        self.draft.section(WizardPhase(phase)).assign(**values)

    def set_summary(self, **values: Any) -> None:
        """Write the summary fields (event name, start date)."""
        self._require_open()
        self.draft.summary.assign(**values)

    def validate_phase(self, phase: WizardPhase | str | None = None) -> dict[str, str]:
        """Validate one phase (the current one by default) in isolation."""
        return self.draft.validate_phase(WizardPhase(phase or self.phase))

    # ------------------------------------------------------------------
    # Exit actions
    # ------------------------------------------------------------------

    async def save_draft(self) -> WizardOutcome:
        """Submit the draft as a draft event."""
        return await self._submit(EventStatus.DRAFT)

    async def publish(self) -> WizardOutcome:
        """Submit the draft as a published event."""
        return await self._submit(EventStatus.PUBLISHED)

    def close(self) -> None:
        """Discard the draft without writing anything."""
        if self.closed:
            return
        self.closed = True
        self.draft = WizardDraft()
        self._log("Closed")
        if self.on_close:
            self.on_close()

    def _require_open(self) -> None:
        if self.closed:
            raise StateTransitionError(
                "Wizard is closed",
                current_state="closed",
                attempted_state=self.phase.value,
            )

    def _require_exit_phase(self) -> None:
        self._require_open()
        if not self.phase.is_last:
            raise StateTransitionError(
                f"Exit actions are only available from the "
                f"{WizardPhase.MAINTENANCE.value} phase",
                current_state=self.phase.value,
                attempted_state="submit",
            )

    async def _submit(self, status: EventStatus) -> WizardOutcome:
        if self._submitting:
            self._log("Submit already in flight", logging.WARNING)
            return WizardOutcome(
                status=OutcomeStatus.BUSY,
                message="A submission is already in progress",
            )

        try:
            self._require_exit_phase()
        except StateTransitionError as e:
            return WizardOutcome(status=OutcomeStatus.FAILED, message=e.message)

        if status == EventStatus.PUBLISHED:
            errors = self.draft.publish_errors()
            if errors:
                return WizardOutcome(
                    status=OutcomeStatus.FAILED,
                    message="Event is not ready to publish",
                    field_errors=errors,
                )

        self._submitting = True
        try:
            return await self._create(status)
        finally:
            self._submitting = False

    async def _create(self, status: EventStatus) -> WizardOutcome:
        fields = self.draft.to_event_fields(self.organizer_id, status)
        self._log(f"Submitting event as {status.value}")

        try:
            result: StoreResult[EventRecord] = await self.service.create_event(fields)
        except UpgradeRequiredError:
            return self._upgrade_outcome()
        except ValidationError as e:
            return WizardOutcome(
                status=OutcomeStatus.FAILED, message=e.message, field_errors=e.field_errors
            )
        except EventEaseError as e:
            self._log(f"Submit failed: {e}", logging.WARNING)
            return WizardOutcome(status=OutcomeStatus.FAILED, message=e.message)
        except Exception:
            logger.exception("Unexpected error while submitting event")
            return WizardOutcome(status=OutcomeStatus.FAILED, message="Failed to save event")

        if not result.success:
            if result.is_upgrade_required:
                return self._upgrade_outcome()
            self._log(f"Submit failed: {result.error}", logging.WARNING)
            return WizardOutcome(
                status=OutcomeStatus.FAILED,
                message=result.error,
                field_errors=result.field_errors,
            )

        event = result.payload
        warnings = await self._create_ticket_types(event)
        outcome = WizardOutcome(
            status=(
                OutcomeStatus.PUBLISHED
                if status == EventStatus.PUBLISHED
                else OutcomeStatus.SAVED
            ),
            event=event,
            warnings=warnings,
        )
        self._log(f"Event {event.id} {outcome.status.value}")

        if self.on_saved:
            self.on_saved(event)
        self.close()
        return outcome

    async def _create_ticket_types(self, event: EventRecord) -> list[str]:
        """Create the draft's ticket types. Failures become warnings."""
        warnings: list[str] = []
        for ticket in self.draft.implementation.ticket_types:
            if not isinstance(ticket, dict):
                warnings.append(f"Ticket type {ticket!r} was not saved: not a mapping of fields")
                continue
            name = ticket.get("name", "")
            try:
                result = await self.service.create_ticket_type({**ticket, "event_id": event.id})
            except EventEaseError as e:
                warnings.append(f"Ticket type '{name}' was not saved: {e.message}")
                continue
            if not result.success:
                warnings.append(f"Ticket type '{name}' was not saved: {result.error}")
        for warning in warnings:
            self._log(warning, logging.WARNING)
        return warnings

    def _upgrade_outcome(self) -> WizardOutcome:
        self._log("Plan upgrade required")
        return WizardOutcome(
            status=OutcomeStatus.UPGRADE_REQUIRED,
            show_upgrade_prompt=True,
        )
