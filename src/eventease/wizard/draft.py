"""The in-progress event held by the authoring wizard.

A ``WizardDraft`` is organized the way the wizard collects it: one sub-object
per phase plus a summary. Each phase validates only its own sub-object; the
draft is flattened into record-store fields only when it is submitted.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any

from eventease.core.exceptions import ValidationError
from eventease.models.records import EventStatus, Visibility
from eventease.wizard.phases import WizardPhase


def _check_time(value: Any) -> bool:
    try:
        datetime.strptime(value, "%H:%M")
    except (TypeError, ValueError):
        return False
    return True


def _check_date(value: Any) -> bool:
    try:
        datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return False
    return True


@dataclass
class _Section:
    def assign(self, **values: Any) -> None:
        """Set the named fields; unknown names are rejected."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValidationError(
                f"Unknown {type(self).__name__} fields",
                field_errors={name: "Unknown field" for name in unknown},
            )
        for name, value in values.items():
            setattr(self, name, value)

    def validate(self) -> dict[str, str]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RequirementsSection(_Section):
    """What the event is and who it is for."""

    title: str = ""
    category: str = ""
    description: str = ""
    target_audience: str = ""
    goals: list[str] = field(default_factory=list)

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not str(self.title or "").strip():
            errors["title"] = "Title is required"
        if not str(self.category or "").strip():
            errors["category"] = "Category is required"
        return errors


@dataclass
class DesignSection(_Section):
    """When and where the event happens."""

    date: str = ""
    time: str = ""
    end_time: str = ""
    venue_name: str = ""
    venue_address: str = ""
    image_url: str = ""

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not self.date:
            errors["date"] = "Date is required"
        elif not _check_date(self.date):
            errors["date"] = "Date must be in ISO format (YYYY-MM-DD)"
        for name in ("time", "end_time"):
            value = getattr(self, name)
            if value and not _check_time(value):
                errors[name] = "Time must be HH:MM"
        if (
            self.time
            and self.end_time
            and "time" not in errors
            and "end_time" not in errors
            and self.end_time <= self.time
        ):
            errors["end_time"] = "End time must be after start time"
        return errors


@dataclass
class ImplementationSection(_Section):
    """Ticketing and capacity.

    ``ticket_types`` holds plain creation-field dicts (name, price,
    quantity, ...) that become TicketType records once the event exists.
    """

    capacity: int = 0
    ticket_types: list[dict[str, Any]] = field(default_factory=list)

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        try:
            if int(self.capacity or 0) < 0:
                errors["capacity"] = "Capacity cannot be negative"
        except (TypeError, ValueError):
            errors["capacity"] = "Capacity must be a whole number"
        if not isinstance(self.ticket_types, list):
            errors["ticket_types"] = "Ticket types must be a list"
            return errors
        for idx, ticket in enumerate(self.ticket_types):
            prefix = f"ticket_types[{idx}]"
            if not isinstance(ticket, dict):
                errors[prefix] = "Ticket type must be a mapping of fields"
                continue
            if not str(ticket.get("name") or "").strip():
                errors[f"{prefix}.name"] = "Ticket name is required"
            try:
                if float(ticket.get("price", 0)) < 0:
                    errors[f"{prefix}.price"] = "Price cannot be negative"
            except (TypeError, ValueError):
                errors[f"{prefix}.price"] = "Price must be a number"
            try:
                if int(ticket.get("quantity", 0)) < 0:
                    errors[f"{prefix}.quantity"] = "Quantity cannot be negative"
            except (TypeError, ValueError):
                errors[f"{prefix}.quantity"] = "Quantity must be a whole number"
        return errors


@dataclass
class VerificationSection(_Section):
    """QA checklist items and the names of approvers."""

    qa_checklist: list[str] = field(default_factory=list)
    approvals: list[str] = field(default_factory=list)


@dataclass
class MaintenanceSection(_Section):
    """Visibility and post-launch settings."""

    visibility: str = Visibility.PUBLIC.value
    price: float | None = None
    currency: str | None = None
    tags: list[str] = field(default_factory=list)
    notes: str = ""

    def validate(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        allowed = {v.value for v in Visibility}
        if str(self.visibility) not in allowed:
            errors["visibility"] = f"Must be one of: {', '.join(sorted(allowed))}"
        if self.price is not None:
            try:
                if float(self.price) < 0:
                    errors["price"] = "Price cannot be negative"
            except (TypeError, ValueError):
                errors["price"] = "Price must be a number"
        return errors


@dataclass
class DraftSummary(_Section):
    """Headline fields shown across every phase."""

    event_name: str = ""
    start_date: str = ""


SECTION_TYPES: dict[WizardPhase, type[_Section]] = {
    WizardPhase.REQUIREMENTS: RequirementsSection,
    WizardPhase.DESIGN: DesignSection,
    WizardPhase.IMPLEMENTATION: ImplementationSection,
    WizardPhase.VERIFICATION: VerificationSection,
    WizardPhase.MAINTENANCE: MaintenanceSection,
}


@dataclass
class WizardDraft:
    """Accumulated wizard input, one section per phase."""

    requirements: RequirementsSection = field(default_factory=RequirementsSection)
    design: DesignSection = field(default_factory=DesignSection)
    implementation: ImplementationSection = field(default_factory=ImplementationSection)
    verification: VerificationSection = field(default_factory=VerificationSection)
    maintenance: MaintenanceSection = field(default_factory=MaintenanceSection)
    summary: DraftSummary = field(default_factory=DraftSummary)

    def section(self, phase: WizardPhase) -> _Section:
        """Return the sub-object owned by ``phase``."""
        return getattr(self, WizardPhase(phase).value)

    def validate_phase(self, phase: WizardPhase) -> dict[str, str]:
        return self.section(phase).validate()

    def publish_errors(self) -> dict[str, str]:
        """Fields a published event needs beyond what the store requires."""
        errors: dict[str, str] = {}
        if not self.summary.event_name.strip():
            errors["summary.event_name"] = "Event name is required to publish"
        if not self.summary.start_date.strip():
            errors["summary.start_date"] = "Start date is required to publish"
        return errors

    def to_event_fields(
        self, organizer_id: str, status: EventStatus = EventStatus.DRAFT
    ) -> dict[str, Any]:
        """Flatten the draft into ``create_event`` fields.

        The summary supplies the title and date when the requirements and
        design phases left them empty.

        Args:
            organizer_id: Owner of the event
            status: Initial status of the record

        Returns:
            Creation fields for the record store
        """
        return {
            "organizer_id": organizer_id,
            "title": self.requirements.title or self.summary.event_name,
            "category": self.requirements.category,
            "description": self.requirements.description,
            "date": self.design.date or self.summary.start_date,
            "time": self.design.time,
            "end_time": self.design.end_time,
            "venue": {
                "name": self.design.venue_name,
                "address": self.design.venue_address,
                "capacity": self.implementation.capacity,
            },
            "image_url": self.design.image_url,
            "status": EventStatus(status).value,
            "visibility": self.maintenance.visibility,
            "price": self.maintenance.price,
            "currency": self.maintenance.currency,
            "tags": list(self.maintenance.tags),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "requirements": self.requirements.to_dict(),
            "design": self.design.to_dict(),
            "implementation": self.implementation.to_dict(),
            "verification": self.verification.to_dict(),
            "maintenance": self.maintenance.to_dict(),
            "summary": self.summary.to_dict(),
        }
