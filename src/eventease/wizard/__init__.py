"""Multi-phase event authoring wizard."""

from eventease.wizard.controller import EventAuthoringWizard, OutcomeStatus, WizardOutcome
from eventease.wizard.draft import (
    DesignSection,
    DraftSummary,
    ImplementationSection,
    MaintenanceSection,
    RequirementsSection,
    VerificationSection,
    WizardDraft,
)
from eventease.wizard.phases import (
    PHASE_FLOW,
    WizardPhase,
    get_next_phase,
    get_previous_phase,
)

__all__ = [
    # Controller
    "EventAuthoringWizard",
    "WizardOutcome",
    "OutcomeStatus",
    # Draft
    "WizardDraft",
    "RequirementsSection",
    "DesignSection",
    "ImplementationSection",
    "VerificationSection",
    "MaintenanceSection",
    "DraftSummary",
    # Phases
    "WizardPhase",
    "PHASE_FLOW",
    "get_next_phase",
    "get_previous_phase",
]
