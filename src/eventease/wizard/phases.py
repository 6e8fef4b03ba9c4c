"""Phase definitions for the event authoring wizard."""

from enum import Enum


class WizardPhase(str, Enum):
    """Phases of the event authoring wizard.

    The wizard moves through these phases strictly in order:
    1. REQUIREMENTS - What the event is (title, category, goals)
    2. DESIGN - When and where it happens (date, venue, cover image)
    3. IMPLEMENTATION - Ticketing and capacity
    4. VERIFICATION - QA checklist and approvals
    5. MAINTENANCE - Visibility and publishing settings

    MAINTENANCE is the last phase. Saving a draft and publishing are exit
    actions taken from it, not phases of their own.
    """

    REQUIREMENTS = "requirements"
    DESIGN = "design"
    IMPLEMENTATION = "implementation"
    VERIFICATION = "verification"
    MAINTENANCE = "maintenance"

    @property
    def is_first(self) -> bool:
        return self == PHASE_FLOW[0]

    @property
    def is_last(self) -> bool:
        """Check if exit actions are available from this phase."""
        return self == PHASE_FLOW[-1]

    @property
    def step_number(self) -> int:
        """1-based position of the phase in the flow."""
        return PHASE_FLOW.index(self) + 1


PHASE_FLOW = [
    WizardPhase.REQUIREMENTS,
    WizardPhase.DESIGN,
    WizardPhase.IMPLEMENTATION,
    WizardPhase.VERIFICATION,
    WizardPhase.MAINTENANCE,
]


def get_next_phase(current: WizardPhase) -> WizardPhase | None:
    """Get the phase after ``current``.

    Args:
        current: Current phase

    Returns:
        Next phase in flow, or None if at the end
    """
    idx = PHASE_FLOW.index(current)
    if idx + 1 < len(PHASE_FLOW):
        return PHASE_FLOW[idx + 1]
    return None


def get_previous_phase(current: WizardPhase) -> WizardPhase | None:
    """Get the phase before ``current``, or None if at the start."""
    idx = PHASE_FLOW.index(current)
    if idx > 0:
        return PHASE_FLOW[idx - 1]
    return None
