"""EventEase - Event records and authoring for an event-management back office.

This package provides both a library interface and CLI for:
- Storing events, ticket types, attendees, analytics and campaigns locally
- Authoring events through a five-phase wizard
- Dashboard filtering and statistics
- Demo sign-in with persisted sessions and a security log

Library Usage:
    >>> from eventease import LocalRecordStore, EventAuthoringWizard, WizardPhase
    >>>
    >>> store = LocalRecordStore()
    >>> wizard = EventAuthoringWizard(store, organizer_id="organizer_user_1")
    >>> wizard.update(WizardPhase.REQUIREMENTS, title="AI Workshop", category="technology")
    >>> wizard.update(WizardPhase.DESIGN, date="2025-01-25")
    >>> for _ in range(4):
    ...     wizard.next()
    >>> outcome = await wizard.save_draft()
    >>> print(outcome.event.id)

CLI Usage:
    $ eventease events --status published
    $ eventease create --title "AI Workshop" --date 2025-01-25 --category technology
    $ eventease delete evt_2 --yes
"""

__version__ = "0.1.0"

# Core
from eventease.core.config import Config
from eventease.core.exceptions import (
    AuthenticationError,
    DomainConflictError,
    EventEaseError,
    NotFoundError,
    StateTransitionError,
    StorageUnavailableError,
    UpgradeRequiredError,
    ValidationError,
)

# Models
from eventease.models import (
    AnalyticsSnapshot,
    Attendee,
    CampaignUpdate,
    CheckInStatus,
    ErrorKind,
    EventRecord,
    EventStatus,
    EventUpdate,
    MarketingCampaign,
    StoreResult,
    TicketType,
    TicketTypeUpdate,
    Visibility,
)

# Storage
from eventease.storage import FileKeyValueStorage, KeyValueStorage, MemoryKeyValueStorage

# Store
from eventease.store import EventFilters, LocalRecordStore, RecordService

# Wizard
from eventease.wizard import EventAuthoringWizard, OutcomeStatus, WizardOutcome, WizardPhase

# Auth
from eventease.auth import DemoAuthProvider, SessionManager, require_admin

# Dashboards
from eventease.dashboard import DashboardStats, dashboard_stats, filter_events, sort_events

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "EventEaseError",
    "AuthenticationError",
    "DomainConflictError",
    "NotFoundError",
    "StateTransitionError",
    "StorageUnavailableError",
    "UpgradeRequiredError",
    "ValidationError",
    # Models
    "EventRecord",
    "EventStatus",
    "Visibility",
    "TicketType",
    "Attendee",
    "CheckInStatus",
    "AnalyticsSnapshot",
    "MarketingCampaign",
    "EventUpdate",
    "TicketTypeUpdate",
    "CampaignUpdate",
    "ErrorKind",
    "StoreResult",
    # Storage
    "KeyValueStorage",
    "MemoryKeyValueStorage",
    "FileKeyValueStorage",
    # Store
    "RecordService",
    "LocalRecordStore",
    "EventFilters",
    # Wizard
    "EventAuthoringWizard",
    "WizardOutcome",
    "OutcomeStatus",
    "WizardPhase",
    # Auth
    "DemoAuthProvider",
    "SessionManager",
    "require_admin",
    # Dashboards
    "DashboardStats",
    "dashboard_stats",
    "filter_events",
    "sort_events",
]
