"""Core infrastructure for EventEase."""

from eventease.core.config import Config, DemoAccount
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

__all__ = [
    "Config",
    "DemoAccount",
    "EventEaseError",
    "AuthenticationError",
    "DomainConflictError",
    "NotFoundError",
    "StateTransitionError",
    "StorageUnavailableError",
    "UpgradeRequiredError",
    "ValidationError",
]
