"""Custom exceptions for EventEase."""

from typing import Any


class EventEaseError(Exception):
    """Base exception for all EventEase errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ValidationError(EventEaseError):
    """Raised when caller-supplied fields violate a required-field or ordering rule."""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: dict[str, str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field_errors = field_errors or {}

    def __str__(self) -> str:
        if self.field_errors:
            joined = "; ".join(f"{k}: {v}" for k, v in self.field_errors.items())
            return f"{self.message} ({joined})"
        return super().__str__()


class NotFoundError(EventEaseError):
    """Raised when a requested record does not exist."""

    def __init__(
        self,
        entity: str,
        record_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{entity} not found", details)
        self.entity = entity
        self.record_id = record_id


class DomainConflictError(EventEaseError):
    """Raised when an operation would break a business rule."""

    def __init__(
        self,
        message: str,
        record_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.record_id = record_id


class StorageUnavailableError(EventEaseError):
    """Raised when the durable storage cannot be read or written."""

    def __init__(
        self,
        message: str = "Storage unavailable",
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.key = key


class UpgradeRequiredError(EventEaseError):
    """Raised by a record service when the caller's plan does not allow the operation."""

    def __init__(
        self,
        message: str = "Upgrade required",
        plan: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.plan = plan


class AuthenticationError(EventEaseError):
    """Raised when authentication fails or a session is missing or expired."""

    def __init__(
        self,
        message: str = "Authentication required",
        email: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.email = email


class StateTransitionError(EventEaseError):
    """Raised when an invalid state transition is attempted."""

    def __init__(
        self,
        message: str,
        current_state: str,
        attempted_state: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.current_state = current_state
        self.attempted_state = attempted_state
