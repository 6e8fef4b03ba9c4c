"""Result models for EventEase store operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from eventease.core.exceptions import (
    DomainConflictError,
    EventEaseError,
    NotFoundError,
    StorageUnavailableError,
    UpgradeRequiredError,
    ValidationError,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories callers can branch on."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    UPGRADE_REQUIRED = "upgrade_required"
    FAILED = "failed"


_ERROR_KINDS: list[tuple[type[EventEaseError], ErrorKind]] = [
    (NotFoundError, ErrorKind.NOT_FOUND),
    (ValidationError, ErrorKind.VALIDATION),
    (DomainConflictError, ErrorKind.CONFLICT),
    (StorageUnavailableError, ErrorKind.STORAGE_UNAVAILABLE),
    (UpgradeRequiredError, ErrorKind.UPGRADE_REQUIRED),
]


@dataclass
class StoreResult(Generic[T]):
    """Outcome of a record store operation.

    Attributes:
        success: Whether the operation succeeded
        payload: The record(s) returned on success
        error: Human-readable error message on failure
        error_kind: Failure category on failure
        field_errors: Field-level messages for validation failures
    """

    success: bool
    payload: T | None = None
    error: str = ""
    error_kind: ErrorKind | None = None
    field_errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def ok(cls, payload: T | None = None) -> StoreResult[T]:
        return cls(success=True, payload=payload)

    @classmethod
    def fail(
        cls,
        error: str,
        kind: ErrorKind = ErrorKind.FAILED,
        field_errors: dict[str, str] | None = None,
    ) -> StoreResult[T]:
        return cls(
            success=False,
            error=error,
            error_kind=kind,
            field_errors=field_errors or {},
        )

    @classmethod
    def from_error(cls, exc: EventEaseError) -> StoreResult[T]:
        """Map a domain exception onto a failed result."""
        kind = ErrorKind.FAILED
        for exc_type, mapped in _ERROR_KINDS:
            if isinstance(exc, exc_type):
                kind = mapped
                break
        field_errors = exc.field_errors if isinstance(exc, ValidationError) else {}
        return cls.fail(exc.message, kind, field_errors)

    @property
    def is_not_found(self) -> bool:
        return self.error_kind == ErrorKind.NOT_FOUND

    @property
    def is_conflict(self) -> bool:
        return self.error_kind == ErrorKind.CONFLICT

    @property
    def is_upgrade_required(self) -> bool:
        return self.error_kind == ErrorKind.UPGRADE_REQUIRED

    def unwrap(self) -> T:
        """Return the payload or raise the matching domain error."""
        if self.success:
            return self.payload  # type: ignore[return-value]
        if self.error_kind == ErrorKind.VALIDATION:
            raise ValidationError(self.error, field_errors=self.field_errors)
        if self.error_kind == ErrorKind.NOT_FOUND:
            raise NotFoundError("Record", "", details={"error": self.error})
        if self.error_kind == ErrorKind.CONFLICT:
            raise DomainConflictError(self.error)
        if self.error_kind == ErrorKind.UPGRADE_REQUIRED:
            raise UpgradeRequiredError(self.error)
        if self.error_kind == ErrorKind.STORAGE_UNAVAILABLE:
            raise StorageUnavailableError(self.error)
        raise EventEaseError(self.error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        payload: Any = self.payload
        if hasattr(payload, "to_dict"):
            payload = payload.to_dict()
        elif isinstance(payload, list):
            payload = [p.to_dict() if hasattr(p, "to_dict") else p for p in payload]
        return {
            "success": self.success,
            "payload": payload,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "field_errors": self.field_errors,
        }
