"""Signed-in user sessions persisted in key-value storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable

from eventease.models.records import parse_datetime, utcnow
from eventease.storage.backends import KeyValueStorage
from eventease.utils.sanitization import mask_email

logger = logging.getLogger(__name__)

SESSION_KEY = "eventease_session"
ADMIN_SESSION_KEY = "eventease_admin_session"


@dataclass
class AuthUser:
    """A signed-in user.

    Attributes:
        id: User identity
        email: Sign-in email
        full_name: Display name
        role: One of admin, organizer, attendee
        permissions: Granted permission names ("*" grants all)
        last_login: When the user last signed in
    """

    id: str
    email: str
    full_name: str = ""
    role: str = "attendee"
    permissions: list[str] = field(default_factory=list)
    last_login: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "permissions": list(self.permissions),
            "last_login": self.last_login.isoformat() if self.last_login else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthUser:
        data = dict(data)
        data["last_login"] = parse_datetime(data.get("last_login"))
        return cls(**data)


@dataclass
class Session:
    """A user session with an absolute expiry."""

    user: AuthUser
    issued_at: datetime
    expires_at: datetime
    method: str = "standard"

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the session has expired."""
        return (now or utcnow()) > self.expires_at

    def remaining(self, now: datetime | None = None) -> timedelta:
        """Time left before expiry (zero once expired)."""
        return max(self.expires_at - (now or utcnow()), timedelta(0))

    def __str__(self) -> str:
        return f"Session({mask_email(self.user.email)}, expires={self.expires_at.isoformat()})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user.to_dict(),
            "issued_at": self.issued_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "method": self.method,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        return cls(
            user=AuthUser.from_dict(data["user"]),
            issued_at=parse_datetime(data["issued_at"]),
            expires_at=parse_datetime(data["expires_at"]),
            method=data.get("method", "standard"),
        )


class SessionManager:
    """Stores one session under one storage key.

    Reads are expiry-checked: an expired or unreadable session is cleared
    and reported as absent.

    Example:
        manager = SessionManager(storage, ttl=timedelta(hours=24))
        manager.start(user)
        session = manager.current()  # None once expired
    """

    DEFAULT_TTL = timedelta(hours=24)

    def __init__(
        self,
        storage: KeyValueStorage,
        ttl: timedelta | None = None,
        key: str = SESSION_KEY,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the session manager.

        Args:
            storage: Storage backend for session persistence
            ttl: Session lifetime (default 24 hours)
            key: Storage key holding the session
            clock: Source of the current time
        """
        self._storage = storage
        self.ttl = ttl or self.DEFAULT_TTL
        self.key = key
        self._clock = clock

    def start(self, user: AuthUser, method: str = "standard") -> Session:
        """Begin a new session for ``user``, replacing any existing one."""
        now = self._clock()
        session = Session(user=user, issued_at=now, expires_at=now + self.ttl, method=method)
        self._storage.set(self.key, session.to_dict())
        logger.info(f"Started {session}")
        return session

    def current(self) -> Session | None:
        """Return the live session, or None if absent, expired or corrupt."""
        try:
            data = self._storage.get(self.key)
            if data is None:
                return None
            session = Session.from_dict(data)
        except Exception as e:
            logger.warning(f"Discarding unreadable session under {self.key}: {e}")
            self.clear()
            return None

        if session.is_expired(self._clock()):
            logger.info(f"Session expired: {session}")
            self.clear()
            return None
        return session

    def is_valid(self) -> bool:
        return self.current() is not None

    def refresh(self) -> Session | None:
        """Extend the live session by a full lifetime."""
        session = self.current()
        if session is None:
            return None
        return self.start(session.user, method=session.method)

    def clear(self) -> None:
        self._storage.remove(self.key)
