"""Authentication providers.

The core never verifies credentials itself; it talks to an ``AuthProvider``.
``DemoAuthProvider`` is the local stand-in for a hosted identity service: it
signs in the configured demo accounts, persists their sessions and keeps a
bounded security log in key-value storage.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from eventease.auth.session import (
    ADMIN_SESSION_KEY,
    SESSION_KEY,
    AuthUser,
    Session,
    SessionManager,
)
from eventease.core.config import Config, DemoAccount
from eventease.core.exceptions import AuthenticationError, StorageUnavailableError
from eventease.models.records import parse_datetime, utcnow
from eventease.storage.backends import KeyValueStorage, MemoryKeyValueStorage
from eventease.utils.sanitization import mask_email, redact_sensitive_data

logger = logging.getLogger(__name__)

SECURITY_LOG_KEY = "eventease_admin_security_logs"


@dataclass
class AuthResult:
    """Result of a sign-in attempt."""

    success: bool
    user: AuthUser | None = None
    error: str = ""
    method: str = "standard"


class SecurityAction(str, Enum):
    """Kinds of security log entries."""

    LOGIN_ATTEMPT = "login_attempt"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILURE = "login_failure"
    LOGOUT = "logout"
    ACCESS_DENIED = "access_denied"


@dataclass
class SecurityLogEntry:
    """One security-relevant event."""

    id: str
    email: str
    action: SecurityAction
    timestamp: datetime
    method: str = "standard"
    success: bool = True
    additional_info: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["action"] = self.action.value
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SecurityLogEntry:
        data = dict(data)
        data["action"] = SecurityAction(data["action"])
        data["timestamp"] = parse_datetime(data["timestamp"])
        return cls(**data)


class AuthProvider(ABC):
    """Contract of the session/auth collaborator."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Authenticate and start a session."""

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session, if any."""

    @abstractmethod
    def get_current_session(self) -> Session | None:
        """Return the live session, or None."""

    @abstractmethod
    def is_admin(self, user: AuthUser) -> bool:
        """Check if ``user`` may access the admin panel."""


class DemoAuthProvider(AuthProvider):
    """Signs in the configured demo accounts with any non-empty password.

    Admins get a session under the admin key with the admin lifetime; other
    users get the regular session. Every attempt is recorded in the
    security log, which keeps only the newest entries.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        config: Config | None = None,
    ) -> None:
        self.config = config or Config.from_env()
        self._storage = storage or MemoryKeyValueStorage()
        self._accounts: dict[str, DemoAccount] = {
            account.email.lower(): account for account in self.config.demo_accounts
        }
        self.admin_sessions = SessionManager(
            self._storage,
            ttl=timedelta(hours=self.config.admin_session_ttl_hours),
            key=ADMIN_SESSION_KEY,
        )
        self.user_sessions = SessionManager(
            self._storage,
            ttl=timedelta(hours=self.config.session_ttl_hours),
            key=SESSION_KEY,
        )

    def _display_email(self, email: str) -> str:
        return mask_email(email) if self.config.redact_sensitive else email

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in a demo account.

        Args:
            email: Account email (case-insensitive)
            password: Any non-empty password

        Returns:
            AuthResult with the signed-in user, or an error message
        """
        email = (email or "").strip().lower()
        await asyncio.sleep(self.config.latency_min)
        self.log_security_event(email, SecurityAction.LOGIN_ATTEMPT)

        account = self._accounts.get(email)
        if account is None or not password:
            self.log_security_event(email, SecurityAction.LOGIN_FAILURE, success=False)
            logger.warning(f"Sign-in failed for {self._display_email(email)}")
            return AuthResult(success=False, error="Invalid email or password")

        user = AuthUser(
            id=f"{account.role}_{email.split('@')[0]}",
            email=account.email,
            full_name=account.full_name,
            role=account.role,
            permissions=list(account.permissions),
            last_login=utcnow(),
        )
        manager = self.admin_sessions if self.is_admin(user) else self.user_sessions
        manager.start(user)
        self.log_security_event(email, SecurityAction.LOGIN_SUCCESS)
        logger.info(f"Signed in {self._display_email(email)} as {user.role}")
        return AuthResult(success=True, user=user)

    async def sign_out(self) -> None:
        session = self.get_current_session()
        if session is not None:
            self.log_security_event(session.user.email, SecurityAction.LOGOUT)
        self.admin_sessions.clear()
        self.user_sessions.clear()

    def get_current_session(self) -> Session | None:
        return self.admin_sessions.current() or self.user_sessions.current()

    def is_admin(self, user: AuthUser) -> bool:
        return user.is_admin

    def has_permission(self, user: AuthUser, permission: str) -> bool:
        return "*" in user.permissions or permission in user.permissions

    # ------------------------------------------------------------------
    # Security log
    # ------------------------------------------------------------------

    def security_logs(self) -> list[SecurityLogEntry]:
        """Return the security log, oldest first."""
        try:
            data = self._storage.get(SECURITY_LOG_KEY) or []
            return [SecurityLogEntry.from_dict(item) for item in data]
        except (StorageUnavailableError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Security log unreadable, starting fresh: {e}")
            return []

    def log_security_event(
        self,
        email: str,
        action: SecurityAction,
        success: bool = True,
        method: str = "standard",
        **additional_info: Any,
    ) -> SecurityLogEntry:
        """Append an entry, dropping the oldest beyond the configured limit."""
        entry = SecurityLogEntry(
            id=f"log_{uuid.uuid4().hex[:12]}",
            email=self._display_email(email.lower()),
            action=action,
            method=method,
            success=success,
            timestamp=utcnow(),
            additional_info=(
                redact_sensitive_data(additional_info)
                if self.config.redact_sensitive
                else additional_info
            ),
        )
        logs = self.security_logs()
        logs.append(entry)
        logs = logs[-self.config.security_log_limit:]
        self._storage.set(SECURITY_LOG_KEY, [log.to_dict() for log in logs])
        logger.debug(f"Security event {action.value}: {entry.email}")
        return entry

    def clear_old_logs(self, days_to_keep: int = 30) -> int:
        """Drop entries older than ``days_to_keep`` days.

        Returns:
            Number of entries removed
        """
        cutoff = utcnow() - timedelta(days=days_to_keep)
        logs = self.security_logs()
        kept = [log for log in logs if log.timestamp > cutoff]
        self._storage.set(SECURITY_LOG_KEY, [log.to_dict() for log in kept])
        removed = len(logs) - len(kept)
        if removed:
            logger.info(f"Cleared {removed} security log entries older than {days_to_keep} days")
        return removed


def require_admin(provider: AuthProvider) -> AuthUser:
    """Return the signed-in admin.

    Raises:
        AuthenticationError: If nobody is signed in or the user is not an admin
    """
    session = provider.get_current_session()
    if session is None:
        raise AuthenticationError("Sign in required")
    if not provider.is_admin(session.user):
        if isinstance(provider, DemoAuthProvider):
            provider.log_security_event(
                session.user.email, SecurityAction.ACCESS_DENIED, success=False
            )
        raise AuthenticationError("Admin access required", email=session.user.email)
    return session.user
