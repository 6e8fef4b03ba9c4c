"""Session and authentication collaborators."""

from eventease.auth.provider import (
    SECURITY_LOG_KEY,
    AuthProvider,
    AuthResult,
    DemoAuthProvider,
    SecurityAction,
    SecurityLogEntry,
    require_admin,
)
from eventease.auth.session import (
    ADMIN_SESSION_KEY,
    SESSION_KEY,
    AuthUser,
    Session,
    SessionManager,
)

__all__ = [
    # Sessions
    "AuthUser",
    "Session",
    "SessionManager",
    "SESSION_KEY",
    "ADMIN_SESSION_KEY",
    # Providers
    "AuthProvider",
    "AuthResult",
    "DemoAuthProvider",
    "require_admin",
    # Security log
    "SecurityAction",
    "SecurityLogEntry",
    "SECURITY_LOG_KEY",
]
