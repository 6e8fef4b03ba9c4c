"""Configuration management for EventEase."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() == "true"


@dataclass
class DemoAccount:
    """A sign-in account known to the demo auth provider."""

    email: str
    full_name: str
    role: str = "attendee"
    permissions: list[str] = field(default_factory=list)


def _default_demo_accounts() -> list[DemoAccount]:
    return [
        DemoAccount(
            email=os.environ.get("EVENTEASE_ADMIN_EMAIL", "admin@example.com"),
            full_name="Admin User",
            role="admin",
            permissions=[
                "users.read",
                "users.write",
                "events.read",
                "events.write",
                "content.read",
                "content.write",
            ],
        ),
        DemoAccount(
            email="organizer@example.com",
            full_name="Olivia Organizer",
            role="organizer",
            permissions=["events.read", "events.write"],
        ),
        DemoAccount(
            email="attendee@example.com",
            full_name="John Doe",
            role="attendee",
            permissions=["events.read"],
        ),
    ]


@dataclass
class Config:
    """Global configuration for EventEase.

    All values can be overridden via environment variables with EVENTEASE_ prefix.
    Example: EVENTEASE_LATENCY_MAX=0
    """

    # Storage
    storage_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("EVENTEASE_STORAGE_DIR", str(Path.home() / ".eventease" / "storage"))
        )
    )
    seed_fixtures: bool = field(
        default_factory=lambda: _env_bool("EVENTEASE_SEED_FIXTURES", "true")
    )

    # Simulated network latency (seconds)
    latency_min: float = field(
        default_factory=lambda: float(os.environ.get("EVENTEASE_LATENCY_MIN", "0.2"))
    )
    latency_max: float = field(
        default_factory=lambda: float(os.environ.get("EVENTEASE_LATENCY_MAX", "0.5"))
    )

    # Sessions
    session_ttl_hours: float = field(
        default_factory=lambda: float(os.environ.get("EVENTEASE_SESSION_TTL_HOURS", "24"))
    )
    admin_session_ttl_hours: float = field(
        default_factory=lambda: float(os.environ.get("EVENTEASE_ADMIN_SESSION_TTL_HOURS", "8"))
    )
    security_log_limit: int = field(
        default_factory=lambda: int(os.environ.get("EVENTEASE_SECURITY_LOG_LIMIT", "500"))
    )
    demo_accounts: list[DemoAccount] = field(default_factory=_default_demo_accounts)

    # Logging
    log_level: str = field(
        default_factory=lambda: os.environ.get("EVENTEASE_LOG_LEVEL", "INFO")
    )
    redact_sensitive: bool = field(
        default_factory=lambda: _env_bool("EVENTEASE_REDACT_SENSITIVE", "true")
    )

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a value is out of range.
        """
        if self.latency_min < 0 or self.latency_max < 0:
            raise ValueError("Simulated latency cannot be negative")
        if self.latency_min > self.latency_max:
            raise ValueError(
                f"EVENTEASE_LATENCY_MIN ({self.latency_min}) must not exceed "
                f"EVENTEASE_LATENCY_MAX ({self.latency_max})"
            )
        if self.session_ttl_hours <= 0 or self.admin_session_ttl_hours <= 0:
            raise ValueError("Session lifetimes must be positive")
        if self.security_log_limit < 1:
            raise ValueError("EVENTEASE_SECURITY_LOG_LIMIT must be at least 1")

    @classmethod
    def from_env(cls) -> "Config":
        """Create a Config instance from environment variables.

        Returns:
            Config instance with values from environment.
        """
        return cls()
