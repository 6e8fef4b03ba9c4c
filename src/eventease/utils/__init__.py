"""Utility modules for EventEase."""

from eventease.utils.sanitization import (
    mask_email,
    redact_sensitive_data,
    sanitize_input,
    sanitize_url,
)

__all__ = [
    "mask_email",
    "redact_sensitive_data",
    "sanitize_input",
    "sanitize_url",
]
