"""Input sanitization utilities for EventEase.

These utilities keep free-text record fields clean before they are
persisted and keep personal data out of log output.
"""

import re
from urllib.parse import urlparse


def sanitize_input(text: str | None, max_len: int = 2000) -> str:
    """Sanitize user-supplied text before it is stored.

    Args:
        text: Input text to sanitize
        max_len: Maximum allowed length (default 2000)

    Returns:
        Trimmed string without control characters
    """
    if not text:
        return ""

    text = str(text)

    # Remove control characters except newlines and tabs
    text = "".join(char for char in text if char >= " " or char in "\n\t")

    return text.strip()[:max_len]


def sanitize_url(url: str | None) -> str:
    """Sanitize a URL for safe usage.

    Args:
        url: URL to sanitize

    Returns:
        Sanitized URL or empty string if invalid

    Note:
        Only allows http and https schemes.
    """
    if not url:
        return ""

    url = str(url).strip()

    try:
        parsed = urlparse(url)

        # Only allow http and https
        if parsed.scheme not in ("http", "https"):
            return ""

        # Must have a netloc (domain)
        if not parsed.netloc:
            return ""

        return url
    except ValueError:
        return ""


_EMAIL_MASK = re.compile(r"^([^@]{1,2})[^@]*(@.*)$")


def mask_email(email: str | None) -> str:
    """Mask the local part of an email address for logging.

    >>> mask_email("admin@example.com")
    'ad***@example.com'
    """
    if not email:
        return ""
    return _EMAIL_MASK.sub(r"\1***\2", email)


def redact_sensitive_data(
    data: dict,
    sensitive_keys: set[str] | None = None,
) -> dict:
    """Redact sensitive values from a dictionary for safe logging.

    Args:
        data: Dictionary to redact
        sensitive_keys: Set of key substrings to redact. Defaults to common sensitive keys.

    Returns:
        New dictionary with sensitive values replaced with "***REDACTED***"
    """
    if sensitive_keys is None:
        sensitive_keys = {"password", "secret", "token", "credential"}

    if not isinstance(data, dict):
        return data

    redacted = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sk in key_lower for sk in sensitive_keys):
            redacted[key] = "***REDACTED***"
        elif key_lower == "email" and isinstance(value, str):
            redacted[key] = mask_email(value)
        elif isinstance(value, dict):
            redacted[key] = redact_sensitive_data(value, sensitive_keys)
        elif isinstance(value, list):
            redacted[key] = [
                redact_sensitive_data(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            redacted[key] = value

    return redacted
