"""
Logging redaction helpers.
Redacts credentials from log messages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Password in a database URL: scheme://user:<password>@host
    (re.compile(r"([a-zA-Z][a-zA-Z0-9+\-.]*://[^:/@\s]+:)([^@\s]+)(@)"), r"\1[REDACTED]\3"),
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._]+)"), r"\1[REDACTED]"),
    # Generic password/secret key/value
    (re.compile(r"(?i)(password|secret)\s*[:=]\s*([^\s,;]+)"), r"\1=[REDACTED]"),
)


def redact_message(message: str) -> str:
    redacted = message
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format args; let the handler report it
            return True
        record.msg = redact_message(message)
        record.args = ()
        return True


def install_redaction_filter() -> None:
    """Attach the filter to every root handler; logger filters skip propagated records."""
    root = logging.getLogger()
    for handler in root.handlers:
        # Avoid duplicate filters
        if any(isinstance(existing, RedactingFilter) for existing in handler.filters):
            continue
        handler.addFilter(RedactingFilter())
