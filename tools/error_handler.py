"""Structured error types and CLI error formatting."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

TRACEBACK_PATTERN = re.compile(r"Traceback \(most recent call last\):.*", re.DOTALL)
MAX_MESSAGE_LENGTH = 300


@dataclass
class KireiError(Exception):
    """Base error for all expected command failures."""

    error_category: str
    message: str
    detail: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class ConfigError(KireiError):
    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(error_category="CONFIG_ERROR", message=message, detail=detail)


class ValidationError(KireiError):
    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(error_category="VALIDATION_ERROR", message=message, detail=detail)


class CredentialsError(KireiError):
    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(error_category="CREDENTIALS_ERROR", message=message, detail=detail)


class NetworkError(KireiError):
    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(error_category="NETWORK_ERROR", message=message, detail=detail)


class ProviderError(KireiError):
    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(error_category="PROVIDER_ERROR", message=message, detail=detail)


def sanitize_error_message(raw_message: str) -> str:
    """Remove stack traces and clip oversized provider payloads."""
    cleaned = TRACEBACK_PATTERN.sub("", raw_message).strip()
    if len(cleaned) > MAX_MESSAGE_LENGTH:
        cleaned = cleaned[: MAX_MESSAGE_LENGTH - 3].rstrip() + "..."
    return cleaned or "An internal error occurred."


def format_error_message(exc: Exception, command: Optional[str] = None) -> str:
    """Log the failure and render the single line shown to the user."""
    if isinstance(exc, KireiError):
        category = exc.error_category
        message = sanitize_error_message(exc.message)
        if exc.detail:
            message = f"{message} ({sanitize_error_message(exc.detail)})"

        # Expected failures should not emit full stack traces.
        logger.warning("Command failure category=%s command=%s message=%s", category, command, message)
    else:
        category = "UNKNOWN_ERROR"
        message = sanitize_error_message(str(exc))
        logger.exception("Command failure category=%s command=%s", category, command, exc_info=exc)

    return f"error[{category}]: {message}"
