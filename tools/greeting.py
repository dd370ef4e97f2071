"""Greeting line formatting."""

from __future__ import annotations

from typing import Optional

from config.settings import settings
from schemas.config_schemas import Config


def resolve_user_name(override: Optional[str], config: Config) -> str:
    """Pick the name to greet: explicit override, then stored name, then the placeholder."""
    for candidate in (override, config.user_name):
        if candidate is not None and candidate.strip():
            return candidate.strip()
    return settings.default_user_name


def format_greeting(name: Optional[str]) -> str:
    cleaned = (name or "").strip() or settings.default_user_name
    return f"Hello, {cleaned}!"
