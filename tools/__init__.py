"""Lazy exports for tools package to avoid import-time dependency cycles."""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Tuple

_EXPORTS: Dict[str, Tuple[str, str]] = {
    "format_error_message": ("tools.error_handler", "format_error_message"),
    "format_greeting": ("tools.greeting", "format_greeting"),
    "resolve_user_name": ("tools.greeting", "resolve_user_name"),
}

__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str):
    if name not in _EXPORTS:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
    module_name, attr_name = _EXPORTS[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
