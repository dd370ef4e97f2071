"""Additional unit coverage for greeting, prompts and error formatting."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from schemas.config_schemas import Config
from schemas.issue_schemas import ProviderId, UnifiedMode
from tools import prompts
from tools.error_handler import ConfigError, ValidationError, format_error_message, sanitize_error_message
from tools.greeting import format_greeting, resolve_user_name


def _feed(monkeypatch, answers) -> None:
    replies: Iterator[str] = iter(answers)
    monkeypatch.setattr("builtins.input", lambda *args: next(replies))


def test_format_greeting() -> None:
    assert format_greeting("Ada") == "Hello, Ada!"
    assert format_greeting("  Ada  ") == "Hello, Ada!"
    assert format_greeting(None) == "Hello, World!"


def test_resolve_user_name_precedence() -> None:
    stored = Config(user_name="Stored")
    assert resolve_user_name("Override", stored) == "Override"
    assert resolve_user_name(None, stored) == "Stored"
    assert resolve_user_name(None, Config()) == "World"


def test_prompt_user_name_reasks_until_not_blank(monkeypatch) -> None:
    _feed(monkeypatch, ["", "   ", " Ada Lovelace "])
    assert prompts.prompt_user_name() == "Ada Lovelace"


def test_prompt_provider_defaults_on_empty_answer(monkeypatch) -> None:
    _feed(monkeypatch, [""])
    assert prompts.prompt_provider(ProviderId.JIRA) is ProviderId.JIRA


def test_prompt_provider_parses_answer(monkeypatch) -> None:
    _feed(monkeypatch, ["Trello"])
    assert prompts.prompt_provider(ProviderId.GITHUB) is ProviderId.TRELLO


def test_prompt_provider_rejects_unknown(monkeypatch) -> None:
    _feed(monkeypatch, ["gitlab"])
    with pytest.raises(ValidationError):
        prompts.prompt_provider(ProviderId.GITHUB)


@pytest.mark.parametrize("answer, expected", [("", UnifiedMode.LIST), ("list", UnifiedMode.LIST), ("CREATE", UnifiedMode.CREATE), ("targets", UnifiedMode.TARGETS)])
def test_prompt_operation(monkeypatch, answer: str, expected: UnifiedMode) -> None:
    _feed(monkeypatch, [answer])
    assert prompts.prompt_operation() is expected


def test_prompt_operation_rejects_unknown(monkeypatch) -> None:
    _feed(monkeypatch, ["delete"])
    with pytest.raises(ValidationError, match="unknown operation 'delete'"):
        prompts.prompt_operation()


def test_prompt_issue_body_optional(monkeypatch) -> None:
    _feed(monkeypatch, [""])
    assert prompts.prompt_issue_body() is None


def test_sanitize_error_message_strips_traceback() -> None:
    raw = "boom Traceback (most recent call last):\n  File x, line 1"
    assert sanitize_error_message(raw) == "boom"


def test_sanitize_error_message_truncates_long_payloads() -> None:
    cleaned = sanitize_error_message("x" * 1000)
    assert len(cleaned) == 300
    assert cleaned.endswith("...")


def test_format_error_message_for_expected_error(caplog) -> None:
    exc = ConfigError("Failed to write config file: /tmp/x", detail="Permission denied")
    with caplog.at_level(logging.WARNING):
        line = format_error_message(exc, command="init")
    assert line == "error[CONFIG_ERROR]: Failed to write config file: /tmp/x (Permission denied)"
    assert "category=CONFIG_ERROR" in caplog.text


def test_format_error_message_for_unexpected_error() -> None:
    assert format_error_message(RuntimeError("surprise")) == "error[UNKNOWN_ERROR]: surprise"


def test_tools_package_exports_resolve_lazily() -> None:
    import tools
    from tools import greeting

    assert tools.__all__ == ["format_error_message", "format_greeting", "resolve_user_name"]
    assert tools.format_greeting is greeting.format_greeting
    with pytest.raises(AttributeError):
        tools.resolve_token
