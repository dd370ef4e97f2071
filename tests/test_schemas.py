"""Schema validation tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from schemas.config_schemas import Config, JiraConfig
from schemas.issue_schemas import ProviderId, UnifiedCreateParams, UnifiedIssue


@pytest.mark.parametrize("text, expected", [("github", ProviderId.GITHUB), (" Linear ", ProviderId.LINEAR), ("JIRA", ProviderId.JIRA)])
def test_provider_parse_is_case_insensitive(text: str, expected: ProviderId) -> None:
    assert ProviderId.parse(text) is expected


def test_provider_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="unknown provider 'gitlab'"):
        ProviderId.parse("gitlab")


def test_provider_env_var_and_display_name() -> None:
    assert ProviderId.TRELLO.env_var == "KIREI_TRELLO_TOKEN"
    assert ProviderId.GITHUB.display_name == "GitHub"


def test_create_params_require_title() -> None:
    with pytest.raises(PydanticValidationError):
        UnifiedCreateParams(title="   ")


def test_create_params_drop_blank_body() -> None:
    params = UnifiedCreateParams(title=" Fix ", body="  ")
    assert params.title == "Fix"
    assert params.body is None


def test_issue_summary_without_url() -> None:
    issue = UnifiedIssue(id="1", title="Crash", state="open", provider=ProviderId.JIRA)
    assert issue.display_summary() == "Jira [open] Crash (no-url)"


def test_config_user_name_is_optional_and_trimmed() -> None:
    assert Config().user_name is None
    assert Config(user_name="  Ada ").user_name == "Ada"
    assert Config(user_name="   ").user_name is None


def test_config_tokens_serialize_with_provider_keys() -> None:
    config = Config.model_validate({"unified": {"tokens": {"github": "ghp_1", "linear": "  "}}})
    assert config.unified.tokens == {ProviderId.GITHUB: "ghp_1"}
    assert '"github": "ghp_1"' in config.model_dump_json(indent=2)


def test_masked_dump_hides_secrets() -> None:
    config = Config()
    config.unified.tokens[ProviderId.GITHUB] = "ghp_abcdef1234"
    config.unified.tokens[ProviderId.LINEAR] = "abc"
    config.unified.trello.api_key = "trellokey9876"

    dumped = config.masked_dump()

    assert dumped["unified"]["tokens"] == {"github": "**********1234", "linear": "***"}
    assert dumped["unified"]["trello"]["api_key"] == "*********9876"
    assert config.unified.tokens[ProviderId.GITHUB] == "ghp_abcdef1234"


def test_jira_server_url_trailing_slash_is_trimmed() -> None:
    assert JiraConfig(server_url="https://example.atlassian.net/").server_url == "https://example.atlassian.net"
