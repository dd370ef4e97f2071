"""Persisted configuration record."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.issue_schemas import ProviderId


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _parse_provider(value: Any) -> ProviderId:
    if isinstance(value, ProviderId):
        return value
    return ProviderId.parse(str(value))


class TrelloConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    api_key: Optional[str] = None
    default_board: Optional[str] = None

    @field_validator("api_key", "default_board")
    @classmethod
    def strip_values(cls, value: Optional[str]) -> Optional[str]:
        return _clean_optional(value)


class JiraConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    server_url: Optional[str] = None
    email: Optional[str] = None
    default_project: Optional[str] = None

    @field_validator("server_url")
    @classmethod
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        cleaned = _clean_optional(value)
        return cleaned.rstrip("/") if cleaned else None


class UnifiedConfig(BaseModel):
    """Provider defaults and stored credentials."""

    model_config = ConfigDict(extra="ignore")

    default_provider: ProviderId = ProviderId.GITHUB
    default_repo: Optional[str] = None
    default_workspace: Optional[str] = None
    tokens: Dict[ProviderId, str] = Field(default_factory=dict)
    trello: TrelloConfig = Field(default_factory=TrelloConfig)
    jira: JiraConfig = Field(default_factory=JiraConfig)

    @field_validator("default_provider", mode="before")
    @classmethod
    def parse_default_provider(cls, value: Any) -> Any:
        try:
            return _parse_provider(value)
        except ValueError:
            return ProviderId.GITHUB

    @field_validator("tokens", mode="before")
    @classmethod
    def parse_token_providers(cls, value: Any) -> Dict[ProviderId, str]:
        # Unknown providers and non-string tokens are dropped instead of rejecting the record.
        if not isinstance(value, dict):
            return {}
        tokens: Dict[ProviderId, str] = {}
        for key, token in value.items():
            if not isinstance(token, str):
                continue
            try:
                tokens[_parse_provider(key)] = token
            except ValueError:
                continue
        return tokens

    @field_validator("tokens")
    @classmethod
    def drop_blank_tokens(cls, value: Dict[ProviderId, str]) -> Dict[ProviderId, str]:
        return {provider: token.strip() for provider, token in value.items() if token.strip()}


class Config(BaseModel):
    """The single record kept in the config file.

    ``user_name`` is the only field the example commands need; a missing
    value is valid and readers fall back to the default greeting name.
    """

    model_config = ConfigDict(extra="ignore")

    user_name: Optional[str] = None
    unified: UnifiedConfig = Field(default_factory=UnifiedConfig)

    @field_validator("user_name")
    @classmethod
    def normalize_user_name(cls, value: Optional[str]) -> Optional[str]:
        return _clean_optional(value)

    def masked_dump(self) -> Dict[str, Any]:
        """JSON-ready dump with stored tokens masked down to their last four characters."""
        payload = self.model_dump(mode="json")
        payload["unified"]["tokens"] = {
            provider: _mask(token) for provider, token in payload["unified"]["tokens"].items()
        }
        trello = payload["unified"]["trello"]
        if trello.get("api_key"):
            trello["api_key"] = _mask(trello["api_key"])
        return payload


def _mask(secret: str) -> str:
    if len(secret) <= 4:
        return "*" * len(secret)
    return "*" * (len(secret) - 4) + secret[-4:]
