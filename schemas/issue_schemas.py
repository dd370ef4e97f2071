"""Provider-neutral issue schemas shared by every provider client."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from config.settings import settings


class ProviderId(str, Enum):
    """Issue trackers the unified layer can talk to."""

    GITHUB = "github"
    LINEAR = "linear"
    TRELLO = "trello"
    JIRA = "jira"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def env_var(self) -> str:
        return settings.token_env_template.format(provider=self.value.upper())

    @classmethod
    def parse(cls, value: str) -> "ProviderId":
        cleaned = value.strip().lower()
        for provider in cls:
            if provider.value == cleaned:
                return provider
        raise ValueError(f"unknown provider '{value}'")


_DISPLAY_NAMES: Dict[ProviderId, str] = {
    ProviderId.GITHUB: "GitHub",
    ProviderId.LINEAR: "Linear",
    ProviderId.TRELLO: "Trello",
    ProviderId.JIRA: "Jira",
}


class UnifiedMode(str, Enum):
    INTERACTIVE = "interactive"
    LIST = "list"
    CREATE = "create"
    TARGETS = "targets"


class UnifiedIssue(BaseModel):
    """Issue, card or ticket normalized across providers."""

    id: str
    title: str
    state: str
    url: Optional[str] = None
    provider: ProviderId
    raw_payload: Dict[str, Any] = Field(default_factory=dict)

    def display_summary(self) -> str:
        return f"{self.provider.display_name} [{self.state}] {self.title} ({self.url or 'no-url'})"


class UnifiedTarget(BaseModel):
    """Something issues live in: a repository, team, board, board list or project."""

    id: str = Field(description="Value to pass to --repo, --workspace, --board or --project.")
    name: str
    kind: str
    url: Optional[str] = None
    provider: ProviderId
    raw_payload: Dict[str, Any] = Field(default_factory=dict)

    def display_summary(self) -> str:
        label = self.id if self.name == self.id else f"{self.id} {self.name}"
        return f"{self.provider.display_name} {self.kind} {label} ({self.url or 'no-url'})"


class UnifiedListQuery(BaseModel):
    """Scope for listing issues; unset fields fall back to configured defaults."""

    workspace: Optional[str] = Field(default=None, description="Linear team id.")
    repo: Optional[str] = Field(default=None, description="GitHub repository as owner/name.")
    board: Optional[str] = Field(default=None, description="Trello board id.")
    project: Optional[str] = Field(default=None, description="Jira project key.")
    search: Optional[str] = Field(default=None, description="Case-insensitive title filter.")


class UnifiedCreateParams(BaseModel):
    """Issue creation payload."""

    workspace: Optional[str] = None
    repo: Optional[str] = None
    board: Optional[str] = None
    project: Optional[str] = None
    title: str
    body: Optional[str] = None

    @field_validator("title")
    @classmethod
    def normalize_title(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Issue title cannot be empty")
        return cleaned

    @field_validator("body")
    @classmethod
    def drop_blank_body(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value
