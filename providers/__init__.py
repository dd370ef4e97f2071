"""Provider client exports."""

from __future__ import annotations

from typing import Optional

import httpx

from schemas.config_schemas import Config
from schemas.issue_schemas import ProviderId

from .base import ProviderClient
from .github import GitHubClient
from .jira import JiraClient
from .linear import LinearClient
from .trello import TrelloClient


def build_client(
    provider: ProviderId,
    token: str,
    config: Config,
    http: Optional[httpx.Client] = None,
) -> ProviderClient:
    """Instantiate the client for ``provider`` with the configured defaults."""
    unified = config.unified
    if provider is ProviderId.GITHUB:
        return GitHubClient(token, default_repo=unified.default_repo, http=http)
    if provider is ProviderId.LINEAR:
        return LinearClient(token, default_workspace=unified.default_workspace, http=http)
    if provider is ProviderId.TRELLO:
        return TrelloClient(token, api_key=unified.trello.api_key, default_board=unified.trello.default_board, http=http)
    if provider is ProviderId.JIRA:
        return JiraClient(
            token,
            server_url=unified.jira.server_url,
            email=unified.jira.email,
            default_project=unified.jira.default_project,
            http=http,
        )
    raise ValueError(f"unknown provider '{provider}'")


__all__ = [
    "build_client",
    "GitHubClient",
    "JiraClient",
    "LinearClient",
    "ProviderClient",
    "TrelloClient",
]
