"""List/create pipelines over a provider client."""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from providers import ProviderClient, build_client
from schemas.config_schemas import Config
from schemas.issue_schemas import ProviderId, UnifiedCreateParams, UnifiedIssue, UnifiedListQuery, UnifiedTarget
from tools.token_resolver import resolve_token

logger = logging.getLogger(__name__)


def open_client(provider: ProviderId, config: Config, http: Optional[httpx.Client] = None) -> ProviderClient:
    token = resolve_token(provider, config)
    return build_client(provider, token, config, http=http)


def execute_list_pipeline(client: ProviderClient, query: UnifiedListQuery) -> List[UnifiedIssue]:
    issues = client.list_issues(query)
    if query.search and query.search.strip():
        needle = query.search.strip().casefold()
        issues = [issue for issue in issues if needle in issue.title.casefold()]
    logger.info("Listed %d %s issue(s)", len(issues), client.provider.display_name)
    return issues


def execute_targets_pipeline(client: ProviderClient, query: UnifiedListQuery) -> List[UnifiedTarget]:
    targets = client.list_targets(query)
    logger.info("Listed %d %s target(s)", len(targets), client.provider.display_name)
    return targets


def execute_create_pipeline(client: ProviderClient, params: UnifiedCreateParams) -> UnifiedIssue:
    issue = client.create_issue(params)
    logger.info("Created %s issue %s", client.provider.display_name, issue.id)
    return issue
