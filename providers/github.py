"""GitHub issues over the REST API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import httpx

from config.settings import settings
from providers.base import PAYLOAD_SHAPE_ERRORS, ProviderClient
from schemas.issue_schemas import ProviderId, UnifiedCreateParams, UnifiedIssue, UnifiedListQuery, UnifiedTarget
from tools.error_handler import ValidationError

REPOSITORY_PAGE_SIZE = 100


def parse_repo(repo: str) -> Tuple[str, str]:
    """Split ``owner/name`` into its two parts."""
    owner, _, name = repo.strip().partition("/")
    if not owner:
        raise ValidationError("repository owner missing", detail=f"expected owner/name, got '{repo}'")
    if not name or "/" in name:
        raise ValidationError("repository name missing", detail=f"expected owner/name, got '{repo}'")
    return owner, name


def _is_pull_request(item: Any) -> bool:
    return isinstance(item, dict) and "pull_request" in item


class GitHubClient(ProviderClient):
    provider = ProviderId.GITHUB

    def __init__(self, token: str, default_repo: Optional[str] = None, http: Optional[httpx.Client] = None):
        super().__init__(token, http)
        self.default_repo = default_repo

    def _resolve_repo(self, override_repo: Optional[str]) -> Tuple[str, str]:
        repo = override_repo or self.default_repo
        if not repo:
            raise ValidationError("repository is required", detail="pass --repo owner/name or set a default repo")
        return parse_repo(repo)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }

    def list_issues(self, query: UnifiedListQuery) -> List[UnifiedIssue]:
        owner, repo = self._resolve_repo(query.repo)
        payload = self._request_list(
            "GET",
            f"{settings.github_api_url}/repos/{owner}/{repo}/issues",
            params={"state": "open", "per_page": settings.list_page_size},
            headers=self._headers(),
        )
        # The issues endpoint also returns pull requests.
        return [self._map_issue(item) for item in payload if not _is_pull_request(item)]

    def create_issue(self, params: UnifiedCreateParams) -> UnifiedIssue:
        owner, repo = self._resolve_repo(params.repo)
        body: Dict[str, Any] = {"title": params.title}
        if params.body is not None:
            body["body"] = params.body
        payload = self._request(
            "POST",
            f"{settings.github_api_url}/repos/{owner}/{repo}/issues",
            json=body,
            headers=self._headers(),
        )
        if not isinstance(payload, dict):
            raise self._malformed(payload)
        return self._map_issue(payload)

    def list_repositories(self) -> List[UnifiedTarget]:
        """Repositories the token can see, most recently updated first."""
        payload = self._request_list(
            "GET",
            f"{settings.github_api_url}/user/repos",
            params={"per_page": REPOSITORY_PAGE_SIZE, "sort": "updated"},
            headers=self._headers(),
        )
        return [self._map_repository(item) for item in payload]

    def list_targets(self, query: UnifiedListQuery) -> List[UnifiedTarget]:
        return self.list_repositories()

    def _map_issue(self, value: Dict[str, Any]) -> UnifiedIssue:
        try:
            number = value.get("number")
            issue_id = str(number) if number is not None else str(value.get("id", ""))
            return UnifiedIssue(
                id=issue_id,
                title=value.get("title") or "untitled",
                state=value.get("state") or "unknown",
                url=value.get("html_url"),
                provider=ProviderId.GITHUB,
                raw_payload=value,
            )
        except PAYLOAD_SHAPE_ERRORS as exc:
            raise self._malformed(exc) from exc

    def _map_repository(self, value: Dict[str, Any]) -> UnifiedTarget:
        try:
            full_name = value.get("full_name") or ""
            return UnifiedTarget(
                id=full_name,
                name=full_name,
                kind="repository",
                url=value.get("html_url"),
                provider=ProviderId.GITHUB,
                raw_payload=value,
            )
        except PAYLOAD_SHAPE_ERRORS as exc:
            raise self._malformed(exc) from exc
