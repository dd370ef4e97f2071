"""Jira Cloud issues over the REST API (v3)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from config.settings import settings
from providers.base import PAYLOAD_SHAPE_ERRORS, ProviderClient
from schemas.issue_schemas import ProviderId, UnifiedCreateParams, UnifiedIssue, UnifiedListQuery, UnifiedTarget
from tools.error_handler import CredentialsError, ValidationError


def build_description(text: str) -> Dict[str, Any]:
    """Wrap plain text in an Atlassian Document Format paragraph."""
    return {
        "type": "doc",
        "version": 1,
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": text}]}],
    }


ISSUE_FIELDS = "summary,status"


class JiraClient(ProviderClient):
    provider = ProviderId.JIRA

    def __init__(
        self,
        token: str,
        server_url: Optional[str],
        email: Optional[str],
        default_project: Optional[str] = None,
        http: Optional[httpx.Client] = None,
    ):
        if not server_url:
            raise CredentialsError("Jira server URL is required", detail="run `kirei init --jira-server-url ...`")
        if not email:
            raise CredentialsError("Jira account email is required", detail="run `kirei init --jira-email ...`")
        super().__init__(token, http)
        self.server_url = server_url.rstrip("/")
        self.email = email
        self.default_project = default_project

    def _resolve_project(self, override_project: Optional[str]) -> str:
        project = override_project or self.default_project
        if not project:
            raise ValidationError("Jira project is required", detail="pass --project KEY or set a default project")
        return project

    def _auth(self) -> httpx.BasicAuth:
        return httpx.BasicAuth(self.email, self.token)

    def list_issues(self, query: UnifiedListQuery) -> List[UnifiedIssue]:
        project_key = self._resolve_project(query.project)
        jql = f'project = "{project_key}" AND statusCategory != Done ORDER BY created DESC'
        body = self._request(
            "GET",
            f"{self.server_url}/rest/api/3/search/jql",
            params={"jql": jql, "maxResults": settings.list_page_size, "fields": ISSUE_FIELDS},
            headers={"Accept": "application/json"},
            auth=self._auth(),
        )
        if not isinstance(body, dict) or not isinstance(body.get("issues", []), list):
            raise self._malformed(body)
        return [self._map_issue(issue) for issue in body.get("issues", [])]

    def create_issue(self, params: UnifiedCreateParams) -> UnifiedIssue:
        project_key = self._resolve_project(params.project)
        fields: Dict[str, Any] = {
            "project": {"key": project_key},
            "summary": params.title,
            "issuetype": {"name": "Task"},
        }
        if params.body is not None:
            fields["description"] = build_description(params.body)

        created = self._request(
            "POST",
            f"{self.server_url}/rest/api/3/issue",
            json={"fields": fields},
            headers={"Accept": "application/json"},
            auth=self._auth(),
        )
        if not isinstance(created, dict) or not created.get("key"):
            raise self._malformed(created)
        # The create endpoint only echoes id/key/self.
        created.setdefault("fields", {"summary": params.title})
        return self._map_issue(created)

    def list_projects(self) -> List[UnifiedTarget]:
        projects = self._request_list(
            "GET",
            f"{self.server_url}/rest/api/3/project",
            headers={"Accept": "application/json"},
            auth=self._auth(),
        )
        return [self._map_project(project) for project in projects]

    def list_targets(self, query: UnifiedListQuery) -> List[UnifiedTarget]:
        return self.list_projects()

    def _map_issue(self, value: Dict[str, Any]) -> UnifiedIssue:
        try:
            fields = value.get("fields") or {}
            status = fields.get("status") or {}
            key = value.get("key")
            return UnifiedIssue(
                id=key or value.get("id") or "",
                title=fields.get("summary") or "untitled",
                state=status.get("name") or "unknown",
                url=f"{self.server_url}/browse/{key}" if key else None,
                provider=ProviderId.JIRA,
                raw_payload=value,
            )
        except PAYLOAD_SHAPE_ERRORS as exc:
            raise self._malformed(exc) from exc

    def _map_project(self, value: Dict[str, Any]) -> UnifiedTarget:
        try:
            key = value.get("key")
            return UnifiedTarget(
                id=key or value.get("id") or "",
                name=value.get("name") or "unnamed",
                kind="project",
                url=f"{self.server_url}/browse/{key}" if key else None,
                provider=ProviderId.JIRA,
                raw_payload=value,
            )
        except PAYLOAD_SHAPE_ERRORS as exc:
            raise self._malformed(exc) from exc
