"""Linear issues over the GraphQL API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from config.settings import settings
from providers.base import PAYLOAD_SHAPE_ERRORS, ProviderClient
from schemas.issue_schemas import ProviderId, UnifiedCreateParams, UnifiedIssue, UnifiedListQuery, UnifiedTarget
from tools.error_handler import ProviderError, ValidationError

ISSUE_FIELDS = """
    id
    identifier
    title
    description
    url
    state {
        name
    }
"""

LIST_ISSUES_QUERY = f"""
query Issues($first: Int!, $filter: IssueFilter) {{
    issues(first: $first, filter: $filter) {{
        nodes {{{ISSUE_FIELDS}}}
    }}
}}
"""

CREATE_ISSUE_MUTATION = f"""
mutation IssueCreate($input: IssueCreateInput!) {{
    issueCreate(input: $input) {{
        success
        issue {{{ISSUE_FIELDS}}}
    }}
}}
"""

LIST_TEAMS_QUERY = """
query Teams($first: Int!) {
    teams(first: $first) {
        nodes {
            id
            name
            key
        }
    }
}
"""


class LinearClient(ProviderClient):
    provider = ProviderId.LINEAR

    def __init__(self, token: str, default_workspace: Optional[str] = None, http: Optional[httpx.Client] = None):
        super().__init__(token, http)
        self.default_workspace = default_workspace

    def _workspace(self, override_workspace: Optional[str]) -> Optional[str]:
        return override_workspace or self.default_workspace

    def _graphql(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        body = self._request(
            "POST",
            settings.linear_graphql_url,
            json={"query": query, "variables": variables},
            headers={"Authorization": f"Bearer {self.token}"},
        )
        if not isinstance(body, dict):
            raise self._malformed(body)
        errors = body.get("errors")
        if errors:
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error) for error in errors
            )
            raise ProviderError("Linear rejected the request", detail=messages)
        data = body.get("data")
        if not isinstance(data, dict):
            raise self._malformed(body)
        return data

    @staticmethod
    def _nodes(data: Dict[str, Any], field: str) -> Any:
        connection = data.get(field)
        return connection.get("nodes") if isinstance(connection, dict) else None

    def list_issues(self, query: UnifiedListQuery) -> List[UnifiedIssue]:
        issue_filter: Dict[str, Any] = {"state": {"type": {"neq": "completed"}}}
        team_id = self._workspace(query.workspace)
        if team_id:
            issue_filter["team"] = {"id": {"eq": team_id}}

        data = self._graphql(LIST_ISSUES_QUERY, {"first": settings.list_page_size, "filter": issue_filter})
        nodes = self._nodes(data, "issues")
        if not isinstance(nodes, list):
            raise self._malformed(data)
        return [self._map_node(node) for node in nodes]

    def create_issue(self, params: UnifiedCreateParams) -> UnifiedIssue:
        team_id = self._workspace(params.workspace)
        if not team_id:
            raise ValidationError(
                "Linear team is required to create issues",
                detail="pass --workspace TEAM_ID or set a default workspace",
            )

        issue_input: Dict[str, Any] = {"title": params.title, "teamId": team_id}
        if params.body is not None:
            issue_input["description"] = params.body

        data = self._graphql(CREATE_ISSUE_MUTATION, {"input": issue_input})
        result = data.get("issueCreate")
        if not isinstance(result, dict):
            raise self._malformed(data)
        issue = result.get("issue")
        if not result.get("success") or not isinstance(issue, dict):
            raise ProviderError("Linear did not create the issue", detail=str(data))
        return self._map_node(issue)

    def list_teams(self) -> List[UnifiedTarget]:
        data = self._graphql(LIST_TEAMS_QUERY, {"first": settings.list_page_size})
        nodes = self._nodes(data, "teams")
        if not isinstance(nodes, list):
            raise self._malformed(data)
        return [self._map_team(node) for node in nodes]

    def list_targets(self, query: UnifiedListQuery) -> List[UnifiedTarget]:
        return self.list_teams()

    def _map_node(self, value: Dict[str, Any]) -> UnifiedIssue:
        try:
            state = value.get("state") or {}
            return UnifiedIssue(
                id=value.get("identifier") or value.get("id") or "",
                title=value.get("title") or "untitled",
                state=state.get("name") or "unknown",
                url=value.get("url"),
                provider=ProviderId.LINEAR,
                raw_payload=value,
            )
        except PAYLOAD_SHAPE_ERRORS as exc:
            raise self._malformed(exc) from exc

    def _map_team(self, value: Dict[str, Any]) -> UnifiedTarget:
        try:
            return UnifiedTarget(
                id=value.get("id") or "",
                name=value.get("name") or value.get("key") or "unnamed",
                kind="team",
                provider=ProviderId.LINEAR,
                raw_payload=value,
            )
        except PAYLOAD_SHAPE_ERRORS as exc:
            raise self._malformed(exc) from exc
