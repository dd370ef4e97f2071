"""Shared HTTP plumbing for provider clients."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from schemas.issue_schemas import ProviderId, UnifiedCreateParams, UnifiedIssue, UnifiedListQuery, UnifiedTarget
from tools.error_handler import NetworkError, ProviderError

logger = logging.getLogger(__name__)

# Raised while mapping a payload whose shape does not match the provider's schema.
PAYLOAD_SHAPE_ERRORS = (PydanticValidationError, AttributeError, TypeError)


class ProviderClient(ABC):
    """List and create issues on one provider."""

    provider: ProviderId

    def __init__(self, token: str, http: Optional[httpx.Client] = None):
        self.token = token
        self._owns_http = http is None
        self.http = http or httpx.Client(
            timeout=settings.http_timeout,
            headers={"User-Agent": settings.user_agent},
        )

    @abstractmethod
    def list_issues(self, query: UnifiedListQuery) -> List[UnifiedIssue]:
        ...

    @abstractmethod
    def create_issue(self, params: UnifiedCreateParams) -> UnifiedIssue:
        ...

    @abstractmethod
    def list_targets(self, query: UnifiedListQuery) -> List[UnifiedTarget]:
        """Repositories, teams, boards or projects the other calls can be scoped to."""

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "ProviderClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _malformed(self, detail: Any) -> ProviderError:
        return ProviderError(f"{self.provider.display_name} response is malformed", detail=str(detail))

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body."""
        name = self.provider.display_name
        logger.debug("%s %s %s", name, method, url)
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise NetworkError(f"{name} request failed", detail=str(exc)) from exc

        if response.status_code >= 400:
            raise ProviderError(
                f"{name} returned HTTP {response.status_code}",
                detail=response.text,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise self._malformed(response.text) from exc

    def _request_list(self, method: str, url: str, **kwargs: Any) -> List[Any]:
        payload = self._request(method, url, **kwargs)
        if not isinstance(payload, list):
            raise self._malformed(payload)
        return payload
