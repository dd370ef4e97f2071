"""Trello cards over the REST API, exposed as issues."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from config.settings import settings
from providers.base import PAYLOAD_SHAPE_ERRORS, ProviderClient
from schemas.issue_schemas import ProviderId, UnifiedCreateParams, UnifiedIssue, UnifiedListQuery, UnifiedTarget
from tools.error_handler import CredentialsError, ProviderError, ValidationError


class TrelloClient(ProviderClient):
    """Cards are issues; the list a card sits in is its state."""

    provider = ProviderId.TRELLO

    def __init__(
        self,
        token: str,
        api_key: Optional[str],
        default_board: Optional[str] = None,
        http: Optional[httpx.Client] = None,
    ):
        if not api_key:
            raise CredentialsError(
                "Trello API key is required",
                detail="run `kirei init --trello-api-key ...`",
            )
        super().__init__(token, http)
        self.api_key = api_key
        self.default_board = default_board

    def _auth_params(self) -> Dict[str, str]:
        return {"key": self.api_key, "token": self.token}

    def _resolve_board(self, override_board: Optional[str]) -> str:
        board = override_board or self.default_board
        if not board:
            raise ValidationError("Trello board is required", detail="pass --board BOARD_ID or set a default board")
        return board

    def _lists(self, board_id: str) -> List[Dict[str, Any]]:
        lists = self._request_list("GET", f"{settings.trello_api_url}/boards/{board_id}/lists", params=self._auth_params())
        if not all(isinstance(item, dict) for item in lists):
            raise self._malformed(lists)
        return lists

    def _list_names(self, lists: List[Dict[str, Any]]) -> Dict[Any, Any]:
        try:
            return {item.get("id"): item.get("name") for item in lists}
        except TypeError as exc:
            raise self._malformed(exc) from exc

    def list_issues(self, query: UnifiedListQuery) -> List[UnifiedIssue]:
        board_id = self._resolve_board(query.board)
        cards = self._request_list("GET", f"{settings.trello_api_url}/boards/{board_id}/cards", params=self._auth_params())
        list_names = self._list_names(self._lists(board_id))
        return [self._map_card(card, list_names) for card in cards]

    def create_issue(self, params: UnifiedCreateParams) -> UnifiedIssue:
        board_id = self._resolve_board(params.board)
        lists = self._lists(board_id)
        if not lists:
            raise ProviderError("No lists found on board", detail=board_id)
        first_list = lists[0]

        card_params = {**self._auth_params(), "name": params.title, "idList": first_list.get("id")}
        if params.body is not None:
            card_params["desc"] = params.body

        card = self._request("POST", f"{settings.trello_api_url}/cards", params=card_params)
        if not isinstance(card, dict):
            raise self._malformed(card)
        card.setdefault("idList", first_list.get("id"))
        return self._map_card(card, self._list_names([first_list]))

    def list_boards(self) -> List[UnifiedTarget]:
        boards = self._request_list("GET", f"{settings.trello_api_url}/members/me/boards", params=self._auth_params())
        return [self._map_target(board, "board") for board in boards]

    def list_lists(self, board: Optional[str] = None) -> List[UnifiedTarget]:
        return [self._map_target(item, "list") for item in self._lists(self._resolve_board(board))]

    def list_targets(self, query: UnifiedListQuery) -> List[UnifiedTarget]:
        """Boards, or the lists of the board named with ``--board``."""
        if query.board:
            return self.list_lists(query.board)
        return self.list_boards()

    def _map_card(self, value: Dict[str, Any], list_names: Dict[Any, Any]) -> UnifiedIssue:
        try:
            return UnifiedIssue(
                id=value.get("id") or "",
                title=value.get("name") or "untitled",
                state=list_names.get(value.get("idList")) or "unknown",
                url=value.get("url"),
                provider=ProviderId.TRELLO,
                raw_payload=value,
            )
        except PAYLOAD_SHAPE_ERRORS as exc:
            raise self._malformed(exc) from exc

    def _map_target(self, value: Dict[str, Any], kind: str) -> UnifiedTarget:
        try:
            return UnifiedTarget(
                id=value.get("id") or "",
                name=value.get("name") or "unnamed",
                kind=kind,
                url=value.get("url"),
                provider=ProviderId.TRELLO,
                raw_payload=value,
            )
        except PAYLOAD_SHAPE_ERRORS as exc:
            raise self._malformed(exc) from exc
