"""
HTTP wrapper around the remote move authority.

Stateless: every method is one request/response exchange and returns data for
the controller to apply. Nothing here touches the session store.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from chess_client.config import Settings
from chess_client.errors import AuthorityUnavailableError, MoveRejectedError
from chess_client.models import GameMode, PromotionChoice, SessionState
from chess_client.schemas import LegalTargets, ModeRequest, MoveRequest, SnapshotPayload
from chess_client.squares import Coordinate, to_name

logger = logging.getLogger(__name__)


class PromotionRequired:
    """Sentinel answer: the authority wants a piece choice before applying the move."""

    def __repr__(self) -> str:
        return "PROMOTION_REQUIRED"


PROMOTION_REQUIRED = PromotionRequired()


class AuthorityClient:
    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        if http_client is None:
            http_client = httpx.AsyncClient(
                base_url=self.settings.authority_url,
                timeout=self.settings.timeout,
                transport=transport,
            )
        self._http = http_client

    async def __aenter__(self) -> "AuthorityClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---- Operations ----
    async def query_legal_targets(self, coord: Coordinate) -> list[Coordinate]:
        """Legal destinations for the piece on `coord`; [] on any failure."""
        square = to_name(coord)
        try:
            data = await self._request("GET", f"/legal_moves/{square}")
        except (AuthorityUnavailableError, MoveRejectedError) as e:
            logger.debug(f"Legal move query for {square} failed: {e}")
            return []
        if not data:
            return []
        try:
            return LegalTargets.validate_python(data)
        except ValidationError as e:
            logger.debug(f"Legal move query for {square} returned junk: {e}")
            return []

    async def submit_move(
        self,
        source: str,
        target: str,
        promotion: PromotionChoice | str | None = None,
    ) -> SessionState | PromotionRequired:
        body = MoveRequest(move=f"{source}{target}", promotion=promotion)
        data = await self._request("POST", "/move", json=body.model_dump(mode="json"))
        if isinstance(data, dict) and data.get("promotionNeeded"):
            return PROMOTION_REQUIRED
        return self._snapshot(data)

    async def undo_last_move(self) -> SessionState:
        return self._snapshot(await self._request("POST", "/undo"))

    async def request_ai_move(self) -> SessionState:
        return self._snapshot(await self._request("POST", "/ai_move"))

    async def reset_game(self) -> None:
        await self._request("POST", "/reset")

    async def set_mode(self, mode: GameMode) -> None:
        body = ModeRequest(mode=mode)
        await self._request("POST", "/set_game_mode", json=body.model_dump(mode="json"))

    # ---- Internal helpers ----
    async def _request(self, method: str, url: str, json: Any = None) -> Any:
        try:
            response = await self._http.request(method, url, json=json)
        except httpx.HTTPError as e:
            raise AuthorityUnavailableError(f"{method} {url}: {e!r}") from e

        if response.is_error:
            raise MoveRejectedError(response.status_code, _detail(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise AuthorityUnavailableError(f"{method} {url}: body is not JSON") from e

    @staticmethod
    def _snapshot(data: Any) -> SessionState:
        try:
            return SnapshotPayload.model_validate(data).to_state()
        except (ValidationError, ValueError) as e:
            raise AuthorityUnavailableError(f"Unreadable snapshot: {e}") from e


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)
