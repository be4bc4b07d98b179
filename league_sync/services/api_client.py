"""Async HTTP client for the remote leaderboard service."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from league_sync.config import settings
from league_sync.schemas.leaderboard import (
    HistoryPage,
    HistoryResponse,
    League,
    LeaderboardResponse,
    LeaderboardSnapshot,
    OptOutRequest,
    OptOutResponse,
    OptOutResult,
    UserLeaderboardStatus,
    UserStatusResponse,
)
from league_sync.utils.errors import (
    InvalidPayloadError,
    ServiceRejectedError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)


def build_http_client(base_url: str | None = None) -> httpx.AsyncClient:
    """Return an ``httpx.AsyncClient`` configured from settings."""
    max_connections = max(1, settings.http_max_connections)
    timeout_seconds = max(1.0, settings.http_timeout_seconds)
    return httpx.AsyncClient(
        base_url=base_url or settings.api_base_url,
        timeout=httpx.Timeout(timeout_seconds),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_connections,
        ),
    )


class LeaderboardClient:
    """Typed wrapper around the leaderboard service endpoints.

    Every call returns the envelope's ``data`` or raises:

    * ``ServiceUnavailableError`` when the transport fails,
    * ``InvalidPayloadError`` when the body is not a valid envelope,
    * ``ServiceRejectedError`` when the service answers ``success: false``.

    Non-2xx statuses are not errors by themselves; the service reports
    logical failures in the body.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self._owns_http = http_client is None
        self.http = http_client or build_http_client(base_url)

    async def _request(
        self,
        method: str,
        path: str,
        envelope: type[BaseModel],
        **kwargs: Any,
    ) -> Any:
        try:
            response = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Leaderboard service request %s %s failed: %s", method, path, exc)
            raise ServiceUnavailableError(str(exc) or "Leaderboard service unavailable") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise InvalidPayloadError(
                f"Non-JSON response from {path} (HTTP {response.status_code})"
            ) from exc

        try:
            parsed = envelope.model_validate(body)
        except ValidationError as exc:
            raise InvalidPayloadError(f"Malformed response from {path}") from exc

        if not parsed.success:
            raise ServiceRejectedError(parsed.message)
        if parsed.data is None:
            raise InvalidPayloadError(f"Response from {path} has no data")
        return parsed.data

    async def get_leaderboard(
        self, user_id: str, league: League | None = None
    ) -> LeaderboardSnapshot:
        """Fetch a leaderboard page, for the user's own league by default."""
        path = f"/leaderboard/{League(league).value}" if league else "/leaderboard"
        return await self._request(
            "GET", path, LeaderboardResponse, params={"userId": user_id}
        )

    async def get_user_status(self, user_id: str) -> UserLeaderboardStatus:
        """Fetch the user's leaderboard standing."""
        return await self._request(
            "GET", "/leaderboard/user/status", UserStatusResponse, params={"userId": user_id}
        )

    async def set_opt_in(self, user_id: str, opt_in: bool) -> OptOutResult:
        """Opt the user in to (``True``) or out of (``False``) leaderboards."""
        body = OptOutRequest(user_id=user_id, opt_in=opt_in)
        return await self._request(
            "POST",
            "/leaderboard/opt-out",
            OptOutResponse,
            json=body.model_dump(by_alias=True),
        )

    async def get_history(self, user_id: str, limit: int = 10) -> HistoryPage:
        """Fetch the most recent weekly results for the user."""
        return await self._request(
            "GET",
            "/leaderboard/user/history",
            HistoryResponse,
            params={"userId": user_id, "limit": limit},
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client when this wrapper created it."""
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> LeaderboardClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
