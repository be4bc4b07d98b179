"""Pytest fixtures for league sync tests."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Callable

import httpx
import pytest

os.environ.setdefault("LEAGUE_SYNC_API_BASE_URL", "http://testserver/api/v1")
os.environ.setdefault("LEAGUE_SYNC_ENABLE_POLLING", "false")

from league_sync.schemas.leaderboard import League  # noqa: E402
from league_sync.services.api_client import LeaderboardClient  # noqa: E402
from league_sync.services.event_bus import EventBus  # noqa: E402
from league_sync.services.sync_engine import LeaderboardSyncEngine  # noqa: E402
from stub_service import BASE_URL, USER_ID, StubState, create_stub_app  # noqa: E402


@pytest.fixture
def stub_state() -> StubState:
    """Seven bronze members with ``USER_ID`` fifth by XP."""
    state = StubState()
    for index, xp in enumerate((900, 800, 700, 600, 500, 400, 300)):
        user_id = USER_ID if index == 4 else f"member-{index}"
        state.add(user_id, f"Player {index + 1}", League.BRONZE, xp)
    state.add("silver-1", "Silver One", League.SILVER, 1200)
    return state


@pytest.fixture
async def client(stub_state: StubState) -> AsyncIterator[LeaderboardClient]:
    """Client talking to the in-process stub service."""
    transport = httpx.ASGITransport(app=create_stub_app(stub_state))
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as http:
        yield LeaderboardClient(http_client=http)


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
async def offline_client() -> AsyncIterator[LeaderboardClient]:
    """Client whose every request fails at the transport level."""
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(_refuse), base_url=BASE_URL
    ) as http:
        yield LeaderboardClient(http_client=http)


@pytest.fixture
def bus() -> EventBus:
    return EventBus(history_size=10)


@pytest.fixture
async def make_engine(
    bus: EventBus,
) -> AsyncIterator[Callable[..., LeaderboardSyncEngine]]:
    """Factory for engines that are closed at teardown."""
    engines: list[LeaderboardSyncEngine] = []

    def factory(api: LeaderboardClient, **kwargs) -> LeaderboardSyncEngine:
        kwargs.setdefault("auto_fetch", False)
        engine = LeaderboardSyncEngine(kwargs.pop("user_id", USER_ID), api, bus, **kwargs)
        engines.append(engine)
        return engine

    yield factory
    for engine in engines:
        await engine.close()
