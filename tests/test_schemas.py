"""Leaderboard schema tests."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from league_sync.schemas.leaderboard import (
    League,
    LeaderboardResponse,
    LeaderboardSnapshot,
    OptOutRequest,
    RankTrend,
    UserLeaderboardStatus,
)


def _payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "league": "gold",
        "entries": [
            {
                "rank": 1,
                "userId": "a",
                "username": "Ada",
                "weeklyXP": 900,
                "league": "gold",
                "trend": "up",
                "trendAmount": 2,
                "isCurrentUser": False,
            },
            {
                "rank": 2,
                "userId": "b",
                "username": "Bo",
                "weeklyXP": 850,
                "league": "gold",
                "trend": "same",
                "isCurrentUser": True,
            },
        ],
        "userRank": 2,
        "totalInLeague": 30,
        "promotionZone": False,
        "demotionZone": False,
        "timeUntilReset": 3600,
        "weekStartDate": "2026-10-12T00:00:00Z",
        "weekEndDate": "2026-10-19T00:00:00Z",
    }
    payload.update(overrides)
    return payload


def test_snapshot_parses_camel_case_wire_format() -> None:
    snapshot = LeaderboardSnapshot.model_validate(_payload())

    assert snapshot.league is League.GOLD
    assert snapshot.entries[0].weekly_xp == 900
    assert snapshot.entries[0].trend is RankTrend.UP
    assert snapshot.current_user_index() == 1
    assert snapshot.total_in_league == 30


def test_snapshot_dumps_camel_case() -> None:
    dumped = LeaderboardSnapshot.model_validate(_payload()).model_dump(by_alias=True, mode="json")
    assert dumped["entries"][1]["weeklyXP"] == 850
    assert dumped["entries"][1]["isCurrentUser"] is True
    assert dumped["totalInLeague"] == 30


def test_snapshot_is_frozen() -> None:
    snapshot = LeaderboardSnapshot.model_validate(_payload())
    with pytest.raises(ValidationError):
        snapshot.user_rank = 1  # type: ignore[misc]


@pytest.mark.parametrize(
    "overrides",
    [
        {"league": "platinum"},
        {"totalInLeague": 1},
        {"weekEndDate": "2026-10-11T00:00:00Z"},
    ],
)
def test_snapshot_rejects_inconsistent_payloads(overrides: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        LeaderboardSnapshot.model_validate(_payload(**overrides))


def test_snapshot_accepts_elapsed_reset_countdown() -> None:
    """A pending reset arrives as a non-positive countdown and is kept as sent."""
    snapshot = LeaderboardSnapshot.model_validate(_payload(timeUntilReset=-5))
    assert snapshot.time_until_reset == -5


def test_snapshot_rejects_unordered_entries() -> None:
    payload = _payload()
    payload["entries"].reverse()
    with pytest.raises(ValidationError):
        LeaderboardSnapshot.model_validate(payload)


def test_snapshot_rejects_two_current_users() -> None:
    payload = _payload()
    payload["entries"][0]["isCurrentUser"] = True
    with pytest.raises(ValidationError):
        LeaderboardSnapshot.model_validate(payload)


def test_envelope_carries_failure_message() -> None:
    response = LeaderboardResponse.model_validate({"success": False, "message": "nope"})
    assert response.success is False
    assert response.data is None
    assert response.message == "nope"


def test_status_copy_leaves_original_untouched() -> None:
    status = UserLeaderboardStatus(
        user_id="u", league=League.SILVER, weekly_xp=10, current_rank=3
    )
    bumped = status.model_copy(update={"weekly_xp": 35})
    assert status.weekly_xp == 10
    assert bumped.weekly_xp == 35


def test_opt_out_request_body() -> None:
    body = OptOutRequest(user_id="u", opt_in=False).model_dump(by_alias=True)
    assert body == {"userId": "u", "optIn": False}
