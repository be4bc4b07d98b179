"""Print a user's weekly leaderboard and optionally keep polling it."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

LEAGUES = ["bronze", "silver", "gold", "diamond"]
TREND_MARKS = {"up": "+", "down": "-", "same": "="}


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Show the weekly leaderboard around a user.",
    )
    parser.add_argument(
        "user_id",
        type=str,
        help="User whose leaderboard should be shown.",
    )
    parser.add_argument(
        "--league",
        type=str,
        default=None,
        choices=LEAGUES,
        help="League to show (default: the user's current league).",
    )
    parser.add_argument(
        "--range",
        dest="context_range",
        type=int,
        default=2,
        help="Rows to show above and below the user (default: 2).",
    )
    parser.add_argument(
        "--poll-seconds",
        type=float,
        default=0,
        help="Keep polling at this interval until interrupted (default: off).",
    )
    return parser.parse_args()


def render(engine, context_range: int) -> str:
    """Render the nearby-competitor window as plain text."""
    from league_sync.services.zone_service import Zone, projected_league, row_zones

    board = engine.leaderboard
    if board is None:
        return "No leaderboard available."

    zones = {row.entry.rank: row.zone for row in row_zones(board)}
    lines = [
        f"{board.league.value.title()} league, rank {board.user_rank}/{board.total_in_league}"
        f" - resets in {engine.format_time_until_reset()}"
    ]
    if board.user_rank:
        landing = projected_league(board.user_rank, board.total_in_league, board.league)
        if landing is not board.league:
            lines.append(f"On track for {landing.value.title()}")
    if engine.error:
        lines.append(f"(offline: {engine.error})")
    for entry in engine.get_user_context(context_range):
        zone = zones.get(entry.rank, Zone.SAFE)
        marker = ">" if entry.is_current_user else " "
        lines.append(
            f"{marker} {entry.rank:>3}  {entry.username:<16} {entry.weekly_xp:>6} XP"
            f"  {TREND_MARKS[entry.trend.value]}  {zone.value}"
        )
    return "\n".join(lines)


def start_polling(engine, league: str | None, poll_seconds: float) -> bool:
    """Hand refreshes to the engine's poll job where it can serve them.

    The poll job always fetches the user's own league, so a ``--league``
    watch keeps fetching itself. Returns True when the caller must fetch.
    """
    if poll_seconds <= 0:
        return False
    if league is not None:
        return True
    engine.set_polling(True, interval_ms=max(1, int(poll_seconds * 1000)))
    return False


async def watch(user_id: str, league: str | None, context_range: int, poll_seconds: float) -> None:
    """Fetch once, then keep printing on every poll tick until cancelled."""
    from league_sync.config import settings
    from league_sync.services.api_client import LeaderboardClient
    from league_sync.services.event_bus import default_event_bus
    from league_sync.services.sync_engine import LeaderboardSyncEngine
    from league_sync.utils.logging import configure_logging

    configure_logging(settings.log_level)

    async with LeaderboardClient() as client:
        engine = LeaderboardSyncEngine(
            user_id,
            client,
            default_event_bus(),
            auto_fetch=False,
            enable_polling=False,
        )
        async with engine:
            await asyncio.gather(engine.fetch_leaderboard(league), engine.fetch_user_status())
            print(render(engine, context_range))
            fetch_here = start_polling(engine, league, poll_seconds)
            while poll_seconds > 0:
                await asyncio.sleep(poll_seconds)
                if fetch_here:
                    await engine.fetch_leaderboard(league)
                print()
                print(render(engine, context_range))


def main() -> None:
    """CLI entry point."""
    args = parse_args()
    try:
        asyncio.run(watch(args.user_id, args.league, args.context_range, args.poll_seconds))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
