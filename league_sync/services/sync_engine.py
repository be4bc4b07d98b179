"""Leaderboard sync engine.

Keeps a local view of one user's leaderboard current: fetches snapshots and
status from the service, polls in the background, applies ``xp:earned``
events, and toggles opt-in. Public operations never raise; failures surface
through ``error`` or fallback data.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from enum import Enum

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from league_sync.config import settings
from league_sync.jobs.scheduler import (
    build_scheduler,
    cancel_leaderboard_poll,
    schedule_leaderboard_poll,
)
from league_sync.schemas.events import OPT_OUT_CHANGED, XP_EARNED, OptOutChanged, XPEarned
from league_sync.schemas.leaderboard import (
    League,
    LeaderboardEntry,
    LeaderboardSnapshot,
    UserLeaderboardStatus,
    WeeklyResult,
)
from league_sync.services.api_client import LeaderboardClient
from league_sync.services.event_bus import EventBus, Unsubscribe
from league_sync.services.fallback import fallback_snapshot, fallback_status
from league_sync.utils.errors import (
    InvalidPayloadError,
    ServiceRejectedError,
    ServiceUnavailableError,
)
from league_sync.utils.time import format_countdown

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch leaderboard"
CONNECT_FAILED = "Failed to connect to server"
PREFERENCE_FAILED = "Failed to update preference"
NO_SNAPSHOT = "..."
CONTEXT_FALLBACK_SIZE = 5

_TRANSPORT_ERRORS = (ServiceUnavailableError, InvalidPayloadError)


class SyncState(str, Enum):
    """Fetch lifecycle; ready and error are re-entered on every fetch."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class LeaderboardSyncEngine:
    """Per-user orchestrator over the leaderboard service.

    ``is_loading`` is shared by fetches and opt-out toggles, so a caller
    cannot tell which of the two is in flight. Fetches carry no sequence
    token: whichever fetch completes last owns ``leaderboard``.
    """

    def __init__(
        self,
        user_id: str,
        client: LeaderboardClient,
        event_bus: EventBus,
        scheduler: AsyncIOScheduler | None = None,
        auto_fetch: bool | None = None,
        enable_polling: bool | None = None,
        poll_interval_ms: int | None = None,
    ) -> None:
        self.user_id = user_id
        self.client = client
        self.event_bus = event_bus
        self.instance_id = uuid.uuid4().hex
        self.auto_fetch = settings.auto_fetch if auto_fetch is None else auto_fetch
        self.polling_enabled = settings.enable_polling if enable_polling is None else enable_polling
        if poll_interval_ms is None:
            poll_interval_ms = settings.poll_interval_ms
        elif poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be > 0")
        self.poll_interval_ms = poll_interval_ms

        self._owns_scheduler = scheduler is None
        self._scheduler_started = False
        self.scheduler = scheduler or build_scheduler()
        self._poll_job_id: str | None = None
        self._unsubscribe_xp: Unsubscribe | None = None
        self._started = False

        self.leaderboard: LeaderboardSnapshot | None = None
        self.user_status: UserLeaderboardStatus | None = None
        self.is_loading = False
        self.error: str | None = None
        self.state = SyncState.IDLE

    @property
    def is_opted_in(self) -> bool:
        """Return the user's participation flag, assuming opted in until known."""
        return self.user_status.is_opted_in if self.user_status else True

    # Lifecycle

    async def start(self) -> None:
        """Subscribe to XP events, fetch initial data and start polling."""
        if self._started:
            return
        self._started = True
        self._unsubscribe_xp = self.event_bus.on(XP_EARNED, self._on_xp_earned)
        if self._owns_scheduler and not self._scheduler_started:
            self.scheduler.start()
            self._scheduler_started = True
        if self.polling_enabled:
            self._install_poll()
        if self.auto_fetch and self.user_id:
            await self.refresh()

    async def close(self) -> None:
        """Release the poll job, the XP subscription and an owned scheduler.

        In-flight fetches are not cancelled.
        """
        try:
            self._remove_poll()
        finally:
            if self._unsubscribe_xp is not None:
                self._unsubscribe_xp()
                self._unsubscribe_xp = None
            if self._owns_scheduler and self._scheduler_started:
                self.scheduler.shutdown(wait=False)
                self._scheduler_started = False
            self._started = False

    async def __aenter__(self) -> LeaderboardSyncEngine:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # Polling

    def set_polling(self, enabled: bool, interval_ms: int | None = None) -> None:
        """Turn background polling on or off, optionally changing the interval."""
        if interval_ms is not None:
            if interval_ms <= 0:
                raise ValueError("interval_ms must be > 0")
            self.poll_interval_ms = interval_ms
        self.polling_enabled = enabled
        if not self._started:
            return
        if enabled:
            self._install_poll()
        else:
            self._remove_poll()

    @property
    def poll_job_id(self) -> str | None:
        return self._poll_job_id

    def _install_poll(self) -> None:
        if not self.user_id:
            return
        self._poll_job_id = schedule_leaderboard_poll(
            self.scheduler, self, self.poll_interval_ms
        )
        logger.debug(
            "Polling leaderboard for %s every %sms", self.user_id, self.poll_interval_ms
        )

    def _remove_poll(self) -> None:
        if self._poll_job_id is None:
            return
        cancel_leaderboard_poll(self.scheduler, self._poll_job_id)
        self._poll_job_id = None

    # Event bus

    def _on_xp_earned(self, payload: XPEarned) -> None:
        status = self.user_status
        if status is None or not status.is_opted_in:
            return
        # Weekly XP is a whole number; fractional grants are truncated.
        self.user_status = status.model_copy(
            update={"weekly_xp": max(0, status.weekly_xp + int(payload.amount))}
        )

    # Remote operations

    async def fetch_leaderboard(self, league: League | None = None) -> None:
        """Fetch a snapshot, falling back to demo data if the service is down."""
        if not self.user_id:
            return

        self.is_loading = True
        self.error = None
        self.state = SyncState.LOADING
        try:
            snapshot = await self.client.get_leaderboard(self.user_id, league)
        except ServiceRejectedError as exc:
            self.error = exc.server_message or FETCH_FAILED
            self.state = SyncState.ERROR
        except _TRANSPORT_ERRORS:
            logger.exception("Error fetching leaderboard for %s", self.user_id)
            self.error = CONNECT_FAILED
            self.leaderboard = fallback_snapshot(self.user_id)
            self.state = SyncState.ERROR
        else:
            self.leaderboard = snapshot
            self.state = SyncState.READY
        finally:
            self.is_loading = False

    async def fetch_user_status(self) -> None:
        """Fetch the user's status; failures never touch ``error``."""
        if not self.user_id:
            return

        try:
            self.user_status = await self.client.get_user_status(self.user_id)
        except ServiceRejectedError as exc:
            logger.info("User status rejected for %s: %s", self.user_id, exc.message)
        except _TRANSPORT_ERRORS:
            logger.exception("Error fetching user status for %s", self.user_id)
            self.user_status = fallback_status(self.user_id)

    async def toggle_opt_out(self, opt_in: bool) -> None:
        """Opt the user in or out once the service confirms it.

        Opting back in triggers an immediate leaderboard fetch.
        """
        if not self.user_id:
            return

        self.is_loading = True
        try:
            await self.client.set_opt_in(self.user_id, opt_in)
        except ServiceRejectedError as exc:
            logger.info("Opt-out toggle rejected for %s: %s", self.user_id, exc.message)
        except _TRANSPORT_ERRORS:
            logger.exception("Error toggling opt-out for %s", self.user_id)
            self.error = PREFERENCE_FAILED
        else:
            if self.user_status is not None:
                self.user_status = self.user_status.model_copy(update={"is_opted_in": opt_in})
            self.event_bus.emit(
                OPT_OUT_CHANGED, OptOutChanged(user_id=self.user_id, is_opted_in=opt_in)
            )
            if opt_in:
                await self.fetch_leaderboard()
        finally:
            self.is_loading = False

    async def fetch_history(self, limit: int = 10) -> list[WeeklyResult]:
        """Return recent weekly results, or an empty list on any failure."""
        if not self.user_id:
            return []

        try:
            page = await self.client.get_history(self.user_id, limit)
        except (ServiceRejectedError, *_TRANSPORT_ERRORS):
            logger.exception("Error fetching leaderboard history for %s", self.user_id)
            return []
        return list(page.history)

    async def refresh(self) -> None:
        """Fetch leaderboard and status concurrently; wait for both."""
        await asyncio.gather(self.fetch_leaderboard(), self.fetch_user_status())

    # Derived views

    def get_user_context(self, range_: int = 2) -> list[LeaderboardEntry]:
        """Return the entries within ``range_`` places of the viewer.

        Falls back to the top of the page when the viewer is not on it.
        """
        if self.leaderboard is None or not self.leaderboard.entries:
            return []

        entries = self.leaderboard.entries
        index = self.leaderboard.current_user_index()
        if index is None:
            return list(entries[:CONTEXT_FALLBACK_SIZE])

        start = max(0, index - range_)
        end = min(len(entries), index + range_ + 1)
        return list(entries[start:end])

    def format_time_until_reset(self) -> str:
        """Return the compact countdown to the weekly reset."""
        if self.leaderboard is None:
            return NO_SNAPSHOT
        return format_countdown(self.leaderboard.time_until_reset)
