"""Engine settings loaded from environment variables."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """League sync configuration.

    Values are read from ``LEAGUE_SYNC_*`` environment variables (or a `.env` file).
    """

    # Remote leaderboard service
    api_base_url: str = "http://localhost:3001/api/v1"
    http_timeout_seconds: float = 10.0
    http_max_connections: int = 20

    # Engine
    auto_fetch: bool = True
    enable_polling: bool = False
    poll_interval_ms: int = 5 * 60 * 1000

    # Event bus
    event_bus_debug: bool = False
    event_history_size: int = 100

    # App
    log_level: str = "INFO"
    timezone: str = "UTC"

    @field_validator("poll_interval_ms")
    @classmethod
    def _positive_interval(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("poll_interval_ms must be > 0")
        return value

    model_config = {
        "env_prefix": "LEAGUE_SYNC_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
