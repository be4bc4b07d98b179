"""Exception hierarchy for the league sync engine."""

from __future__ import annotations


class LeagueSyncError(Exception):
    """Base engine error with a stable machine-readable code."""

    def __init__(self, message: str, code: str) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        """Serialize the error in the same shape the service uses."""
        return {"error": self.message, "code": self.code}


class ServiceUnavailableError(LeagueSyncError):
    """Raised when the leaderboard service cannot be reached."""

    def __init__(self, reason: str = "Leaderboard service unavailable") -> None:
        super().__init__(message=reason, code="SERVICE_UNAVAILABLE")


class InvalidPayloadError(LeagueSyncError):
    """Raised when a response body is not a valid envelope."""

    def __init__(self, reason: str = "Invalid response payload") -> None:
        super().__init__(message=reason, code="INVALID_PAYLOAD")


class ServiceRejectedError(LeagueSyncError):
    """Raised when the service answers with ``success: false``."""

    def __init__(self, reason: str | None = None) -> None:
        self.server_message = reason
        super().__init__(message=reason or "Request rejected", code="SERVICE_REJECTED")
