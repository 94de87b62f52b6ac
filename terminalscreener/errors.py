# terminalscreener/errors.py
"""
Error taxonomy for the mentions service.

Batch-level errors (configuration, rate limiting) are turned into JSON bodies
by the orchestrator; per-symbol upstream errors never abort a batch unless
they are a throttling signal.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Dict, Optional


class TerminalScreenerError(Exception):
    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.error)
        self.message = message or self.error

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class InvalidRequestError(TerminalScreenerError):
    status_code = 400
    error = "Invalid request"


class ConfigurationError(TerminalScreenerError):
    status_code = 400
    error = "X_BEARER_TOKEN environment variable not set"

    def __init__(self, message: str = "Please configure your X.com API Bearer Token"):
        super().__init__(message)


class RateLimitedError(TerminalScreenerError):
    status_code = 429
    error = "Rate limited"

    def __init__(self, reset_at: datetime, now: datetime, message: Optional[str] = None):
        self.reset_at = reset_at
        self.now = now
        remaining = max(0.0, (reset_at - now).total_seconds())
        self.reset_in_seconds = int(math.ceil(remaining))
        self.reset_in_minutes = int(math.ceil(remaining / 60))
        super().__init__(
            message
            or f"X API rate limit reached. Try again in {self.reset_in_minutes} minute(s)."
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.error,
            "rateLimited": True,
            "message": self.message,
            "resetTime": self.reset_at.isoformat(),
            "resetInMinutes": self.reset_in_minutes,
            "resetInSeconds": self.reset_in_seconds,
            "timestamp": self.now.isoformat(),
        }


class UpstreamError(TerminalScreenerError):
    """A single upstream call failed; the symbol is skipped or fallback-filled."""

    status_code = 502
    error = "Upstream error"

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class UpstreamThrottledError(UpstreamError):
    """Upstream answered 429; the whole batch stops and the budget cools down."""

    error = "Upstream throttled"

    def __init__(self, message: str = "X API responded 429 Too Many Requests"):
        super().__init__(message, status=429)
