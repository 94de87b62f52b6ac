# terminalscreener/services/rate_limiter.py
"""
Process-wide X API request budget.

OPEN    -> requests allowed
COOLING -> budget exhausted or upstream returned 429; no requests until
           cooldown_until passes (checked lazily, no timers)

The counter also resets once a full window has passed since the first
request of the window, so the maximum bounds requests per window.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

OPEN = "open"
COOLING = "cooling"


class RateBudget:
    def __init__(self, max_requests: int = 25, cooldown: timedelta = timedelta(minutes=15)):
        self.max_requests = max_requests
        self.cooldown = cooldown
        self.request_count = 0
        self.cooldown_until: Optional[datetime] = None
        self.window_started_at: Optional[datetime] = None

    @property
    def state(self) -> str:
        return COOLING if self.cooldown_until is not None else OPEN

    def maybe_auto_reset(self, now: datetime) -> bool:
        """Apply any due transition back to a fresh OPEN window. Returns True if reset."""
        if self.cooldown_until is not None:
            if now >= self.cooldown_until:
                self.reset()
                return True
            return False

        if self.window_started_at is not None and now - self.window_started_at >= self.cooldown:
            self.reset()
            return True
        return False

    def can_proceed(self, now: datetime) -> bool:
        self.maybe_auto_reset(now)
        return self.state == OPEN

    def record_request(self, now: datetime) -> None:
        if self.window_started_at is None:
            self.window_started_at = now
        self.request_count += 1

    def record_throttled(self, now: datetime) -> None:
        self._start_cooldown(now)

    def try_acquire(self, now: datetime) -> bool:
        """Reserve one request. Starts the cooldown when the budget is used up."""
        if not self.can_proceed(now):
            return False
        if self.request_count >= self.max_requests:
            self._start_cooldown(now)
            return False
        self.record_request(now)
        return True

    def reset(self) -> None:
        self.request_count = 0
        self.cooldown_until = None
        self.window_started_at = None

    def _start_cooldown(self, now: datetime) -> None:
        self.cooldown_until = now + self.cooldown

    def snapshot(self, now: datetime) -> dict:
        self.maybe_auto_reset(now)
        remaining = None
        if self.cooldown_until is not None:
            remaining = max(0, int((self.cooldown_until - now).total_seconds()))
        return {
            "state": self.state,
            "requestCount": self.request_count,
            "maxRequests": self.max_requests,
            "cooldownUntil": self.cooldown_until.isoformat() if self.cooldown_until else None,
            "cooldownRemainingSeconds": remaining,
        }
