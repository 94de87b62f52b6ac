# terminalscreener/services/state.py
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import timedelta

from .cache import MentionsCache
from .rate_limiter import RateBudget
from .trend import TrendTracker


@dataclass
class MentionsState:
    """Everything the mentions service shares between requests, behind one lock."""

    cache: MentionsCache = field(default_factory=MentionsCache)
    budget: RateBudget = field(default_factory=RateBudget)
    trends: TrendTracker = field(default_factory=TrendTracker)
    lock: threading.Lock = field(default_factory=threading.Lock)

    @classmethod
    def from_settings(cls, settings, rng=None) -> "MentionsState":
        return cls(
            cache=MentionsCache(ttl=timedelta(minutes=settings.CACHE_TTL_MINUTES)),
            budget=RateBudget(
                max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
                cooldown=timedelta(minutes=settings.RATE_LIMIT_COOLDOWN_MINUTES),
            ),
            trends=TrendTracker(
                max_days=settings.HISTORY_MAX_DAYS,
                fallback=settings.TREND_FALLBACK,
                rng=rng,
            ),
        )
