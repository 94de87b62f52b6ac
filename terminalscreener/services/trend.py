# terminalscreener/services/trend.py
"""
Mention Trend Tracker
---------------------
Keeps a small rolling history of daily mention counts per symbol and
compares today's count against yesterday's.

When there is no usable prior-day entry the configured fallback applies:
  - "random":  a coin-flip direction with a magnitude in [0, 15), flagged estimated
  - "neutral": trend "neutral" with value "0.0"
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

FALLBACK_RANDOM = "random"
FALLBACK_NEUTRAL = "neutral"

RANDOM_TREND_CEILING = 15.0


@dataclass
class HistoryEntry:
    date: str  # ISO calendar day, e.g. "2024-05-01"
    mentions: int


@dataclass
class TrendResult:
    trend: str
    trend_value: str
    yesterday_mentions: Optional[int] = None
    estimated: bool = False


def _day(value) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class TrendTracker:
    def __init__(
        self,
        max_days: int = 7,
        fallback: str = FALLBACK_RANDOM,
        rng: Optional[random.Random] = None,
    ):
        if fallback not in (FALLBACK_RANDOM, FALLBACK_NEUTRAL):
            raise ValueError(f"unknown trend fallback: {fallback!r}")
        self.max_days = max_days
        self.fallback = fallback
        self._rng = rng or random.Random()
        self._history: Dict[str, List[HistoryEntry]] = {}

    def history(self, symbol: str) -> List[HistoryEntry]:
        return list(self._history.get(symbol.upper(), []))

    def clear(self) -> None:
        self._history.clear()

    def update_and_get_trend(self, symbol: str, current_mentions: int, now: datetime) -> TrendResult:
        sym = symbol.upper()
        entries = self._history.setdefault(sym, [])

        today = _day(now)
        yesterday = _day(now - timedelta(hours=24))
        previous = next((e for e in entries if e.date == yesterday), None)

        for entry in entries:
            if entry.date == today:
                entry.mentions = current_mentions
                break
        else:
            entries.append(HistoryEntry(date=today, mentions=current_mentions))

        if len(entries) > self.max_days:
            del entries[: len(entries) - self.max_days]

        if previous is not None and previous.mentions > 0:
            change = (current_mentions - previous.mentions) / previous.mentions * 100
            return TrendResult(
                trend="up" if change >= 0 else "down",
                trend_value=f"{abs(change):.1f}",
                yesterday_mentions=previous.mentions,
            )

        return self._fallback_trend()

    def _fallback_trend(self) -> TrendResult:
        if self.fallback == FALLBACK_NEUTRAL:
            return TrendResult(trend="neutral", trend_value="0.0")

        trend = self._rng.choice(("up", "down"))
        # truncate so the one-decimal string stays below the ceiling
        magnitude = math.floor(self._rng.random() * RANDOM_TREND_CEILING * 10) / 10
        return TrendResult(trend=trend, trend_value=f"{magnitude:.1f}", estimated=True)
