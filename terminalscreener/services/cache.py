# terminalscreener/services/cache.py
"""
Lightweight in-memory cache for mention batches.
Keyed by the symbol set (order-independent) to avoid redundant X API calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

DEFAULT_TTL = timedelta(minutes=10)


@dataclass
class CacheEntry:
    key: str
    data: List[dict]
    stored_at: datetime

    def age_seconds(self, now: datetime) -> int:
        return int((now - self.stored_at).total_seconds())


def make_key(symbols: Iterable[str]) -> str:
    return ",".join(sorted(s.strip().upper() for s in symbols))


class MentionsCache:
    def __init__(self, ttl: timedelta = DEFAULT_TTL):
        self.ttl = ttl
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, symbols: Iterable[str], now: datetime) -> Optional[CacheEntry]:
        """Return the entry if still fresh. Stale entries stay until overwritten."""
        entry = self._entries.get(make_key(symbols))
        if entry is None or now - entry.stored_at >= self.ttl:
            return None
        return entry

    def put(self, symbols: Iterable[str], results: List[dict], now: datetime) -> CacheEntry:
        key = make_key(symbols)
        entry = CacheEntry(key=key, data=list(results), stored_at=now)
        self._entries[key] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()
