# terminalscreener/services/mentions.py
"""
TerminalScreener Mentions Engine
--------------------------------
Turns a comma-separated symbol list into ranked X.com mention counts.

Flow per request:
  cache hit -> replay
  otherwise -> credential check -> rate budget check
            -> one paced X API call per symbol (sequential, never concurrent)
            -> trend vs. yesterday -> rank by mentions -> cache

Per-symbol failures never abort the batch. Only a missing credential and
rate limiting (own budget or an upstream 429) short-circuit it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from ..errors import (
    ConfigurationError,
    InvalidRequestError,
    RateLimitedError,
    TerminalScreenerError,
    UpstreamError,
    UpstreamThrottledError,
)
from .coins import coin_info
from .pacing import IntervalGate
from .state import MentionsState
from .x_client import XClient

logger = logging.getLogger(__name__)

SOURCE_LIVE = "live"
SOURCE_FALLBACK = "fallback"

POLICY_OMIT = "omit"
POLICY_FALLBACK = "fallback"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MentionResult:
    symbol: str
    name: str
    mentions: int
    trend: str
    trend_value: str
    dex_listed: bool
    timestamp: str
    yesterday_mentions: Optional[int] = None
    trend_estimated: bool = False
    source: str = SOURCE_LIVE
    error: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "symbol": self.symbol,
            "name": self.name,
            "mentions": self.mentions,
            "trend": self.trend,
            "trendValue": self.trend_value,
            "dexListed": self.dex_listed,
            "timestamp": self.timestamp,
            "source": self.source,
            "trendEstimated": self.trend_estimated,
        }
        if self.yesterday_mentions is not None:
            out["yesterdayMentions"] = self.yesterday_mentions
        if self.error:
            out["error"] = self.error
        return out


SYMBOL_RE = re.compile(r"^[A-Z0-9]{1,15}$")


def parse_symbols(raw: Optional[str], limit: int = 8) -> List[str]:
    """Uppercase, de-duplicated tickers in request order, capped at `limit`.

    Entries that are not 1-15 letters or digits are dropped.
    """
    out: List[str] = []
    for part in (raw or "").split(","):
        sym = part.strip().upper()
        if not SYMBOL_RE.match(sym):
            if sym:
                logger.info("Dropping invalid symbol %r", sym[:32])
            continue
        if sym not in out:
            out.append(sym)
    return out[:limit]


class MentionsService:
    def __init__(
        self,
        settings,
        state: Optional[MentionsState] = None,
        client: Optional[XClient] = None,
        gate: Optional[IntervalGate] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        if settings.FAILED_SYMBOL_POLICY not in (POLICY_OMIT, POLICY_FALLBACK):
            raise ValueError(f"unknown failed-symbol policy: {settings.FAILED_SYMBOL_POLICY!r}")
        self.settings = settings
        self.state = state or MentionsState.from_settings(settings)
        if client is None and settings.x_configured:
            client = XClient(
                settings.X_BEARER_TOKEN,
                base_url=settings.X_API_BASE,
                mode=settings.X_MENTIONS_MODE,
                timeout=settings.X_HTTP_TIMEOUT,
            )
        self.client = client
        self.gate = gate or IntervalGate(settings.X_REQUEST_DELAY_SECONDS)
        self._clock = clock

    def get_mentions(self, raw_symbols: Optional[str], now: Optional[datetime] = None) -> Tuple[dict, int]:
        """Return (body, http_status). Never raises."""
        try:
            return self._get_mentions(raw_symbols, now)
        except TerminalScreenerError as e:
            logger.warning("Mentions request rejected: %s", e.message)
            return e.to_dict(), e.status_code
        except Exception as e:
            logger.exception("API Error while fetching mentions")
            return {"error": "Internal server error", "message": str(e)}, 500

    def _get_mentions(self, raw_symbols: Optional[str], fixed_now: Optional[datetime]) -> Tuple[dict, int]:
        def current() -> datetime:
            return fixed_now or self._clock()

        now = current()
        symbols = parse_symbols(raw_symbols, self.settings.MAX_SYMBOLS_PER_REQUEST)
        if not symbols:
            raise InvalidRequestError("No symbols provided. Use ?symbols=BTC,ETH")

        with self.state.lock:
            entry = self.state.cache.get(symbols, now)
        if entry is not None:
            logger.info("Cache hit for %s (age %ss)", entry.key, entry.age_seconds(now))
            return {
                "success": True,
                "data": entry.data,
                "totalSymbols": len(entry.data),
                "cached": True,
                "cacheAge": entry.age_seconds(now),
                "timestamp": now.isoformat(),
            }, 200

        if not self.settings.x_configured or self.client is None:
            raise ConfigurationError()

        with self.state.lock:
            budget = self.state.budget
            if not budget.can_proceed(now):
                raise RateLimitedError(budget.cooldown_until, now)

        logger.info("Fetching mentions for: %s", ", ".join(symbols))

        results: List[MentionResult] = []
        skipped: List[str] = []
        rate_limit_hit = False

        for i, sym in enumerate(symbols):
            now = current()
            with self.state.lock:
                acquired = self.state.budget.try_acquire(now)
            if not acquired:
                logger.warning("Request budget exhausted, cooling down; skipping %s", ", ".join(symbols[i:]))
                skipped.extend(symbols[i:])
                rate_limit_hit = True
                break

            self.gate.wait()
            now = current()
            info = coin_info(sym)

            try:
                mentions = self.client.count_mentions(sym, info.name)
            except UpstreamThrottledError:
                with self.state.lock:
                    self.state.budget.record_throttled(now)
                logger.warning("X API throttled us at %s, cooling down", sym)
                skipped.extend(symbols[i:])
                rate_limit_hit = True
                break
            except UpstreamError as e:
                logger.warning("Failed to fetch %s: %s", sym, e.message)
                if self.settings.FAILED_SYMBOL_POLICY == POLICY_FALLBACK:
                    results.append(self._fallback_result(sym, e.message, now))
                else:
                    skipped.append(sym)
                continue

            with self.state.lock:
                trend = self.state.trends.update_and_get_trend(sym, mentions, now)
            results.append(MentionResult(
                symbol=sym,
                name=info.name,
                mentions=mentions,
                trend=trend.trend,
                trend_value=trend.trend_value,
                yesterday_mentions=trend.yesterday_mentions,
                trend_estimated=trend.estimated,
                dex_listed=info.dex_listed,
                timestamp=now.isoformat(),
            ))
            logger.info("%s: %s mentions", sym, mentions)

        now = current()
        if rate_limit_hit and not results:
            with self.state.lock:
                reset_at = self.state.budget.cooldown_until or now
            raise RateLimitedError(reset_at, now)

        results.sort(key=lambda r: r.mentions, reverse=True)
        data = [r.to_dict() for r in results]

        with self.state.lock:
            if any(r.source == SOURCE_LIVE for r in results):
                self.state.cache.put(symbols, data, now)
            self.state.budget.maybe_auto_reset(now)
            request_count = self.state.budget.request_count

        return {
            "success": True,
            "data": data,
            "totalSymbols": len(data),
            "cached": False,
            "requestCount": request_count,
            "rateLimitHit": rate_limit_hit,
            "skippedSymbols": skipped,
            "timestamp": now.isoformat(),
        }, 200

    def _fallback_result(self, symbol: str, error: str, now: datetime) -> MentionResult:
        info = coin_info(symbol)
        return MentionResult(
            symbol=symbol,
            name=info.name,
            mentions=0,
            trend="neutral",
            trend_value="0.0",
            dex_listed=info.dex_listed,
            timestamp=now.isoformat(),
            source=SOURCE_FALLBACK,
            error=error,
        )

    def reset(self, now: Optional[datetime] = None) -> dict:
        """Clear the cache and start a fresh rate budget."""
        now = now or self._clock()
        with self.state.lock:
            self.state.cache.clear()
            self.state.budget.reset()
            snapshot = self.state.budget.snapshot(now)
            entries = len(self.state.cache)
        self.gate.reset()
        logger.info("Rate limit and cache reset")
        return {"rateLimit": snapshot, "cacheEntries": entries}

    def status(self, now: Optional[datetime] = None) -> dict:
        now = now or self._clock()
        with self.state.lock:
            return self.state.budget.snapshot(now)
