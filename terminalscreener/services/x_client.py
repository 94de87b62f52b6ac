# terminalscreener/services/x_client.py
"""
X.com (Twitter v2) mention counter.

Two modes:
  - "search": GET /2/tweets/search/recent, mentions = number of posts returned
  - "counts": GET /2/tweets/counts/recent, mentions = sum of hourly tweet_count

A 429 raises UpstreamThrottledError; every other failure raises UpstreamError.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter, Retry

from ..errors import UpstreamError, UpstreamThrottledError

logger = logging.getLogger(__name__)

MODE_SEARCH = "search"
MODE_COUNTS = "counts"

SEARCH_PATH = "/2/tweets/search/recent"
COUNTS_PATH = "/2/tweets/counts/recent"
SEARCH_MAX_RESULTS = 100


def build_query(symbol: str, name: str) -> str:
    """Cashtag OR display name, original posts only, English.

    Symbols without a known name are searched by cashtag only.
    """
    sym = symbol.upper()
    if not name or name.upper() == sym:
        return f"${sym} -is:retweet lang:en"
    term = f'"{name}"' if " " in name else name
    return f"(${sym} OR {term}) -is:retweet lang:en"


def get_session() -> requests.Session:
    s = requests.Session()
    # connection errors only; HTTP statuses (429 especially) are handled by the caller
    retries = Retry(total=1, connect=1, read=0, status=0, backoff_factor=0.2, allowed_methods=frozenset(["GET"]))
    adapter = HTTPAdapter(max_retries=retries, pool_connections=10, pool_maxsize=10)
    s.mount("http://", adapter); s.mount("https://", adapter)
    return s


class XClient:
    def __init__(
        self,
        bearer_token: str,
        base_url: str = "https://api.twitter.com",
        mode: str = MODE_SEARCH,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        if mode not in (MODE_SEARCH, MODE_COUNTS):
            raise ValueError(f"unknown X mentions mode: {mode!r}")
        self.bearer_token = bearer_token
        self.base_url = base_url.rstrip("/")
        self.mode = mode
        self.timeout = timeout
        self.session = session or get_session()

    def count_mentions(self, symbol: str, name: str) -> int:
        query = build_query(symbol, name)
        if self.mode == MODE_COUNTS:
            buckets = self._items(self._get(COUNTS_PATH, {"query": query, "granularity": "hour"}))
            try:
                return max(0, sum(int(b.get("tweet_count", 0) or 0) for b in buckets))
            except (TypeError, ValueError, AttributeError) as e:
                raise UpstreamError("X API returned malformed payload") from e

        return len(self._items(self._get(SEARCH_PATH, {"query": query, "max_results": SEARCH_MAX_RESULTS})))

    @staticmethod
    def _items(data: dict[str, Any]) -> list:
        items = data.get("data") or []
        if not isinstance(items, list):
            raise UpstreamError("X API returned malformed payload")
        return items

    def _get(self, path: str, params: dict) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.bearer_token}",
            "Content-Type": "application/json",
        }
        try:
            res = self.session.get(f"{self.base_url}{path}", headers=headers, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"X API request failed: {e}") from e

        if res.status_code == 429:
            raise UpstreamThrottledError()
        if not res.ok:
            raise UpstreamError(f"API error: {res.status_code}", status=res.status_code)

        try:
            data = res.json()
        except ValueError as e:
            raise UpstreamError("X API returned non-JSON response", status=res.status_code) from e
        if not isinstance(data, dict):
            raise UpstreamError("X API returned unexpected payload", status=res.status_code)
        return data
