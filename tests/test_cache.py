"""Tests for the mention batch cache."""

from datetime import datetime, timedelta, timezone

from terminalscreener.services.cache import MentionsCache, make_key


NOW = datetime(2024, 5, 2, 12, 0, tzinfo=timezone.utc)


def test_key_is_order_and_case_independent():
    assert make_key(["ETH", "BTC"]) == make_key(["btc", "eth"]) == "BTC,ETH"


def test_hit_for_reordered_symbols():
    cache = MentionsCache()
    cache.put(["ETH", "BTC"], [{"symbol": "BTC"}], NOW)

    entry = cache.get(["BTC", "ETH"], NOW + timedelta(minutes=1))
    assert entry is not None
    assert entry.data == [{"symbol": "BTC"}]
    assert entry.age_seconds(NOW + timedelta(minutes=1)) == 60


def test_expiry_boundary():
    ttl = timedelta(minutes=10)
    cache = MentionsCache(ttl=ttl)
    cache.put(["BTC"], [], NOW)

    assert cache.get(["BTC"], NOW + ttl - timedelta(seconds=1)) is not None
    assert cache.get(["BTC"], NOW + ttl) is None


def test_expired_entry_is_not_evicted():
    cache = MentionsCache(ttl=timedelta(minutes=10))
    cache.put(["BTC"], [], NOW)
    assert cache.get(["BTC"], NOW + timedelta(hours=1)) is None
    assert len(cache) == 1


def test_no_partial_key_matching():
    cache = MentionsCache()
    cache.put(["BTC", "ETH"], [], NOW)
    assert cache.get(["BTC"], NOW) is None
    assert cache.get(["BTC", "ETH", "SOL"], NOW) is None


def test_put_overwrites_and_clear():
    cache = MentionsCache()
    cache.put(["BTC"], [{"mentions": 1}], NOW)
    cache.put(["BTC"], [{"mentions": 2}], NOW + timedelta(minutes=1))
    assert cache.get(["BTC"], NOW + timedelta(minutes=1)).data == [{"mentions": 2}]

    cache.clear()
    assert len(cache) == 0
