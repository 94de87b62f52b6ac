"""Tests for the day-over-day mention trend tracker."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from terminalscreener.services.trend import TrendTracker


NOW = datetime(2024, 5, 2, 9, 30, tzinfo=timezone.utc)


def test_trend_up_against_yesterday():
    tracker = TrendTracker()
    tracker.update_and_get_trend("BTC", 100, NOW - timedelta(days=1))

    result = tracker.update_and_get_trend("BTC", 150, NOW)

    assert result.trend == "up"
    assert result.trend_value == "50.0"
    assert result.yesterday_mentions == 100
    assert result.estimated is False


def test_trend_down_uses_absolute_value():
    tracker = TrendTracker()
    tracker.update_and_get_trend("eth", 200, NOW - timedelta(days=1))

    result = tracker.update_and_get_trend("ETH", 150, NOW)

    assert result.trend == "down"
    assert result.trend_value == "25.0"
    assert result.yesterday_mentions == 200


def test_no_change_counts_as_up():
    tracker = TrendTracker()
    tracker.update_and_get_trend("SOL", 40, NOW - timedelta(days=1))
    result = tracker.update_and_get_trend("SOL", 40, NOW)
    assert result.trend == "up"
    assert result.trend_value == "0.0"


def test_yesterday_matched_by_calendar_day():
    tracker = TrendTracker()
    # early yesterday morning still counts as yesterday
    tracker.update_and_get_trend("BTC", 10, datetime(2024, 5, 1, 0, 5, tzinfo=timezone.utc))
    result = tracker.update_and_get_trend("BTC", 20, datetime(2024, 5, 2, 23, 55, tzinfo=timezone.utc))
    assert result.yesterday_mentions == 10
    assert result.trend_value == "100.0"


def test_no_history_random_fallback_is_flagged():
    tracker = TrendTracker(rng=random.Random(1))
    for i in range(200):
        result = tracker.update_and_get_trend(f"SYM{i}", 10, NOW)
        assert result.trend in ("up", "down")
        assert result.yesterday_mentions is None
        assert result.estimated is True
        whole, decimals = result.trend_value.split(".")
        assert len(decimals) == 1
        assert 0.0 <= float(result.trend_value) < 15.0


def test_zero_mentions_yesterday_falls_back():
    tracker = TrendTracker(fallback="neutral")
    tracker.update_and_get_trend("PEPE", 0, NOW - timedelta(days=1))
    result = tracker.update_and_get_trend("PEPE", 50, NOW)
    assert result.trend == "neutral"
    assert result.trend_value == "0.0"
    assert result.yesterday_mentions is None
    assert result.estimated is False


def test_same_day_updates_replace_entry():
    tracker = TrendTracker()
    tracker.update_and_get_trend("BTC", 10, NOW)
    tracker.update_and_get_trend("BTC", 25, NOW + timedelta(hours=1))
    history = tracker.history("BTC")
    assert len(history) == 1
    assert history[0].mentions == 25


def test_history_never_exceeds_seven_days():
    tracker = TrendTracker()
    for day in range(30):
        tracker.update_and_get_trend("BTC", day + 1, NOW + timedelta(days=day))
        assert len(tracker.history("BTC")) <= 7

    history = tracker.history("BTC")
    assert len(history) == 7
    assert history[0].mentions == 24
    assert history[-1].mentions == 30


def test_unknown_fallback_rejected():
    with pytest.raises(ValueError):
        TrendTracker(fallback="guess")
