"""Pytest configuration and fixtures."""

import random
from datetime import datetime, timezone

import pytest

from terminalscreener.app import create_app
from terminalscreener.config import Settings
from terminalscreener.errors import UpstreamError, UpstreamThrottledError
from terminalscreener.services.mentions import MentionsService
from terminalscreener.services.pacing import IntervalGate
from terminalscreener.services.state import MentionsState


T0 = datetime(2024, 5, 2, 12, 0, 0, tzinfo=timezone.utc)


class FakeXClient:
    """Stands in for XClient; counts come from a dict, failures from exceptions."""

    def __init__(self, counts=None):
        self.counts = dict(counts or {})
        self.calls = []

    def count_mentions(self, symbol, name):
        self.calls.append(symbol)
        value = self.counts.get(symbol, 0)
        if isinstance(value, Exception):
            raise value
        return value


class FakeClock:
    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now


class RecordingSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def settings():
    return Settings(
        X_BEARER_TOKEN="test-token",
        X_REQUEST_DELAY_SECONDS=3.0,
        STATIC_DIR="/nonexistent",
    )


@pytest.fixture
def fake_client():
    return FakeXClient({"BTC": 500, "ETH": 300, "PEPE": 120, "SHIB": 80, "SOL": 200})


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeps():
    return RecordingSleep()


@pytest.fixture
def gate(sleeps):
    return IntervalGate(3.0, sleep=sleeps, monotonic=lambda: 0.0)


@pytest.fixture
def state(settings):
    return MentionsState.from_settings(settings, rng=random.Random(7))


@pytest.fixture
def service(settings, state, fake_client, gate, clock):
    return MentionsService(settings, state=state, client=fake_client, gate=gate, clock=clock)


@pytest.fixture
def app(service):
    app = create_app(service=service)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upstream_error():
    return UpstreamError("API error: 503", status=503)


@pytest.fixture
def throttled():
    return UpstreamThrottledError()
