"""Tests for the fixed-interval pacing gate."""

from terminalscreener.services.pacing import IntervalGate


class Clock:
    def __init__(self):
        self.t = 100.0

    def __call__(self):
        return self.t

    def sleep(self, seconds):
        self.t += seconds


def test_first_call_passes_immediately():
    clock = Clock()
    gate = IntervalGate(3.0, sleep=clock.sleep, monotonic=clock)
    assert gate.wait() == 0.0
    assert clock.t == 100.0


def test_consecutive_calls_are_spaced():
    clock = Clock()
    gate = IntervalGate(3.0, sleep=clock.sleep, monotonic=clock)
    gate.wait()
    clock.t += 1.0
    assert gate.wait() == 2.0
    assert clock.t == 103.0


def test_no_wait_when_interval_already_passed():
    clock = Clock()
    gate = IntervalGate(3.0, sleep=clock.sleep, monotonic=clock)
    gate.wait()
    clock.t += 10.0
    assert gate.wait() == 0.0


def test_reset_forgets_last_call():
    clock = Clock()
    gate = IntervalGate(3.0, sleep=clock.sleep, monotonic=clock)
    gate.wait()
    gate.reset()
    assert gate.wait() == 0.0
