# terminalscreener/services/pacing.py
"""
Fixed-interval gate that spaces consecutive X API calls.

The first call passes immediately; every later call waits until at least
`interval` seconds have passed since the previous one. Shared across
requests, so concurrent batches are spaced too.
"""

from __future__ import annotations

import threading
import time
from typing import Callable


class IntervalGate:
    def __init__(
        self,
        interval: float,
        sleep: Callable[[float], None] = time.sleep,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self.interval = max(0.0, float(interval))
        self._sleep = sleep
        self._monotonic = monotonic
        self._lock = threading.Lock()
        self._last_pass: float | None = None

    def wait(self) -> float:
        """Block until the next call may go out. Returns seconds waited."""
        with self._lock:
            waited = 0.0
            now = self._monotonic()
            if self._last_pass is not None:
                due = self._last_pass + self.interval
                if due > now:
                    waited = due - now
                    self._sleep(waited)
                    now = self._monotonic()
            self._last_pass = now
            return waited

    def reset(self) -> None:
        with self._lock:
            self._last_pass = None
