"""
Clocks and frame schedulers
---------------------------
The engine never sleeps or recurses on its own. It asks a scheduler to call
it back for the next frame and reads time from a clock, both injected:

- PerfCounterClock + an Arcade scheduler (see dodge.window) for real play
- VirtualClock + ManualFrameScheduler for tests and the headless env
"""

from __future__ import annotations

import itertools
import time
from typing import Callable, Dict, Optional


class PerfCounterClock:
    """Monotonic high-resolution wall clock in milliseconds"""

    def now(self) -> float:
        return time.perf_counter() * 1000.0


class VirtualClock:
    """Clock that only moves when told to"""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        if ms < 0:
            raise ValueError("clock cannot move backwards")
        self._now += ms
        return self._now


class ManualFrameScheduler:
    """
    Holds scheduled frame callbacks until run_next() is called.

    schedule() returns an integer handle that cancel() accepts; cancelling
    an unknown or already-run handle is a no-op.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._pending: Dict[int, Callable[[], None]] = {}

    def schedule(self, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Optional[int]):
        if handle is not None:
            self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_next(self) -> bool:
        """Run the oldest pending callback. Returns False if none was pending."""
        if not self._pending:
            return False
        handle = min(self._pending)
        callback = self._pending.pop(handle)
        callback()
        return True
