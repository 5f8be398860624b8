"""core/clock.py — Clock adapter.

Wraps the two time sources the tracker needs:

* a monotonic nanosecond counter (wall time, for prediction windows)
* the host's discrete tick counter (for notification cooldowns)

No logic beyond unit conversion.  Tests pass a fake ``ns_source`` so
time can be stepped by hand::

    fake = [0]
    clock = Clock(ns_source=lambda: fake[0])
    fake[0] += 70 * SECOND_IN_NS
    clock.now()   # 70
"""

from __future__ import annotations
import time
from typing import Callable

from core.constants import SECOND_IN_NS, TICKS_PER_SECOND


class Clock:
    def __init__(self, ns_source: Callable[[], int] | None = None,
                 ticks_per_second: int = TICKS_PER_SECOND):
        self._ns_source = ns_source or time.monotonic_ns
        self.ticks_per_second = ticks_per_second
        self.ticks = 0

    def now(self) -> int:
        """Whole seconds on the monotonic clock."""
        return self._ns_source() // SECOND_IN_NS

    def advance_tick(self) -> int:
        """Count one host tick.  Returns the new tick count."""
        self.ticks += 1
        return self.ticks

    def ticks_to_seconds(self, ticks: int) -> float:
        return ticks / self.ticks_per_second

    def seconds_to_ticks(self, seconds: float) -> int:
        return int(seconds * self.ticks_per_second)

    def __repr__(self) -> str:
        return f"Clock(now={self.now()}s, ticks={self.ticks})"
