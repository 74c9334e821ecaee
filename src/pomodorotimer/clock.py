"""Time sources and the once-a-second ticker that drives redraws."""
from __future__ import annotations

import time
from typing import Iterator, Protocol

TICK_SECONDS = 1.0


class Clock(Protocol):
    def now(self) -> float:
        ...

    def sleep(self, seconds: float) -> None:
        ...


class SystemClock:
    """Monotonic wall clock backed by :mod:`time`."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


def ticks(clock: Clock, start: float, interval: float = TICK_SECONDS) -> Iterator[float]:
    """Yield the clock reading at ``start + interval``, ``start + 2 * interval``, ...

    Each deadline is computed from ``start`` so that slow redraws do not push
    later ticks back.
    """
    count = 0
    while True:
        count += 1
        deadline = start + count * interval
        delay = deadline - clock.now()
        if delay > 0:
            clock.sleep(delay)
        yield clock.now()
