"""
Millisecond clocks injected into games.

Games never read wall time directly; anything callable returning
milliseconds works (e.g. pygame.time.get_ticks).
"""

import time
from typing import Callable

Clock = Callable[[], float]


class MonotonicClock:
    """Milliseconds elapsed since construction, from time.monotonic()."""

    def __init__(self):
        self._origin = time.monotonic()

    def __call__(self) -> float:
        return (time.monotonic() - self._origin) * 1000.0


class ManualClock:
    """
    Clock that only moves when told to.

    Used by tests and headless simulation to make timing gates deterministic.
    """

    def __init__(self, start_ms: float = 0.0):
        self.now_ms = float(start_ms)

    def advance(self, ms: float) -> float:
        """Move the clock forward and return the new time."""
        if ms < 0:
            raise ValueError(f"Cannot move clock backwards: {ms}")
        self.now_ms += ms
        return self.now_ms

    def __call__(self) -> float:
        return self.now_ms
