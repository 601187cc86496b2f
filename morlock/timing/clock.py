"""
Clocks: the ``now() -> milliseconds`` collaborator used by throttle.

Only differences between two readings of the same clock are meaningful.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float:
        """Current time in milliseconds."""
        ...


class MonotonicClock:
    """time.monotonic() in milliseconds. Unaffected by wall-clock changes."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


class WallClock:
    """Milliseconds since the Unix epoch."""

    def now(self) -> float:
        return time.time() * 1000.0


class ManualClock:
    """
    Clock that only moves when told to.

    Used in tests to pin down exact interval arithmetic.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, t: float) -> None:
        if t < self._now:
            raise ValueError(f"ManualClock cannot move backwards ({self._now} -> {t})")
        self._now = float(t)

    def advance(self, ms: float) -> None:
        self.set(self._now + ms)
