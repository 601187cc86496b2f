"""
Schedulers: the "run this callback no earlier than N ms from now" facility.

A scheduler exposes three operations:

    now()                         -> current time in milliseconds
    schedule_after(callback, ms)  -> handle
    cancel(handle)                -> None   (cancel(None) is a no-op)

Two implementations:

* VirtualScheduler: a deterministic event queue over virtual time. Nothing
  fires until advance()/advance_to()/run_all() is called. Timers fire in
  deadline order, and in scheduling order among equal deadlines.
* AsyncioScheduler: adapter over an asyncio event loop (loop.call_later).

get_default_scheduler() returns the process default, picked by
config.DEFAULT_SCHEDULER.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Any, Callable, Optional, Protocol

from morlock import config
from morlock.guards import assert_callable, assert_delay


class SchedulerError(RuntimeError):
    """Raised when a scheduler cannot accept work."""


class Scheduler(Protocol):
    def now(self) -> float: ...

    def schedule_after(self, callback: Callable[[], Any], ms: float) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


# =============================================================================
# Virtual time
# =============================================================================


class TimerHandle:
    """A pending VirtualScheduler timer."""

    __slots__ = ("deadline", "seq", "callback", "cancelled")

    def __init__(self, deadline: float, seq: int, callback: Callable[[], Any]) -> None:
        self.deadline = deadline
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def __lt__(self, other: "TimerHandle") -> bool:
        return (self.deadline, self.seq) < (other.deadline, other.seq)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"TimerHandle(deadline={self.deadline}, seq={self.seq}, {state})"


class VirtualScheduler:
    """
    Single-threaded event queue driven by explicit time advances.

    Callbacks run synchronously inside advance()/advance_to()/run_all().
    A callback may schedule or cancel further timers; those are honoured
    within the same advance if they fall due. If a callback raises, the
    exception propagates to the advance caller and every other timer stays
    queued.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._queue: list[TimerHandle] = []
        self._counter = itertools.count()
        self._fired = 0

    def now(self) -> float:
        return self._now

    @property
    def fired(self) -> int:
        """Number of callbacks run so far."""
        return self._fired

    def schedule_after(self, callback: Callable[[], Any], ms: float) -> TimerHandle:
        assert_callable(callback, "scheduled callback")
        assert_delay(ms, "schedule_after ms")
        handle = TimerHandle(self._now + max(ms, 0), next(self._counter), callback)
        heapq.heappush(self._queue, handle)
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is None:
            return
        if not isinstance(handle, TimerHandle):
            raise TypeError(f"cancel expects a TimerHandle, got {type(handle).__name__}")
        # lazy deletion: skipped when popped
        handle.cancelled = True

    def pending(self) -> int:
        """Number of live (non-cancelled) timers."""
        return sum(1 for h in self._queue if not h.cancelled)

    def next_deadline(self) -> Optional[float]:
        """Deadline of the earliest live timer, or None."""
        self._drop_cancelled()
        return self._queue[0].deadline if self._queue else None

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)

    def advance_to(self, t: float) -> int:
        """
        Move virtual time to t, firing every timer due at or before t.

        Returns:
            Number of callbacks run.

        Raises:
            ValueError: If t is earlier than now().
        """
        if t < self._now:
            raise ValueError(f"cannot move virtual time backwards ({self._now} -> {t})")

        ran = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0].deadline > t:
                break
            handle = heapq.heappop(self._queue)
            self._now = handle.deadline
            self._fired += 1
            ran += 1
            handle.callback()

        self._now = t
        return ran

    def advance(self, ms: float) -> int:
        """advance_to(now() + ms)."""
        return self.advance_to(self._now + ms)

    def run_all(self, max_timers: int = 100_000) -> int:
        """
        Fire timers until the queue is empty.

        Raises:
            SchedulerError: If more than max_timers callbacks run, which
                means callbacks keep re-arming themselves.
        """
        ran = 0
        while True:
            deadline = self.next_deadline()
            if deadline is None:
                return ran
            if ran >= max_timers:
                raise SchedulerError(
                    f"run_all exceeded {max_timers} timers; queue never drained"
                )
            ran += self.advance_to(deadline)


# =============================================================================
# asyncio
# =============================================================================


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop.

    Without an explicit loop, the running loop is looked up on every call,
    so one instance can serve any loop the caller happens to be inside.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulerError(
                "AsyncioScheduler used outside a running event loop; "
                "pass loop= or set a different default scheduler"
            ) from e

    def now(self) -> float:
        return self._get_loop().time() * 1000.0

    def schedule_after(self, callback: Callable[[], Any], ms: float) -> asyncio.TimerHandle:
        assert_callable(callback, "scheduled callback")
        assert_delay(ms, "schedule_after ms")
        return self._get_loop().call_later(max(ms, 0) / 1000.0, callback)

    def cancel(self, handle: Optional[asyncio.TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()


# =============================================================================
# Process default
# =============================================================================

_default_scheduler: Optional[Scheduler] = None


def _build_default() -> Scheduler:
    name = config.DEFAULT_SCHEDULER
    if name == "asyncio":
        return AsyncioScheduler()
    if name == "virtual":
        return VirtualScheduler()
    raise ValueError(
        f"MORLOCK_SCHEDULER must be one of {config.SCHEDULER_CHOICES}, got {name!r}"
    )


def get_default_scheduler() -> Scheduler:
    """Return the process-wide default scheduler, creating it on first use."""
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = _build_default()
    return _default_scheduler


def set_default_scheduler(scheduler: Optional[Scheduler]) -> None:
    """Replace the default scheduler. None rebuilds it from config on next use."""
    global _default_scheduler
    _default_scheduler = scheduler
