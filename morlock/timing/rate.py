"""
Rate controllers: throttle and debounce.

Both wrap a function and return a callable with the same signature. The
wrapped function's return value is discarded, because a call may run later
or not at all.

throttle(fn, delay)
    At most one execution per delay window. The first call in an idle
    window runs immediately (leading edge). Further calls inside the window
    arm a single trailing execution at window close. The trailing execution
    uses the arguments of the call that armed it, not the latest call.

debounce(fn, delay)
    Every call restarts a quiet-period timer. fn runs once, delay after the
    last call of a burst, with that last call's arguments.

Controller state lives on the returned object. Timer callbacks clear it
before running fn, so an exception from fn never leaves the controller
stuck in ARMED/PENDING.
"""

from __future__ import annotations

import enum
import functools
from typing import Any, Callable, Optional

from morlock.guards import assert_callable, assert_delay
from morlock.timing.clock import Clock
from morlock.timing.scheduler import Scheduler, get_default_scheduler


DEFER_MS = 1


class ControllerState(enum.Enum):
    IDLE = "idle"
    ARMED = "armed"      # throttle: trailing execution scheduled
    PENDING = "pending"  # debounce: quiet-period timer running


class Throttled:
    """Callable returned by throttle()."""

    def __init__(
        self,
        fn: Callable[..., Any],
        delay: float,
        scheduler: Scheduler,
        clock: Optional[Clock] = None,
    ) -> None:
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._delay = delay
        self._scheduler = scheduler
        self._clock = clock if clock is not None else scheduler
        self._previous: Optional[float] = None
        self._handle: Any = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def state(self) -> ControllerState:
        return ControllerState.ARMED if self._handle is not None else ControllerState.IDLE

    @property
    def previous(self) -> Optional[float]:
        """Time of the last accepted execution, None before the first."""
        return self._previous

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        now = self._clock.now()
        if self._previous is None:
            remaining = 0.0
        else:
            remaining = self._delay - (now - self._previous)

        if remaining <= 0:
            self._scheduler.cancel(self._handle)
            self._handle = None
            self._previous = now
            self._fn(*args, **kwargs)
        elif self._handle is None:
            self._handle = self._scheduler.schedule_after(
                functools.partial(self._fire, args, kwargs), remaining
            )

    def _fire(self, args: tuple, kwargs: dict) -> None:
        self._previous = self._clock.now()
        self._handle = None
        self._fn(*args, **kwargs)


class Debounced:
    """Callable returned by debounce()."""

    def __init__(self, fn: Callable[..., Any], delay: float, scheduler: Scheduler) -> None:
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._delay = delay
        self._scheduler = scheduler
        self._handle: Any = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def state(self) -> ControllerState:
        return ControllerState.PENDING if self._handle is not None else ControllerState.IDLE

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._scheduler.cancel(self._handle)
        self._handle = self._scheduler.schedule_after(
            functools.partial(self._fire, args, kwargs), self._delay
        )

    def _fire(self, args: tuple, kwargs: dict) -> None:
        self._handle = None
        self._fn(*args, **kwargs)


def throttle(
    fn: Callable[..., Any],
    delay_ms: float,
    *,
    scheduler: Optional[Scheduler] = None,
    clock: Optional[Clock] = None,
) -> Throttled:
    """
    Limit fn to one execution per delay_ms, leading and trailing edge.

    Args:
        fn: Function to wrap.
        delay_ms: Window length in milliseconds.
        scheduler: Timer facility. Defaults to get_default_scheduler().
        clock: Time source. Defaults to the scheduler's own now().
    """
    assert_callable(fn, "throttle target")
    assert_delay(delay_ms, "throttle delay_ms")
    return Throttled(fn, delay_ms, scheduler if scheduler is not None else get_default_scheduler(), clock)


def debounce(
    fn: Callable[..., Any],
    delay_ms: float,
    *,
    scheduler: Optional[Scheduler] = None,
) -> Debounced:
    """Run fn once, delay_ms after the last call in a burst."""
    assert_callable(fn, "debounce target")
    assert_delay(delay_ms, "debounce delay_ms")
    return Debounced(fn, delay_ms, scheduler if scheduler is not None else get_default_scheduler())


def delay(
    fn: Callable[..., Any],
    ms: float,
    *,
    scheduler: Optional[Scheduler] = None,
) -> Callable[..., Any]:
    """
    Return a function that schedules fn(*args, **kwargs) ms after each call.

    The returned function gives back the timer handle, so the caller can
    cancel it through the same scheduler.
    """
    assert_callable(fn, "delay target")
    assert_delay(ms, "delay ms")

    @functools.wraps(fn)
    def delayed(*args: Any, **kwargs: Any) -> Any:
        sched = scheduler if scheduler is not None else get_default_scheduler()
        return sched.schedule_after(functools.partial(fn, *args, **kwargs), ms)

    return delayed


def defer(
    fn: Callable[..., Any],
    *,
    scheduler: Optional[Scheduler] = None,
) -> Callable[..., Any]:
    """delay(fn, DEFER_MS): run fn on the next timer turn."""
    return delay(fn, DEFER_MS, scheduler=scheduler)
