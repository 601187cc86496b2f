"""
Tests for the throttle controller, driven on virtual time.
"""

import math

import pytest

from morlock.timing.clock import ManualClock
from morlock.timing.rate import ControllerState, Throttled, throttle
from morlock.timing.scheduler import VirtualScheduler, set_default_scheduler


class TestThrottleEdges:
    """Leading and trailing edge behaviour."""

    def test_first_call_runs_immediately(self, sched, call_log):
        t = throttle(call_log, 100, scheduler=sched)
        t("a")
        assert call_log.calls == [("a",)]
        assert t.state is ControllerState.IDLE
        assert t.previous == 0

    def test_first_call_leading_even_at_large_start_time(self, call_log):
        """No accepted execution yet means nothing to wait for."""
        sched = VirtualScheduler(start=1_700_000_000_000)
        t = throttle(call_log, 100, scheduler=sched)
        t()
        assert call_log.count == 1

    def test_exactly_one_trailing_execution(self, sched, call_log):
        """throttled(1) runs at once; throttled(2) in the window runs once at close."""
        t = throttle(call_log, 100, scheduler=sched)
        t(1)
        sched.advance(10)
        t(2)
        assert t.state is ControllerState.ARMED
        assert call_log.calls == [(1,)]

        sched.advance(90)
        assert call_log.calls == [(1,), (2,)]
        assert t.state is ControllerState.IDLE

        sched.advance(1000)
        assert call_log.count == 2

    def test_trailing_uses_arguments_captured_at_arm_time(self, sched, call_log):
        """
        Calls arriving while armed do not replace the trailing arguments.

        Arguably surprising, since most throttles use the latest call, so the
        assertion pins the behaviour down explicitly.
        """
        t = throttle(call_log, 100, scheduler=sched)
        t("leading")
        sched.advance(10)
        t("arms")
        sched.advance(10)
        t("ignored-1")
        sched.advance(10)
        t("ignored-2")
        sched.advance(100)
        assert call_log.calls == [("leading",), ("arms",)]

    def test_trailing_fires_at_window_close(self, sched):
        fired_at = []
        t = throttle(lambda: fired_at.append(sched.now()), 100, scheduler=sched)
        t()
        sched.advance(30)
        t()
        sched.run_all()
        assert fired_at == [0, 100]

    def test_call_after_window_runs_immediately(self, sched, call_log):
        t = throttle(call_log, 100, scheduler=sched)
        t(1)
        sched.advance(150)
        t(2)
        assert call_log.calls == [(1,), (2,)]
        assert sched.pending() == 0

    def test_leading_call_cancels_stale_timer(self, call_log):
        """A call that finds remaining <= 0 cancels any pending timer."""
        sched = VirtualScheduler()
        clock = ManualClock()
        t = throttle(call_log, 100, scheduler=sched, clock=clock)
        t(1)
        clock.advance(50)
        t(2)  # arms a timer for 50 ms on the scheduler
        assert t.state is ControllerState.ARMED

        # the clock runs ahead of the scheduler: window is over
        clock.advance(60)
        t(3)
        assert t.state is ControllerState.IDLE
        assert sched.pending() == 0
        sched.run_all()
        assert call_log.calls == [(1,), (3,)]

    def test_kwargs_forwarded(self, sched):
        seen = []
        t = throttle(lambda *a, **kw: seen.append((a, kw)), 10, scheduler=sched)
        t(1, key="v")
        assert seen == [((1,), {"key": "v"})]

    def test_return_value_discarded(self, sched):
        t = throttle(lambda: "value", 10, scheduler=sched)
        assert t() is None


class TestThrottleRateBound:
    """At most one execution per window."""

    @pytest.mark.parametrize("interval", [1, 10, 33, 99])
    def test_rate_bound(self, sched, interval):
        delay, duration = 100, 1000
        fired_at = []
        t = throttle(lambda: fired_at.append(sched.now()), delay, scheduler=sched)

        now = 0
        while now < duration:
            sched.advance_to(now)
            t()
            now += interval
        sched.run_all()

        assert len(fired_at) <= math.ceil(duration / delay) + 1
        gaps = [b - a for a, b in zip(fired_at, fired_at[1:])]
        assert all(g >= delay for g in gaps)

    def test_every_10ms_for_one_second(self, sched):
        count = {"n": 0}

        def bump():
            count["n"] += 1

        t = throttle(bump, 100, scheduler=sched)
        for i in range(100):
            sched.advance_to(i * 10)
            t()
        sched.run_all()
        assert count["n"] == 11


class TestThrottleFaults:
    """A raising wrapped function does not wedge the controller."""

    def test_trailing_fault_clears_state(self, sched, call_log):
        fail = {"on": True}

        def flaky(x):
            if fail["on"]:
                raise RuntimeError("handler failed")
            call_log(x)

        t = throttle(flaky, 100, scheduler=sched)
        fail["on"] = False
        t("lead")
        fail["on"] = True
        sched.advance(10)
        t("trail")

        with pytest.raises(RuntimeError, match="handler failed"):
            sched.advance(90)
        assert t.state is ControllerState.IDLE
        assert t.previous == 100

        fail["on"] = False
        sched.advance(100)
        t("next")
        assert call_log.calls == [("lead",), ("next",)]

    def test_leading_fault_propagates_to_caller(self, sched):
        def boom():
            raise ValueError("leading failed")

        t = throttle(boom, 100, scheduler=sched)
        with pytest.raises(ValueError, match="leading failed"):
            t()
        assert t.state is ControllerState.IDLE


class TestThrottleConstruction:

    def test_wraps_metadata(self, sched):
        def on_scroll(event):
            """Handle scroll."""

        t = throttle(on_scroll, 50, scheduler=sched)
        assert isinstance(t, Throttled)
        assert t.__name__ == "on_scroll"
        assert t.__doc__ == "Handle scroll."
        assert t.__wrapped__ is on_scroll
        assert t.delay == 50

    def test_throttle_of_throttled_keeps_own_state(self, sched, call_log):
        inner = throttle(call_log, 10, scheduler=sched)
        outer = throttle(inner, 100, scheduler=sched)
        assert outer.delay == 100
        assert outer.state is ControllerState.IDLE
        outer(1)
        assert call_log.calls == [(1,)]

    def test_uses_default_scheduler(self, sched, call_log):
        set_default_scheduler(sched)
        t = throttle(call_log, 100)
        t(1)
        sched.advance(10)
        t(2)
        sched.run_all()
        assert call_log.count == 2

    def test_bad_arguments(self, sched):
        with pytest.raises(TypeError, match="throttle target"):
            throttle(None, 10, scheduler=sched)
        with pytest.raises(TypeError, match="throttle delay_ms"):
            throttle(print, "10", scheduler=sched)
        with pytest.raises(TypeError):
            throttle(print, True, scheduler=sched)
