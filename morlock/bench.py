# morlock/bench.py
"""
Small benchmark and simulation helpers.

benchmark_reduce times the trampolined fold on a long range. The two
simulate_* helpers drive throttle/debounce with a synthetic event stream on
virtual time, so their results are exact and repeatable.

Usage:

    from morlock.bench import benchmark_reduce, simulate_throttle

    benchmark_reduce(length=100_000, repeats=3)
    simulate_throttle(delay=100, interval=10, duration=1000)

The CLI front end is morlock.bench_cli.
"""

from __future__ import annotations

import math
import time
from typing import Any, Dict

from morlock.core.fold import reduce
from morlock.timing.rate import debounce, throttle
from morlock.timing.scheduler import VirtualScheduler


def benchmark_reduce(length: int = 100_000, repeats: int = 3) -> Dict[str, Any]:
    """
    Sum range(length) with reduce() `repeats` times.

    Returns:
        {"length", "repeats", "result", "min_s", "max_s", "avg_s", "total_s"}
    """
    if length < 0:
        raise ValueError("length must be >= 0")
    if repeats <= 0:
        raise ValueError("repeats must be > 0")

    data = range(length)
    times = []
    result = 0

    for _ in range(repeats):
        t0 = time.perf_counter()
        result = reduce(lambda a, b: a + b, data, 0)
        t1 = time.perf_counter()
        times.append(t1 - t0)

    total = sum(times)
    return {
        "length": length,
        "repeats": repeats,
        "result": result,
        "min_s": min(times),
        "max_s": max(times),
        "avg_s": total / repeats,
        "total_s": total,
    }


def simulate_throttle(delay: float = 100, interval: float = 10, duration: float = 1000) -> Dict[str, Any]:
    """
    Call a throttled counter every `interval` ms for `duration` ms.

    Calls happen at t = 0, interval, 2*interval, ... while t < duration,
    then pending timers are drained.

    Returns:
        {"calls", "executions", "max_allowed", "execution_times"}
        max_allowed is ceil(duration / delay) + 1.
    """
    if delay <= 0 or interval <= 0 or duration <= 0:
        raise ValueError("delay, interval and duration must be > 0")

    sched = VirtualScheduler()
    fired_at: list[float] = []
    throttled = throttle(lambda: fired_at.append(sched.now()), delay, scheduler=sched)

    calls = 0
    t = 0.0
    while t < duration:
        sched.advance_to(t)
        throttled()
        calls += 1
        t = calls * interval
    sched.run_all()

    return {
        "calls": calls,
        "executions": len(fired_at),
        "max_allowed": math.ceil(duration / delay) + 1,
        "execution_times": fired_at,
    }


def simulate_debounce(
    delay: float = 100,
    interval: float = 10,
    burst_size: int = 10,
    bursts: int = 3,
) -> Dict[str, Any]:
    """
    Send `bursts` bursts of `burst_size` calls, `interval` ms apart.

    Bursts are separated by a quiet period longer than `delay`, so each
    burst should collapse to exactly one execution carrying the burst's
    last argument.

    Returns:
        {"calls", "executions", "executed_args", "execution_times"}
    """
    if delay <= 0 or interval < 0:
        raise ValueError("delay must be > 0 and interval >= 0")
    if burst_size <= 0 or bursts <= 0:
        raise ValueError("burst_size and bursts must be > 0")
    if interval >= delay:
        raise ValueError("interval must be shorter than delay for calls to collapse")

    sched = VirtualScheduler()
    seen: list[int] = []
    fired_at: list[float] = []

    def record(arg: int) -> None:
        seen.append(arg)
        fired_at.append(sched.now())

    debounced = debounce(record, delay, scheduler=sched)

    calls = 0
    for _ in range(bursts):
        for i in range(burst_size):
            if i:
                sched.advance(interval)
            debounced(calls)
            calls += 1
        sched.advance(delay * 2)

    return {
        "calls": calls,
        "executions": len(seen),
        "executed_args": seen,
        "execution_times": fired_at,
    }
