"""
Trampoline driver and tail-call adapter.

A trampolined function never recurses directly. It returns
``tail_call(next_fn, *args)`` instead, and the driver loop executes the
resulting Thunk. Host stack depth stays constant however many logical
steps run.

    @trampoline
    def count_down(n):
        return n if n == 0 else tail_call(count_down, n - 1)

    count_down(1_000_000)  # -> 0, no RecursionError

A per-call bounce budget guards against runaway loops. It defaults to
``config.MAX_BOUNCES`` (0 = unlimited).
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional

from morlock import config
from morlock.core.thunk import Thunk
from morlock.guards import assert_callable


class BounceLimitExceeded(RuntimeError):
    """Raised when a trampoline executes more Thunks than its budget allows."""


def _resolve_budget(max_bounces: Optional[int]) -> int:
    if max_bounces is None:
        return config.MAX_BOUNCES
    if max_bounces < 0:
        raise ValueError(f"max_bounces must be >= 0, got {max_bounces}")
    return max_bounces


def run_trampoline(result: Any, max_bounces: Optional[int] = None) -> Any:
    """
    Execute Thunks until a non-Thunk value appears, and return it.

    Exceptions raised by a Thunk propagate immediately; no further Thunks
    are executed.

    Args:
        result: A Thunk, or an already-final value (returned unchanged).
        max_bounces: Maximum Thunks to execute. None uses config.MAX_BOUNCES,
            0 means unlimited.

    Raises:
        BounceLimitExceeded: If the budget runs out before a final value.
    """
    limit = _resolve_budget(max_bounces)
    bounces = 0

    while isinstance(result, Thunk):
        if limit and bounces >= limit:
            raise BounceLimitExceeded(
                f"Trampoline bounce limit exceeded ({limit} bounces). "
                f"Possible non-terminating tail-call chain."
            )
        result = result.exec()
        bounces += 1

    return result


def trampoline(
    fn: Optional[Callable[..., Any]] = None,
    *,
    max_bounces: Optional[int] = None,
) -> Callable[..., Any]:
    """
    Wrap fn so that calling it drives the trampoline to a final value.

    Usable bare (``@trampoline``) or with options
    (``@trampoline(max_bounces=100)``). The wrapper keeps fn's name and
    signature and exposes the undecorated function as ``original_fn``.
    """
    if fn is None:
        return functools.partial(trampoline, max_bounces=max_bounces)

    assert_callable(fn, "trampoline target")

    @functools.wraps(fn)
    def trampolined(*args: Any, **kwargs: Any) -> Any:
        return run_trampoline(fn(*args, **kwargs), max_bounces)

    trampolined.original_fn = fn  # type: ignore[attr-defined]
    return trampolined


def tail_call(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Thunk:
    """
    Describe the call fn(*args, **kwargs) as a Thunk without running it.

    If fn is itself trampolined, the Thunk calls its original_fn so that a
    single driver loop handles the whole chain.
    """
    assert_callable(fn, "tail_call target")
    target = getattr(fn, "original_fn", None)
    if not callable(target):
        target = fn
    return Thunk(functools.partial(target, *args, **kwargs))
