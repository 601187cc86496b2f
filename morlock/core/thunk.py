"""
Thunk: a deferred, zero-argument computation.

A Thunk is the trampoline's loop token. A trampolined function returns one
instead of recursing; the driver executes it and looks at what comes back.
"""

from __future__ import annotations

from typing import Any, Callable


class ThunkSpentError(RuntimeError):
    """Raised when a Thunk is executed a second time."""


class Thunk:
    """
    Wraps exactly one no-argument callable.

    The callable is fixed at creation. Nothing runs until exec() is called,
    and exec() may only be called once.
    """

    __slots__ = ("_fn", "_spent")

    def __init__(self, fn: Callable[[], Any]) -> None:
        if not callable(fn):
            raise TypeError(f"Thunk body must be callable, got {type(fn).__name__}")
        self._fn = fn
        self._spent = False

    @property
    def spent(self) -> bool:
        """True once exec() has been called."""
        return self._spent

    def exec(self) -> Any:
        """
        Run the deferred computation and return its result.

        The result may itself be another Thunk.

        Raises:
            ThunkSpentError: If this Thunk has already been executed.
        """
        if self._spent:
            raise ThunkSpentError(f"Thunk already executed: {self._fn!r}")
        self._spent = True
        return self._fn()

    def __repr__(self) -> str:
        state = "spent" if self._spent else "pending"
        return f"Thunk({self._fn!r}, {state})"


def is_thunk(value: Any) -> bool:
    """Return True if value is a Thunk."""
    return isinstance(value, Thunk)
