"""
Argument guardrails shared by the fold engine and the rate controllers.

Each guard raises a builtin exception with a context string so the caller
can see which argument was rejected.
"""

from __future__ import annotations

import math
from typing import Any


def assert_callable(value: Any, context: str = "value") -> None:
    """
    Assert that a value can be called, raising TypeError if not.

    Args:
        value: The value to check.
        context: Description for error message (e.g., "reduce combining function").

    Raises:
        TypeError: If value is not callable.
    """
    if not callable(value):
        raise TypeError(
            f"{context} must be callable, got {type(value).__name__}: {value!r}"
        )


def assert_delay(value: Any, context: str = "delay") -> None:
    """
    Assert that a value is usable as a delay in milliseconds.

    Negative delays are accepted; schedulers clamp them to zero.

    Raises:
        TypeError: If value is not an int or float (bool is rejected).
        ValueError: If value is NaN.
    """
    # bool is an int subclass, but True/False as a delay is always a bug
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(
            f"{context} must be a number of milliseconds, got {type(value).__name__}: {value!r}"
        )
    if isinstance(value, float) and math.isnan(value):
        raise ValueError(f"{context} must not be NaN")
