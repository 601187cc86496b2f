# morlock/__init__.py
"""
morlock public API surface.

Execution control in two halves:

    - Fold engine: Thunk, trampoline, tail_call, run_trampoline,
                   reduce, map, select, reject, map_object,
                   object_keys, object_vals
    - Sequence glue: SeqView, first, rest, is_empty, last, nth,
                     copy_array, push, pop, unshift, shift, sort_by
    - Rate control: throttle, debounce, delay, defer, ControllerState
    - Collaborators: VirtualScheduler, AsyncioScheduler,
                     get_default_scheduler, set_default_scheduler,
                     MonotonicClock, WallClock, ManualClock
"""

from __future__ import annotations

from .core.thunk import Thunk, ThunkSpentError, is_thunk
from .core.trampoline import (
    BounceLimitExceeded,
    run_trampoline,
    tail_call,
    trampoline,
)
from .core.seq import (
    SeqView,
    as_seq,
    copy_array,
    first,
    is_empty,
    last,
    nth,
    pop,
    push,
    rest,
    shift,
    sort_by,
    unshift,
)
from .core.fold import (
    map,
    map_object,
    object_keys,
    object_vals,
    reduce,
    reject,
    select,
)

# ---------------------------------------------------------------------------
# Rate control
# ---------------------------------------------------------------------------

from .timing.clock import ManualClock, MonotonicClock, WallClock
from .timing.scheduler import (
    AsyncioScheduler,
    SchedulerError,
    VirtualScheduler,
    get_default_scheduler,
    set_default_scheduler,
)
from .timing.rate import (
    ControllerState,
    Debounced,
    Throttled,
    debounce,
    defer,
    delay,
    throttle,
)


__all__ = [
    # thunks / trampoline
    "Thunk",
    "ThunkSpentError",
    "is_thunk",
    "BounceLimitExceeded",
    "run_trampoline",
    "tail_call",
    "trampoline",

    # sequences
    "SeqView",
    "as_seq",
    "copy_array",
    "first",
    "is_empty",
    "last",
    "nth",
    "pop",
    "push",
    "rest",
    "shift",
    "sort_by",
    "unshift",

    # fold + combinators (map and reduce are left out so star-imports
    # do not shadow the builtins)
    "map_object",
    "object_keys",
    "object_vals",
    "reject",
    "select",

    # clocks / schedulers
    "ManualClock",
    "MonotonicClock",
    "WallClock",
    "AsyncioScheduler",
    "SchedulerError",
    "VirtualScheduler",
    "get_default_scheduler",
    "set_default_scheduler",

    # rate control
    "ControllerState",
    "Debounced",
    "Throttled",
    "debounce",
    "defer",
    "delay",
    "throttle",
]
