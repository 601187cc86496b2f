"""
Environment-driven configuration.

Values are read once at import. Library code looks them up as module
attributes at call time, so tests can monkeypatch them.

    MORLOCK_MAX_BOUNCES   max Thunks executed per trampoline call (0 = unlimited)
    MORLOCK_SCHEDULER     default scheduler: "asyncio" or "virtual"
"""

from __future__ import annotations

import os

SCHEDULER_CHOICES = ("asyncio", "virtual")

MAX_BOUNCES = int(os.environ.get("MORLOCK_MAX_BOUNCES", "0"))

DEFAULT_SCHEDULER = os.environ.get("MORLOCK_SCHEDULER", "asyncio").strip().lower()
