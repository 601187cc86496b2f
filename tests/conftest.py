"""
Pytest configuration for morlock tests.

Provides:
- Hypothesis profiles (select with HYPOTHESIS_PROFILE)
- A fresh VirtualScheduler per test
- Isolation of the process-default scheduler
"""

import os

import pytest
from hypothesis import settings

from morlock.timing.scheduler import VirtualScheduler, set_default_scheduler


# =============================================================================
# Hypothesis Configuration
# =============================================================================
# - print_blob=True makes failures easy to reproduce
# - "ci" derandomizes so CI runs are repeatable

settings.register_profile(
    "default",
    print_blob=True,
    derandomize=False,
)

settings.register_profile(
    "ci",
    print_blob=True,
    derandomize=True,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def sched():
    """Virtual-time scheduler starting at t=0."""
    return VirtualScheduler()


@pytest.fixture(autouse=True)
def _reset_default_scheduler():
    """Each test starts and ends with the default scheduler unset."""
    set_default_scheduler(None)
    yield
    set_default_scheduler(None)


class CallLog:
    """Callable that records every call's positional arguments."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def count(self):
        return len(self.calls)


@pytest.fixture
def call_log():
    return CallLog()
