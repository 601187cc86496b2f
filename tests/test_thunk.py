"""
Tests for Thunk: deferred, single-use, zero-argument computations.
"""

import pytest

from morlock.core.thunk import Thunk, ThunkSpentError, is_thunk


class TestThunkCreation:
    """Creating a Thunk must not run anything."""

    def test_no_side_effect_until_exec(self):
        """The body is not called at creation."""
        counter = {"n": 0}

        def body():
            counter["n"] += 1
            return "done"

        t = Thunk(body)
        assert counter["n"] == 0
        assert t.spent is False

        assert t.exec() == "done"
        assert counter["n"] == 1

    def test_non_callable_rejected(self):
        """Thunk body must be callable."""
        with pytest.raises(TypeError):
            Thunk(42)

    def test_is_thunk(self):
        assert is_thunk(Thunk(lambda: 1)) is True
        assert is_thunk(lambda: 1) is False
        assert is_thunk(None) is False


class TestThunkExec:
    """Executing a Thunk."""

    def test_returns_nested_thunk_unchanged(self):
        """A Thunk returning a Thunk hands it back without running it."""
        inner = Thunk(lambda: 7)
        outer = Thunk(lambda: inner)
        assert outer.exec() is inner
        assert inner.spent is False

    def test_single_use(self):
        """A second exec() raises ThunkSpentError."""
        t = Thunk(lambda: 1)
        t.exec()
        assert t.spent is True
        with pytest.raises(ThunkSpentError):
            t.exec()

    def test_spent_error_is_runtime_error(self):
        assert issubclass(ThunkSpentError, RuntimeError)

    def test_exception_propagates_and_marks_spent(self):
        """A raising body propagates; the Thunk still counts as used."""
        def boom():
            raise ValueError("boom")

        t = Thunk(boom)
        with pytest.raises(ValueError, match="boom"):
            t.exec()
        assert t.spent is True

    def test_repr_shows_state(self):
        t = Thunk(lambda: 1)
        assert "pending" in repr(t)
        t.exec()
        assert "spent" in repr(t)
