"""
Sequence views and the small list helpers the fold engine is built on.

Design:
-------
* The fold walks a sequence by head/tail decomposition:
      first(seq)  -> head element
      rest(seq)   -> SeqView over the remaining elements

* rest() never copies. A SeqView is (source, start offset), so each step of
  a fold is O(1) and the source is never mutated.

* The list helpers (push, pop, unshift, shift, sort_by) are non-mutating:
  each returns a new list.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable, Iterable, Iterator, Optional


class SeqView(Sequence):
    """Immutable view of source[start:] that shares storage with source."""

    __slots__ = ("_source", "_start")

    def __init__(self, source: Sequence, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"SeqView start must be >= 0, got {start}")
        self._source = source
        self._start = min(start, len(source))

    @property
    def source(self) -> Sequence:
        return self._source

    @property
    def start(self) -> int:
        return self._start

    def __len__(self) -> int:
        return len(self._source) - self._start

    def __getitem__(self, index):
        if isinstance(index, slice):
            return list(self)[index]
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("SeqView index out of range")
        return self._source[self._start + index]

    def __iter__(self) -> Iterator[Any]:
        source = self._source
        for i in range(self._start, len(source)):
            yield source[i]

    def head(self) -> Any:
        """First element of the view, or None when empty."""
        return self._source[self._start] if len(self) else None

    def tail(self, count: int = 1) -> "SeqView":
        """View without the first count elements."""
        return SeqView(self._source, self._start + count)

    def to_list(self) -> list[Any]:
        return list(self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SeqView, list, tuple)):
            return len(self) == len(other) and all(
                a == b for a, b in zip(self, other)
            )
        return NotImplemented

    def __repr__(self) -> str:
        return f"SeqView({self.to_list()!r})"


def as_seq(items: Optional[Iterable[Any]]) -> SeqView:
    """
    Return a SeqView over items.

    None is the empty sequence. Iterables that are not sequences (generators,
    dict views) are materialised to a tuple once.
    """
    if items is None:
        return SeqView(())
    if isinstance(items, SeqView):
        return items
    if isinstance(items, Sequence):
        return SeqView(items)
    return SeqView(tuple(items))


# ---------------------------------------------------------------------------
# Head / tail decomposition
# ---------------------------------------------------------------------------

def is_empty(items: Optional[Sequence]) -> bool:
    """True for None and for zero-length sequences."""
    return not (items is not None and len(items))


def first(items: Sequence) -> Any:
    """First element, or None when empty."""
    return items[0] if not is_empty(items) else None


def rest(items: Optional[Iterable[Any]], from_start: int = 1) -> SeqView:
    """Everything after the first from_start elements, as a view."""
    return as_seq(items).tail(from_start)


def last(items: Sequence) -> Any:
    """Last element, or None when empty."""
    return items[-1] if not is_empty(items) else None


def nth(idx: int, items: Sequence) -> Any:
    return items[idx]


# ---------------------------------------------------------------------------
# Non-mutating list helpers
# ---------------------------------------------------------------------------

def copy_array(items: Iterable[Any]) -> list[Any]:
    """Shallow copy as a new list."""
    return list(items)


def push(items: Iterable[Any], value: Any) -> list[Any]:
    """New list with value appended."""
    out = copy_array(items)
    out.append(value)
    return out


def pop(items: Iterable[Any]) -> list[Any]:
    """New list without the last element."""
    out = copy_array(items)
    if out:
        out.pop()
    return out


def unshift(items: Iterable[Any], value: Any) -> list[Any]:
    """New list with value prepended."""
    out = copy_array(items)
    out.insert(0, value)
    return out


def shift(items: Iterable[Any]) -> list[Any]:
    """New list without the first element."""
    out = copy_array(items)
    if out:
        del out[0]
    return out


def sort_by(items: Iterable[Any], key: Optional[Callable[[Any], Any]] = None) -> list[Any]:
    """New list sorted by key."""
    return sorted(items, key=key)
