"""
Reduction engine and the combinators derived from it.

reduce() is a left fold written as a trampolined, self-referential function:
each step combines the head into the accumulator and tail-calls itself on
the rest. The trampoline keeps the host stack flat, so arbitrarily long
sequences fold without RecursionError.

map, select, reject and map_object are all defined through reduce() and
inherit its ordering and stack-safety guarantees. None of them mutate their
input; each returns a fresh container.

Note: this module shadows the builtins ``map`` and ``reduce``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional, TypeVar

from morlock.core.seq import SeqView, as_seq, first, is_empty, rest
from morlock.core.trampoline import tail_call, trampoline
from morlock.guards import assert_callable

A = TypeVar("A")
T = TypeVar("T")
U = TypeVar("U")


class _Done:
    """Terminal box: keeps a Thunk-valued accumulator away from the driver."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value


def reduce(
    f: Callable[[A, T], A],
    sequence: Optional[Iterable[T]],
    initial: A,
) -> A:
    """
    Fold sequence left-to-right with f, starting from initial.

    reduce(f, [e0, e1, e2], init) == f(f(f(init, e0), e1), e2)

    An empty sequence returns initial unchanged without calling f.
    Exceptions raised by f propagate; no partial accumulator is returned.
    """
    assert_callable(f, "reduce combining function")

    @trampoline
    def _reduce(acc: A, remaining: SeqView) -> Any:
        if is_empty(remaining):
            return _Done(acc)
        return tail_call(_reduce, f(acc, first(remaining)), rest(remaining))

    return _reduce(initial, as_seq(sequence)).value


def _append(acc: list, value: Any) -> list:
    # acc is always a list created by the calling combinator, never user input
    acc.append(value)
    return acc


def map(f: Callable[[T], U], sequence: Optional[Iterable[T]]) -> list[U]:
    """New list of f(element) for each element, in order."""
    assert_callable(f, "map transform")
    return reduce(lambda acc, v: _append(acc, f(v)), sequence, [])


def select(f: Callable[[T], Any], sequence: Optional[Iterable[T]]) -> list[T]:
    """New list of the elements for which f(element) is truthy."""
    assert_callable(f, "select predicate")
    return reduce(lambda acc, v: _append(acc, v) if f(v) else acc, sequence, [])


def reject(f: Callable[[T], Any], sequence: Optional[Iterable[T]]) -> list[T]:
    """New list of the elements for which f(element) is falsy."""
    assert_callable(f, "reject predicate")
    return reduce(lambda acc, v: acc if f(v) else _append(acc, v), sequence, [])


def object_keys(obj: Any) -> list[Any]:
    """
    Keys of a mapping, or attribute names of a plain object.

    None yields []. Each key appears exactly once, in insertion order.
    """
    if obj is None:
        return []
    if isinstance(obj, Mapping):
        return list(obj.keys())
    return list(vars(obj).keys())


def _lookup(obj: Any, key: Any) -> Any:
    if isinstance(obj, Mapping):
        return obj[key]
    return getattr(obj, key)


def map_object(f: Callable[[Any, Any], U], obj: Any) -> dict[Any, U]:
    """
    New dict with result[key] = f(obj[key], key) for every key of obj.

    Plain objects are read through vars(); None yields {}.
    """
    assert_callable(f, "map_object transform")

    def _set(acc: dict, key: Any) -> dict:
        acc[key] = f(_lookup(obj, key), key)
        return acc

    return reduce(_set, object_keys(obj), {})


def object_vals(obj: Any) -> list[Any]:
    """Values of obj in key order."""
    return map(lambda key: _lookup(obj, key), object_keys(obj))
