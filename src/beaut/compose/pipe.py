"""pipe() and chain(): left-to-right function application."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, overload

__all__ = ['Chain', 'chain', 'pipe']

T = TypeVar('T')
T1 = TypeVar('T1')
T2 = TypeVar('T2')
T3 = TypeVar('T3')
T4 = TypeVar('T4')
T5 = TypeVar('T5')
T6 = TypeVar('T6')
T7 = TypeVar('T7')
T8 = TypeVar('T8')


# Overloads for type inference (up to 8 functions)
@overload
def pipe(value: T, /) -> T: ...
@overload
def pipe(value: T, fn1: Callable[[T], T1], /) -> T1: ...
@overload
def pipe(value: T, fn1: Callable[[T], T1], fn2: Callable[[T1], T2], /) -> T2: ...
@overload
def pipe(value: T, fn1: Callable[[T], T1], fn2: Callable[[T1], T2], fn3: Callable[[T2], T3], /) -> T3: ...
@overload
def pipe(
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    /,
) -> T4: ...
@overload
def pipe(
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    /,
) -> T5: ...
@overload
def pipe(
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    fn6: Callable[[T5], T6],
    /,
) -> T6: ...
@overload
def pipe(
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    fn6: Callable[[T5], T6],
    fn7: Callable[[T6], T7],
    /,
) -> T7: ...
@overload
def pipe(
    value: T,
    fn1: Callable[[T], T1],
    fn2: Callable[[T1], T2],
    fn3: Callable[[T2], T3],
    fn4: Callable[[T3], T4],
    fn5: Callable[[T4], T5],
    fn6: Callable[[T5], T6],
    fn7: Callable[[T6], T7],
    fn8: Callable[[T7], T8],
    /,
) -> T8: ...


def pipe(value: Any, *fns: Callable[..., Any]) -> Any:
    """Thread a value through unary functions, left to right.

    ``pipe(x, f, g)`` is ``g(f(x))``. Nothing is wrapped or unwrapped, so
    the usual pairing is with unbound container methods.

    Args:
        value: The initial value.
        *fns: Functions to apply in sequence.

    Returns:
        The result of the last function, or value if none are given.

    Examples:
        >>> from beaut import Option, Some
        >>> pipe(Some(2), lambda o: o.map(lambda x: x + 1), Option.unwrap)
        3
    """
    for fn in fns:
        value = fn(value)
    return value


class Chain[T]:
    """Fluent wrapper: call with a function to apply it, end() to unwrap.

    Examples:
        >>> chain(2)(lambda x: x * 3)(str).end()
        '6'
    """

    __slots__ = ('_value',)

    def __init__(self, value: T) -> None:
        self._value = value

    def __call__[R](self, f: Callable[[T], R]) -> Chain[R]:
        return Chain(f(self._value))

    def end(self) -> T:
        """Return the current value."""
        return self._value

    def __repr__(self) -> str:
        return f'Chain({self._value!r})'


def chain[T](value: T) -> Chain[T]:
    """Start a fluent chain at value."""
    return Chain(value)
