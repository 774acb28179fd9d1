"""Core helpers: reference cells, identity/empty, and clone()."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

import msgspec

if TYPE_CHECKING:
    from beaut.result import Result

__all__ = ['Mut', 'Ref', 'clone', 'empty', 'identity']


class Mut[T](msgspec.Struct):
    """A mutable reference: a single-field cell shared with its container.

    Handles returned by ``Option.insert`` or ``Result.as_mut`` are Mut cells.
    Writing ``handle.value`` writes through to the container that produced it,
    for as long as that container stays live.
    """

    value: T


class Ref[T]:
    """A read-only view over a Mut cell.

    Reading ``value`` always reflects the cell's current content.

    Examples:
        >>> cell = Mut(1)
        >>> ref = Ref(cell)
        >>> cell.value = 2
        >>> ref.value
        2
    """

    __slots__ = ('_cell',)

    def __init__(self, cell: Mut[T]) -> None:
        self._cell = cell

    @property
    def value(self) -> T:
        return self._cell.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Ref):
            return self._cell.value == other._cell.value
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'Ref({self._cell.value!r})'


def identity[T](x: T) -> T:
    """Return the argument unchanged."""
    return x


def empty(*_: Any, **__: Any) -> None:
    """Accept anything, do nothing."""


def clone[T](value: T) -> Result[T, Exception]:
    """Deep-copy a value, adapting copy failures into Err.

    Examples:
        >>> clone([1, [2]])
        Ok([1, [2]])
    """
    from beaut.decorators.safe import try_catch

    return try_catch(copy.deepcopy, value)
