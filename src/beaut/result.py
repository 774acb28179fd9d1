"""Result type: Ok(T) | Err(E) with consume-once ownership."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Literal, TypedDict

import msgspec

from beaut._linear import Linear
from beaut.core import Mut, Ref
from beaut.errors import UnwrapFailure
from beaut.option import Nothing, Option, Some

__all__ = ['Err', 'ErrObject', 'Ok', 'OkObject', 'Result', 'ResultObject']


class _Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant record."""

    content: Mut[T]


class _Err[E](msgspec.Struct, frozen=True, gc=False):
    """Failure variant record."""

    content: Mut[E]


class OkObject[T](TypedDict):
    ok: Literal[True]
    value: T


class ErrObject[E](TypedDict):
    ok: Literal[False]
    value: E


type ResultObject[T, E] = OkObject[T] | ErrObject[E]


class Result[T, E](Linear[_Ok[T] | _Err[E]]):
    """Either success (Ok) or failure (Err), usable exactly once.

    Ownership follows Option: consuming operations move the value into a new
    owner and leave this handle unusable. Peeks (is_ok, is_err, is_ok_and,
    is_err_and, as_ref, as_mut, eq) never consume.

    Examples:
        >>> Ok(2).map(lambda x: x + 1)
        Ok(3)
        >>> Err('boom').unwrap_or(0)
        0
    """

    __slots__ = ()

    _kind = 'result'

    # --- Peeks ---

    def is_ok(self) -> bool:
        """Return True if the result is Ok."""
        return isinstance(self._live(), _Ok)

    def is_err(self) -> bool:
        """Return True if the result is Err."""
        return isinstance(self._live(), _Err)

    def is_ok_and(self, pred: Callable[[T], bool]) -> bool:
        """Return True if the result is Ok and the value matches a predicate."""
        slot = self._live()
        return isinstance(slot, _Ok) and bool(pred(slot.content.value))

    def is_err_and(self, pred: Callable[[E], bool]) -> bool:
        """Return True if the result is Err and the error matches a predicate."""
        slot = self._live()
        return isinstance(slot, _Err) and bool(pred(slot.content.value))

    def as_ref(self) -> Result[Ref[T], Ref[E]]:
        """Convert to Result[Ref[T], Ref[E]] without consuming."""
        slot = self._live()
        if isinstance(slot, _Ok):
            return Ok(Ref(slot.content))
        return Err(Ref(slot.content))

    def as_mut(self) -> Result[Mut[T], Mut[E]]:
        """Convert to Result[Mut[T], Mut[E]] without consuming.

        The handle aliases this result's storage.
        """
        slot = self._live()
        if isinstance(slot, _Ok):
            return Ok(slot.content)
        return Err(slot.content)

    def eq(self, other: Result[T, E]) -> bool:
        """Shallow equality with another result; neither side is consumed."""
        slot = self._live()
        other_slot = other._live()
        if type(slot) is not type(other_slot):
            return False
        return bool(slot.content.value == other_slot.content.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self.eq(other)

    __hash__ = None  # type: ignore[assignment]

    # --- Consuming reads ---

    def expect(self, msg: str) -> T:
        """Return the contained Ok value.

        Raises:
            UnwrapError: ``"{msg}: {error}"`` if the result is Err.
        """
        slot = self._move()
        if isinstance(slot, _Ok):
            return slot.content.value
        error = slot.content.value
        raise UnwrapFailure(f'{msg}: {error}', error).to_exception()

    def unwrap(self) -> T:
        """Return the contained Ok value.

        Raises:
            UnwrapError: Carrying the error, with its str() as message, if Err.
        """
        slot = self._move()
        if isinstance(slot, _Ok):
            return slot.content.value
        error = slot.content.value
        raise UnwrapFailure(str(error), error).to_exception()

    def unwrap_or(self, default: T) -> T:
        """Return the contained Ok value or a provided default."""
        slot = self._move()
        return slot.content.value if isinstance(slot, _Ok) else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Return the contained Ok value or compute it from a closure."""
        slot = self._move()
        return slot.content.value if isinstance(slot, _Ok) else f()

    def expect_err(self, msg: str) -> E:
        """Return the contained Err value.

        Raises:
            UnwrapError: ``"{msg}: {value}"`` if the result is Ok.
        """
        slot = self._move()
        if isinstance(slot, _Err):
            return slot.content.value
        value = slot.content.value
        raise UnwrapFailure(f'{msg}: {value}', value).to_exception()

    def unwrap_err(self) -> E:
        """Return the contained Err value.

        Raises:
            UnwrapError: Carrying the Ok value if the result is Ok.
        """
        slot = self._move()
        if isinstance(slot, _Err):
            return slot.content.value
        value = slot.content.value
        raise UnwrapFailure(str(value), value).to_exception()

    def into_ok(self) -> T:
        """Return the Ok value of a result that cannot fail."""
        slot = self._move()
        if isinstance(slot, _Ok):
            return slot.content.value
        error = slot.content.value
        raise UnwrapFailure(f'called `Result.into_ok()` on an `Err` value: {error}', error).to_exception()

    def into_err(self) -> E:
        """Return the Err value of a result that cannot succeed."""
        slot = self._move()
        if isinstance(slot, _Err):
            return slot.content.value
        value = slot.content.value
        raise UnwrapFailure(f'called `Result.into_err()` on an `Ok` value: {value}', value).to_exception()

    # --- Transforms ---

    def map[U](self, f: Callable[[T], U]) -> Result[U, E]:
        """Map Result[T, E] to Result[U, E] by applying f to a contained Ok value."""
        slot = self._move()
        if isinstance(slot, _Ok):
            return Ok(f(slot.content.value))
        return Result(slot)

    def map_err[F](self, f: Callable[[E], F]) -> Result[T, F]:
        """Map Result[T, E] to Result[T, F] by applying f to a contained Err value."""
        slot = self._move()
        if isinstance(slot, _Err):
            return Err(f(slot.content.value))
        return Result(slot)

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:
        """Return the default (if Err), or apply f to the contained value."""
        slot = self._move()
        return f(slot.content.value) if isinstance(slot, _Ok) else default

    def map_or_else[U](self, default: Callable[[E], U], f: Callable[[T], U]) -> U:
        """Map Ok through f, or Err through default."""
        slot = self._move()
        if isinstance(slot, _Ok):
            return f(slot.content.value)
        return default(slot.content.value)

    def inspect(self, f: Callable[[T], Any]) -> Result[T, E]:
        """Call f with the Ok value if any, returning the result re-packaged."""
        slot = self._move()
        if isinstance(slot, _Ok):
            f(slot.content.value)
        return Result(slot)

    def inspect_err(self, f: Callable[[E], Any]) -> Result[T, E]:
        """Call f with the Err value if any, returning the result re-packaged."""
        slot = self._move()
        if isinstance(slot, _Err):
            f(slot.content.value)
        return Result(slot)

    def and_[U](self, res: Result[U, E]) -> Result[U, E]:
        """Return res if this result is Ok, otherwise this Err. Both are consumed."""
        self._live()
        res._live()
        slot = self._move()
        other_slot = res._move()
        if isinstance(slot, _Ok):
            return Result(other_slot)
        return Result(slot)

    def and_then[U](self, op: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Call op with the Ok value, otherwise return this Err.

        Examples:
            >>> Ok(4).and_then(lambda x: Ok(x * 2) if x < 10 else Err('too big'))
            Ok(8)
        """
        slot = self._move()
        if isinstance(slot, _Ok):
            return op(slot.content.value).drop()
        return Result(slot)

    def or_[F](self, res: Result[T, F]) -> Result[T, F]:
        """Return this Ok, otherwise res. Both are consumed."""
        self._live()
        res._live()
        slot = self._move()
        other_slot = res._move()
        if isinstance(slot, _Ok):
            return Result(slot)
        return Result(other_slot)

    def or_else[F](self, op: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Call op with the Err value, otherwise return this Ok."""
        slot = self._move()
        if isinstance(slot, _Ok):
            return Result(slot)
        return op(slot.content.value).drop()

    # --- Conversions ---

    def ok(self) -> Option[T]:
        """Convert to Option[T], discarding the error if any."""
        slot = self._move()
        return Some(slot.content.value) if isinstance(slot, _Ok) else Nothing()

    def err(self) -> Option[E]:
        """Convert to Option[E], discarding the success value if any."""
        slot = self._move()
        return Some(slot.content.value) if isinstance(slot, _Err) else Nothing()

    def transpose[U](self: Result[Option[U], E]) -> Option[Result[U, E]]:
        """Transpose a Result of an Option into an Option of a Result.

        Ok(Nothing) maps to Nothing. Ok(Some(v)) and Err(e) map to
        Some(Ok(v)) and Some(Err(e)).
        """
        slot = self._move()
        if isinstance(slot, _Err):
            return Some(Result(slot))
        return slot.content.value.map(Ok)

    def flatten[U](self: Result[Result[U, E], E]) -> Result[U, E]:
        """Convert Result[Result[U, E], E] to Result[U, E]."""
        slot = self._move()
        if isinstance(slot, _Ok):
            return slot.content.value.drop()
        return Result(slot)

    # --- Export ---

    def to_object(self) -> ResultObject[T, E]:
        """Consume the result into its plain dict form."""
        slot = self._move()
        if isinstance(slot, _Ok):
            return {'ok': True, 'value': slot.content.value}
        return {'ok': False, 'value': slot.content.value}

    @classmethod
    def from_object(cls, obj: ResultObject[T, E]) -> Result[T, E]:
        """Build a result from its plain dict form."""
        if obj['ok']:
            return cls(_Ok(Mut(obj['value'])))
        return cls(_Err(Mut(obj['value'])))

    def __repr__(self) -> str:
        slot = self._slot
        if slot is None:
            return '<consumed Result>'
        name = 'Ok' if isinstance(slot, _Ok) else 'Err'
        return f'{name}({slot.content.value!r})'


def Ok[T](value: T) -> Result[T, Any]:  # noqa: N802
    """Success value of type T."""
    return Result(_Ok(Mut(value)))


def Err[E](error: E) -> Result[Any, E]:  # noqa: N802
    """Failure value of type E."""
    return Result(_Err(Mut(error)))
