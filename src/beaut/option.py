"""Option type: Some(T) | Nothing() with consume-once ownership."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal, TypedDict

import msgspec

from beaut._linear import Linear
from beaut.core import Mut, Ref
from beaut.errors import UnwrapFailure

if TYPE_CHECKING:
    from beaut.result import Result

__all__ = ['Nothing', 'NothingObject', 'Option', 'OptionObject', 'Some', 'SomeObject']

_UNWRAP_MSG = 'called `Option.unwrap()` on a `Nothing` value'


class _Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant record: owns the payload cell."""

    content: Mut[T]


class _Nothing(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant record."""


_NOTHING = _Nothing()


class SomeObject[T](TypedDict):
    some: Literal[True]
    value: T


class NothingObject(TypedDict):
    some: Literal[False]
    value: None


type OptionObject[T] = SomeObject[T] | NothingObject
"""Plain dict form of an Option, for ``match`` statements and serialization."""


class Option[T](Linear[_Some[T] | _Nothing]):
    """An optional value that can be used exactly once.

    Every Option is either Some and holds a value, or Nothing. Reading or
    transforming the value consumes the option: the old handle becomes
    unusable and the result is a new owner. Peeks (is_some, is_none,
    is_some_and, as_ref, as_mut, as_list, eq) and in-place mutators (insert,
    get_or_insert, take, take_if, replace) keep the option live.

    Raises:
        OwnershipViolationError: From any operation on a consumed option.

    Examples:
        >>> opt = Some(2)
        >>> doubled = opt.map(lambda x: x * 2)
        >>> doubled.unwrap()
        4
        >>> opt.is_some()
        Traceback (most recent call last):
            ...
        beaut.errors.OwnershipViolationError: cannot use consumed option
    """

    __slots__ = ()

    _kind = 'option'

    # --- Peeks ---

    def is_some(self) -> bool:
        """Return True if the option is a Some value."""
        return isinstance(self._live(), _Some)

    def is_none(self) -> bool:
        """Return True if the option is Nothing."""
        return isinstance(self._live(), _Nothing)

    def is_some_and(self, pred: Callable[[T], bool]) -> bool:
        """Return True if the option is Some and the value matches a predicate.

        Args:
            pred: Predicate called with the contained value.
        """
        slot = self._live()
        return isinstance(slot, _Some) and bool(pred(slot.content.value))

    def as_ref(self) -> Option[Ref[T]]:
        """Convert from Option[T] to Option[Ref[T]] without consuming."""
        slot = self._live()
        if isinstance(slot, _Some):
            return Some(Ref(slot.content))
        return Nothing()

    def as_mut(self) -> Option[Mut[T]]:
        """Convert from Option[T] to Option[Mut[T]] without consuming.

        The Mut handle aliases this option's storage; writes through it are
        visible here until this option is consumed.
        """
        slot = self._live()
        if isinstance(slot, _Some):
            return Some(slot.content)
        return Nothing()

    def as_list(self) -> list[Ref[T]]:
        """Return a list holding a Ref to the value, or an empty list."""
        slot = self._live()
        return [Ref(slot.content)] if isinstance(slot, _Some) else []

    def eq(self, other: Option[T]) -> bool:
        """Shallow equality with another option; neither side is consumed."""
        slot = self._live()
        other_slot = other._live()
        if isinstance(slot, _Some) and isinstance(other_slot, _Some):
            return bool(slot.content.value == other_slot.content.value)
        return isinstance(slot, _Nothing) and isinstance(other_slot, _Nothing)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        return self.eq(other)

    __hash__ = None  # type: ignore[assignment]

    # --- Consuming reads ---

    def expect(self, msg: str) -> T:
        """Return the contained Some value.

        Args:
            msg: Message for the error raised on Nothing.

        Raises:
            UnwrapError: With ``msg`` if the option is Nothing.
        """
        slot = self._move()
        if isinstance(slot, _Some):
            return slot.content.value
        raise UnwrapFailure(msg).to_exception()

    def unwrap(self) -> T:
        """Return the contained Some value.

        Raises:
            UnwrapError: If the option is Nothing.
        """
        slot = self._move()
        if isinstance(slot, _Some):
            return slot.content.value
        raise UnwrapFailure(_UNWRAP_MSG).to_exception()

    def unwrap_or(self, default: T) -> T:
        """Return the contained Some value or a provided default."""
        slot = self._move()
        return slot.content.value if isinstance(slot, _Some) else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Return the contained Some value or compute it from a closure."""
        slot = self._move()
        return slot.content.value if isinstance(slot, _Some) else f()

    def to_list(self) -> list[T]:
        """Return a list with the contained value, or an empty list."""
        slot = self._move()
        return [slot.content.value] if isinstance(slot, _Some) else []

    # --- Consuming transforms ---

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """Map Option[T] to Option[U] by applying f to a contained value.

        Args:
            f: Function applied to the Some value.

        Returns:
            Some(f(value)) for Some, Nothing for Nothing.
        """
        slot = self._move()
        if isinstance(slot, _Some):
            return Some(f(slot.content.value))
        return Nothing()

    def inspect(self, f: Callable[[T], Any]) -> Option[T]:
        """Call f with the contained value if Some, returning the option re-packaged."""
        slot = self._move()
        if isinstance(slot, _Some):
            f(slot.content.value)
        return Option(slot)

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:
        """Return the default (if Nothing), or apply f to the contained value.

        ``default`` is evaluated eagerly; use map_or_else for a lazy default.
        """
        slot = self._move()
        return f(slot.content.value) if isinstance(slot, _Some) else default

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[T], U]) -> U:
        """Compute a default (if Nothing), or apply f to the contained value."""
        slot = self._move()
        return f(slot.content.value) if isinstance(slot, _Some) else default()

    def filter(self, pred: Callable[[T], bool]) -> Option[T]:
        """Keep the value only if it matches a predicate.

        Returns:
            Some(value) if the option is Some and pred(value) holds, else Nothing.
        """
        slot = self._move()
        if isinstance(slot, _Some) and pred(slot.content.value):
            return Option(slot)
        return Nothing()

    def and_[U](self, other: Option[U]) -> Option[U]:
        """Return Nothing if this option is Nothing, otherwise other.

        Both options are consumed. ``other`` is evaluated eagerly; use
        and_then for a lazily built option.
        """
        self._live()
        other._live()
        slot = self._move()
        other_slot = other._move()
        return Option(other_slot) if isinstance(slot, _Some) else Nothing()

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Return Nothing if Nothing, otherwise call f with the value and return its option.

        Also known as flatmap or bind.
        """
        slot = self._move()
        if isinstance(slot, _Some):
            return f(slot.content.value).drop()
        return Nothing()

    def or_(self, other: Option[T]) -> Option[T]:
        """Return this option if it is Some, otherwise other. Both are consumed."""
        self._live()
        other._live()
        slot = self._move()
        other_slot = other._move()
        return Option(slot) if isinstance(slot, _Some) else Option(other_slot)

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """Return this option if it is Some, otherwise call f and return its option."""
        slot = self._move()
        if isinstance(slot, _Some):
            return Option(slot)
        return f().drop()

    def xor(self, other: Option[T]) -> Option[T]:
        """Return Some if exactly one of the two options is Some, otherwise Nothing.

        Both options are consumed.
        """
        self._live()
        other._live()
        slot = self._move()
        other_slot = other._move()
        if isinstance(slot, _Some) and isinstance(other_slot, _Nothing):
            return Option(slot)
        if isinstance(slot, _Nothing) and isinstance(other_slot, _Some):
            return Option(other_slot)
        return Nothing()

    # --- Conversions ---

    def ok_or[E](self, err: E) -> Result[T, E]:
        """Transform into a Result, mapping Some(v) to Ok(v) and Nothing to Err(err)."""
        from beaut.result import Err, Ok

        slot = self._move()
        if isinstance(slot, _Some):
            return Ok(slot.content.value)
        return Err(err)

    def ok_or_else[E](self, err: Callable[[], E]) -> Result[T, E]:
        """Transform into a Result, mapping Nothing to Err(err())."""
        from beaut.result import Err, Ok

        slot = self._move()
        if isinstance(slot, _Some):
            return Ok(slot.content.value)
        return Err(err())

    def zip[U](self, other: Option[U]) -> Option[tuple[T, U]]:
        """Zip with another option.

        Returns Some((a, b)) if both are Some, otherwise Nothing. Both
        options are consumed whatever the outcome.
        """
        self._live()
        other._live()
        slot = self._move()
        other_slot = other._move()
        if isinstance(slot, _Some) and isinstance(other_slot, _Some):
            return Some((slot.content.value, other_slot.content.value))
        return Nothing()

    def zip_with[U, R](self, other: Option[U], f: Callable[[T, U], R]) -> Option[R]:
        """Zip with another option using f. Both options are consumed."""
        self._live()
        other._live()
        slot = self._move()
        other_slot = other._move()
        if isinstance(slot, _Some) and isinstance(other_slot, _Some):
            return Some(f(slot.content.value, other_slot.content.value))
        return Nothing()

    def unzip[A, B](self: Option[tuple[A, B]]) -> tuple[Option[A], Option[B]]:
        """Split Some((a, b)) into (Some(a), Some(b)); Nothing gives (Nothing, Nothing)."""
        slot = self._move()
        if isinstance(slot, _Some):
            a, b = slot.content.value
            return Some(a), Some(b)
        return Nothing(), Nothing()

    def transpose[U, E](self: Option[Result[U, E]]) -> Result[Option[U], E]:
        """Transpose an Option of a Result into a Result of an Option.

        Nothing maps to Ok(Nothing). Some(Ok(v)) maps to Ok(Some(v)) and
        Some(Err(e)) maps to Err(e).
        """
        from beaut.result import Ok

        slot = self._move()
        if isinstance(slot, _Nothing):
            return Ok(Nothing())
        return slot.content.value.map(Some)

    def flatten[U](self: Option[Option[U]]) -> Option[U]:
        """Convert Option[Option[U]] to Option[U]."""
        slot = self._move()
        if isinstance(slot, _Some):
            return slot.content.value.drop()
        return Nothing()

    # --- In-place mutators ---

    def insert(self, value: T) -> Mut[T]:
        """Store value, dropping any previous one, and return a handle to it.

        See also get_or_insert, which keeps an existing value.
        """
        self._live()
        cell = Mut(value)
        self._slot = _Some(cell)
        return cell

    def get_or_insert(self, value: T) -> Mut[T]:
        """Store value if the option is Nothing, then return a handle to the contained value."""
        slot = self._live()
        if isinstance(slot, _Nothing):
            slot = _Some(Mut(value))
            self._slot = slot
        return slot.content

    def get_or_insert_with(self, f: Callable[[], T]) -> Mut[T]:
        """Store f() if the option is Nothing, then return a handle to the contained value."""
        slot = self._live()
        if isinstance(slot, _Nothing):
            slot = _Some(Mut(f()))
            self._slot = slot
        return slot.content

    def take(self) -> Option[T]:
        """Take the value out, leaving Nothing in its place.

        Returns:
            The previous state as a new option.
        """
        slot = self._live()
        self._slot = _NOTHING
        return Option(slot)

    def take_if(self, pred: Callable[[Mut[T]], bool]) -> Option[T]:
        """Take the value out only if pred returns True for a handle to it.

        The predicate may modify the value through the handle whether or not
        it returns True.

        Returns:
            The previous state if taken, otherwise Nothing.
        """
        slot = self._live()
        if isinstance(slot, _Some) and pred(slot.content):
            return self.take()
        return Nothing()

    def replace(self, value: T) -> Option[T]:
        """Store value, returning the previous state as a new option."""
        slot = self._live()
        self._slot = _Some(Mut(value))
        return Option(slot)

    # --- Export ---

    def to_object(self) -> OptionObject[T]:
        """Consume the option into its plain dict form.

        Examples:
            >>> match Some(3).to_object():
            ...     case {'some': True, 'value': v}:
            ...         print(v)
            3
        """
        slot = self._move()
        if isinstance(slot, _Some):
            return {'some': True, 'value': slot.content.value}
        return {'some': False, 'value': None}

    @classmethod
    def from_object(cls, obj: OptionObject[T]) -> Option[T]:
        """Build an option from its plain dict form."""
        if obj['some']:
            return cls(_Some(Mut(obj['value'])))
        return cls(_NOTHING)

    def __repr__(self) -> str:
        slot = self._slot
        if slot is None:
            return '<consumed Option>'
        if isinstance(slot, _Some):
            return f'Some({slot.content.value!r})'
        return 'Nothing'


def Some[T](value: T) -> Option[T]:  # noqa: N802
    """Some value of type T."""
    return Option(_Some(Mut(value)))


def Nothing() -> Option[Any]:  # noqa: N802
    """No value."""
    return Option(_NOTHING)
