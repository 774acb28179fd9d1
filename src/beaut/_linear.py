"""Consume-once ownership shared by Option, Result and Task."""

from __future__ import annotations

import os
import traceback
from pathlib import Path
from typing import Any, ClassVar, NoReturn, Self

from beaut._config import get_config
from beaut.errors import OwnershipViolation

__all__ = ['Linear']

_PACKAGE_DIR = str(Path(__file__).parent) + os.sep


def _is_internal(filename: str) -> bool:
    return filename.startswith(_PACKAGE_DIR)


def _caller_site() -> str | None:
    """Return "file:line" of the innermost frame outside this package."""
    for frame in reversed(traceback.extract_stack()):
        if not _is_internal(frame.filename):
            return f'{frame.filename}:{frame.lineno}'
    return None


class Linear[S]:
    """A container owning a single internal slot that can be moved out once.

    A live container holds its slot. Every consuming operation detaches the
    slot, leaving the container consumed, and hands the slot to a new owner.
    Any later operation on the consumed container raises
    OwnershipViolationError. Subclasses set ``_kind`` for error messages.

    Containers cannot be copied or pickled: a copy would be a second owner
    of the same slot. Use drop() to move a value into a new handle.
    """

    __slots__ = ('_consumed_at', '_slot')

    _kind: ClassVar[str] = 'container'

    def __init__(self, slot: S) -> None:
        self._slot: S | None = slot
        self._consumed_at: str | None = None

    def is_consumed(self) -> bool:
        """Return True if the value has been moved out of this container."""
        return self._slot is None

    def _violation(self) -> NoReturn:
        raise OwnershipViolation(self._kind, self._consumed_at).to_exception()

    def _live(self) -> S:
        """Return the slot without consuming, raising if already consumed."""
        slot = self._slot
        if slot is None:
            self._violation()
        return slot

    def _move(self) -> S:
        """Detach and return the slot, marking this container consumed."""
        slot = self._live()
        self._slot = None
        if get_config().track_consumption:
            self._consumed_at = _caller_site()
        return slot

    def drop(self) -> Self:
        """Move the value into a fresh container, leaving this one unusable."""
        return type(self)(self._move())

    def __copy__(self) -> NoReturn:
        raise TypeError(f'{type(self).__name__} cannot be copied; use drop() to move it')

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        raise TypeError(f'{type(self).__name__} cannot be copied; use drop() to move it')

    def __reduce_ex__(self, protocol: Any) -> NoReturn:
        raise TypeError(f'{type(self).__name__} cannot be pickled')
