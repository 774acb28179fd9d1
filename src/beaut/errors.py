"""Error types: dual struct+exception for Result and raise-based code."""

from __future__ import annotations

from typing import Any

import msgspec

__all__ = [
    'OwnershipViolation',
    'OwnershipViolationError',
    'Rejected',
    'RejectedError',
    'UnwrapError',
    'UnwrapFailure',
]


# --- Ownership Errors ---


class OwnershipViolation(msgspec.Struct, frozen=True, gc=False):
    """A consumed container was used again - struct variant."""

    kind: str
    consumed_at: str | None = None

    def to_exception(self) -> OwnershipViolationError:
        """Convert to exception for raise-based code."""
        return OwnershipViolationError(self.kind, self.consumed_at)


class OwnershipViolationError(Exception):
    """A consumed container was used again - exception variant.

    This always signals a programming error: the value was already moved
    into another owner, and the old handle must not be touched again.
    """

    def __init__(self, kind: str, consumed_at: str | None = None) -> None:
        self.kind = kind
        self.consumed_at = consumed_at
        msg = f'cannot use consumed {kind}'
        if consumed_at:
            msg = f'{msg} (consumed at {consumed_at})'
        super().__init__(msg)

    def to_struct(self) -> OwnershipViolation:
        """Convert to struct for Result-based code."""
        return OwnershipViolation(self.kind, self.consumed_at)


# --- Unwrap Errors ---


class UnwrapFailure(msgspec.Struct, frozen=True, gc=False):
    """Unwrap on the wrong variant - struct variant."""

    message: str
    payload: Any = None

    def to_exception(self) -> UnwrapError:
        """Convert to exception for raise-based code."""
        return UnwrapError(self.message, self.payload)


class UnwrapError(Exception):
    """Unwrap on the wrong variant - exception variant.

    Attributes:
        message: Generic or caller-supplied message.
        payload: Value held by the unexpected variant (None for Nothing).
    """

    def __init__(self, message: str, payload: Any = None) -> None:
        self.message = message
        self.payload = payload
        super().__init__(message)

    def to_struct(self) -> UnwrapFailure:
        """Convert to struct for Result-based code."""
        return UnwrapFailure(self.message, self.payload)


# --- Task Errors ---


class Rejected(msgspec.Struct, frozen=True, gc=False):
    """Task rejected with a non-exception reason - struct variant."""

    reason: Any = None

    def to_exception(self) -> RejectedError:
        """Convert to exception for raise-based code."""
        return RejectedError(self.reason)


class RejectedError(Exception):
    """Task rejected with a non-exception reason - exception variant.

    Rejections carrying an exception re-raise that exception instead.
    """

    def __init__(self, reason: Any = None) -> None:
        self.reason = reason
        msg = 'Task rejected'
        if reason is not None:
            msg = f'{msg}: {reason!r}'
        super().__init__(msg)

    def to_struct(self) -> Rejected:
        """Convert to struct for Result-based code."""
        return Rejected(self.reason)
