"""Error taxonomy for klaw-optional containers and queries.

Every error raised by the library derives from `OptionalError`. Cancellation
has both a struct variant (`Cancelled`, for code that keeps outcomes as data)
and an exception variant (`CancelledError`, for raise-based code).
"""

from __future__ import annotations

import asyncio

import anyio
import msgspec

__all__ = [
    'Cancelled',
    'CancelledError',
    'EmptyValueError',
    'InvalidArgumentError',
    'MultipleMatchesError',
    'OptionalError',
    'WrongSideError',
    'is_cancellation',
    'require',
]


class OptionalError(Exception):
    """Base exception class for klaw-optional errors.

    Attributes:
        message (str): A human-readable description of the error.
        code (str | None): An optional error code for programmatic error handling.

    Example:
        ```python
        from klaw_optional import OptionalError, query

        try:
            query.single_matching([1, 2])
        except OptionalError as e:
            print(e.code)  # multiple_matches
        ```
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        """Initialize an OptionalError.

        Args:
            message (str): A human-readable description of the error.
            code (str | None): An optional error code for programmatic error handling.
        """
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        if self.code:
            return f'{self.__class__.__name__}({self.message!r}, code={self.code!r})'
        return f'{self.__class__.__name__}({self.message!r})'


class InvalidArgumentError(OptionalError, ValueError):
    """A required function, generator or sequence argument was None."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f'Argument {argument!r} must not be None', code='invalid_argument')


class MultipleMatchesError(OptionalError, ValueError):
    """More than one element matched a single-match query."""

    def __init__(self, message: str = 'Sequence contains more than one matching element') -> None:
        super().__init__(message, code='multiple_matches')


class EmptyValueError(OptionalError, LookupError):
    """A value was requested from an empty container."""

    def __init__(self, message: str = 'Maybe is empty') -> None:
        super().__init__(message, code='empty_value')


class WrongSideError(OptionalError, LookupError):
    """The requested side of an Either is not populated."""

    def __init__(self, side: str) -> None:
        self.side = side
        super().__init__(f'Either has no {side} value', code='wrong_side')


# --- Cancellation ---


class Cancelled(msgspec.Struct, frozen=True, gc=False):
    """Operation was cancelled - struct variant for outcome-as-data code."""

    reason: str | None = None

    def to_exception(self) -> CancelledError:
        """Convert to exception for raise-based code."""
        return CancelledError(self.reason)


class CancelledError(OptionalError):
    """Operation was cancelled - exception variant."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(reason or 'Operation cancelled', code='cancelled')

    def to_struct(self) -> Cancelled:
        """Convert to struct for outcome-as-data code."""
        return Cancelled(self.reason)


def _backend_cancellation() -> type[BaseException]:
    """Return the running async backend's cancellation exception class."""
    try:
        return anyio.get_cancelled_exc_class()
    except RuntimeError:
        # no async library running in this thread
        return asyncio.CancelledError


def is_cancellation(exc: BaseException | None) -> bool:
    """Check whether an exception is, or wraps, a cancellation signal.

    Recognises `CancelledError`, the async backend's own cancellation class,
    exception groups containing a cancellation, and explicit `__cause__`
    chains ending in one.

    Args:
        exc: The exception to inspect.

    Returns:
        True if the exception represents cancellation.
    """
    seen: set[int] = set()
    cancel_types = (CancelledError, asyncio.CancelledError, _backend_cancellation())
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        if isinstance(exc, cancel_types):
            return True
        if isinstance(exc, BaseExceptionGroup) and any(is_cancellation(e) for e in exc.exceptions):
            return True
        exc = exc.__cause__
    return False


def require[T](value: T | None, argument: str) -> T:
    """Return value, raising InvalidArgumentError if it is None."""
    if value is None:
        raise InvalidArgumentError(argument)
    return value
