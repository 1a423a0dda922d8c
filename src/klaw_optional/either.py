"""Either type: Left[L] | Right[R] for values that are one of two things.

Exactly one side of an Either is populated. Neither side is privileged: every
operation comes in a left and a right flavour.

Examples:
    >>> from klaw_optional import either
    >>> either.from_left(2).map_left(lambda x: x + 1)
    Left(value=3)
    >>> either.from_right('oops').map_left(lambda x: x + 1)
    Right(value='oops')
    >>> either.from_left(2).swap()
    Right(value=2)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from klaw_optional.errors import InvalidArgumentError, WrongSideError, require

if TYPE_CHECKING:
    from klaw_optional.maybe import NothingType, Some
    from klaw_optional.try_ import Failure, Success

__all__ = [
    'Either',
    'Left',
    'Right',
    'from_left',
    'from_right',
    'is_either',
]


class Left[L](msgspec.Struct, frozen=True, gc=False):
    """Left variant of Either holding a value of type L.

    Examples:
        >>> Left(1).is_left()
        True
        >>> Left(1).left_or_default(0), Left(1).right_or_default('none')
        (1, 'none')
    """

    value: L

    @property
    def left(self) -> L:
        """The left value."""
        return self.value

    @property
    def right(self) -> NoReturn:
        """Raise since this is Left.

        Raises:
            WrongSideError: Always.
        """
        raise WrongSideError('right')

    def is_left(self) -> TypeIs[Left[L]]:
        """Return True since this is Left."""
        return True

    def is_right(self) -> TypeIs[Right[Any]]:
        """Return False since this is Left."""
        return False

    def map_left[U](self, f: Callable[[L], U | Either[U, Any]]) -> Either[U, Any]:
        """Transform the left value; an Either returned by f is used as-is."""
        result = require(f, 'left_selector')(self.value)
        if is_either(result):
            return result
        return Left(result)

    def map_right(self, f: Callable[[Any], Any]) -> Left[L]:
        """Return self unchanged since there's no right value."""
        require(f, 'right_selector')
        return self

    def map[U](self, left_f: Callable[[L], U], right_f: Callable[[Any], Any]) -> Left[U]:
        """Transform whichever side is populated (here, the left one)."""
        require(right_f, 'right_selector')
        return Left(require(left_f, 'left_selector')(self.value))

    def left_or_default(self, default: L | None = None, *, default_factory: Callable[[], L] | None = None) -> L:  # noqa: ARG002
        """Return the left value, ignoring the default."""
        return self.value

    def right_or_default[R](self, default: R | None = None, *, default_factory: Callable[[], R] | None = None) -> R | None:
        """Return the default since there's no right value."""
        return default_factory() if default_factory is not None else default

    def to_value[U](self, from_left: Callable[[L], U], from_right: Callable[[Any], U]) -> U:
        """Fold the Either into a single value using from_left."""
        require(from_right, 'from_right')
        return require(from_left, 'from_left')(self.value)

    def to_left(self, right_to_left: Callable[[Any], L]) -> L:
        """Return the left value."""
        require(right_to_left, 'right_to_left')
        return self.value

    def to_right[R](self, left_to_right: Callable[[L], R]) -> R:
        """Convert the left value into the right type."""
        return require(left_to_right, 'left_to_right')(self.value)

    def do(self, on_left: Callable[[L], Any] | None = None, on_right: Callable[[Any], Any] | None = None) -> None:
        """Call on_left with the value.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_left is None and on_right is None:
            raise InvalidArgumentError('on_left')
        if on_left is not None:
            on_left(self.value)

    def do_left(self, on_left: Callable[[L], Any]) -> None:
        """Call on_left with the value."""
        require(on_left, 'on_left')(self.value)

    def do_right(self, on_right: Callable[[Any], Any]) -> None:
        """Do nothing since this is Left."""
        require(on_right, 'on_right')

    def swap(self) -> Right[L]:
        """Relabel as Right."""
        return Right(self.value)

    def to_maybe_left(self) -> Some[L]:
        """Return Some(value)."""
        from klaw_optional.maybe import Some

        return Some(self.value)

    def to_maybe_right(self) -> NothingType:
        """Return Nothing since there's no right value."""
        from klaw_optional.maybe import Nothing

        return Nothing

    def to_try_left(self) -> Success[L]:
        """Return Success(value)."""
        from klaw_optional.try_ import Success

        return Success(self.value)

    def to_try_right(self) -> Failure:
        """Return a Failure holding WrongSideError."""
        from klaw_optional.try_ import Failure

        return Failure(WrongSideError('right'))


class Right[R](msgspec.Struct, frozen=True, gc=False):
    """Right variant of Either holding a value of type R.

    Examples:
        >>> Right('x').is_right()
        True
        >>> Right('x').to_maybe_left()
        NothingType()
    """

    value: R

    @property
    def left(self) -> NoReturn:
        """Raise since this is Right.

        Raises:
            WrongSideError: Always.
        """
        raise WrongSideError('left')

    @property
    def right(self) -> R:
        """The right value."""
        return self.value

    def is_left(self) -> TypeIs[Left[Any]]:
        """Return False since this is Right."""
        return False

    def is_right(self) -> TypeIs[Right[R]]:
        """Return True since this is Right."""
        return True

    def map_left(self, f: Callable[[Any], Any]) -> Right[R]:
        """Return self unchanged since there's no left value."""
        require(f, 'left_selector')
        return self

    def map_right[U](self, f: Callable[[R], U | Either[Any, U]]) -> Either[Any, U]:
        """Transform the right value; an Either returned by f is used as-is."""
        result = require(f, 'right_selector')(self.value)
        if is_either(result):
            return result
        return Right(result)

    def map[U](self, left_f: Callable[[Any], Any], right_f: Callable[[R], U]) -> Right[U]:
        """Transform whichever side is populated (here, the right one)."""
        require(left_f, 'left_selector')
        return Right(require(right_f, 'right_selector')(self.value))

    def left_or_default[L](self, default: L | None = None, *, default_factory: Callable[[], L] | None = None) -> L | None:
        """Return the default since there's no left value."""
        return default_factory() if default_factory is not None else default

    def right_or_default(self, default: R | None = None, *, default_factory: Callable[[], R] | None = None) -> R:  # noqa: ARG002
        """Return the right value, ignoring the default."""
        return self.value

    def to_value[U](self, from_left: Callable[[Any], U], from_right: Callable[[R], U]) -> U:
        """Fold the Either into a single value using from_right."""
        require(from_left, 'from_left')
        return require(from_right, 'from_right')(self.value)

    def to_left[L](self, right_to_left: Callable[[R], L]) -> L:
        """Convert the right value into the left type."""
        return require(right_to_left, 'right_to_left')(self.value)

    def to_right(self, left_to_right: Callable[[Any], R]) -> R:
        """Return the right value."""
        require(left_to_right, 'left_to_right')
        return self.value

    def do(self, on_left: Callable[[Any], Any] | None = None, on_right: Callable[[R], Any] | None = None) -> None:
        """Call on_right with the value.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_left is None and on_right is None:
            raise InvalidArgumentError('on_right')
        if on_right is not None:
            on_right(self.value)

    def do_left(self, on_left: Callable[[Any], Any]) -> None:
        """Do nothing since this is Right."""
        require(on_left, 'on_left')

    def do_right(self, on_right: Callable[[R], Any]) -> None:
        """Call on_right with the value."""
        require(on_right, 'on_right')(self.value)

    def swap(self) -> Left[R]:
        """Relabel as Left."""
        return Left(self.value)

    def to_maybe_left(self) -> NothingType:
        """Return Nothing since there's no left value."""
        from klaw_optional.maybe import Nothing

        return Nothing

    def to_maybe_right(self) -> Some[R]:
        """Return Some(value)."""
        from klaw_optional.maybe import Some

        return Some(self.value)

    def to_try_left(self) -> Failure:
        """Return a Failure holding WrongSideError."""
        from klaw_optional.try_ import Failure

        return Failure(WrongSideError('left'))

    def to_try_right(self) -> Success[R]:
        """Return Success(value)."""
        from klaw_optional.try_ import Success

        return Success(self.value)


type Either[L, R] = Left[L] | Right[R]


def is_either(obj: object) -> TypeIs[Either[Any, Any]]:
    """Return True if obj is Left or Right."""
    return isinstance(obj, Left | Right)


def from_left[L](value: L) -> Left[L]:
    """Create an Either holding a left value."""
    return Left(value)


def from_right[R](value: R) -> Right[R]:
    """Create an Either holding a right value."""
    return Right(value)
