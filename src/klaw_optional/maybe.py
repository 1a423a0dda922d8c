"""Maybe type: Some[T] | Nothing for optional values.

A Maybe holds zero or one value. Absence is represented only by the
`Nothing` singleton; `Some(None)` is a present value that happens to be None.

Examples:
    >>> from klaw_optional import maybe
    >>> maybe.from_value(21).map(lambda x: x * 2).value_or_default(0)
    42
    >>> maybe.none().map(lambda x: x * 2).value_or_default(0)
    0
    >>> maybe.from_nullable(None)
    NothingType()
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from klaw_optional.errors import EmptyValueError, InvalidArgumentError, require

if TYPE_CHECKING:
    from klaw_optional.either import Left, Right
    from klaw_optional.try_ import Failure, Success, Try

__all__ = [
    'Maybe',
    'Nothing',
    'NothingType',
    'Some',
    'from_nullable',
    'from_value',
    'is_maybe',
    'none',
]


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Maybe containing a value of type T.

    Some represents the presence of a value. It wraps a value that can be
    extracted, transformed, or converted into the other container types.

    Examples:
        >>> some = Some(42)
        >>> some.value
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
        >>> some.filter(lambda x: x > 100)
        NothingType()
    """

    value: T

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True since this is Some."""
        return True

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def map[U](self, f: Callable[[T], U | Maybe[U]]) -> Maybe[U]:
        """Apply a function to the contained value.

        If f returns a Maybe itself, that Maybe is the result (bind);
        otherwise the result is wrapped in Some.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some(f(value)), or the Maybe returned by f.
        """
        result = require(f, 'selector')(self.value)
        if is_maybe(result):
            return result
        return Some(result)

    def filter(self, predicate: Callable[[T], bool]) -> Maybe[T]:
        """Return self if the predicate is satisfied, else Nothing.

        Args:
            predicate: Function that returns True to keep the value.
        """
        if require(predicate, 'predicate')(self.value):
            return self
        return Nothing

    def select_or_default[U](
        self,
        f: Callable[[T], U | Maybe[U]],
        default: U | None = None,
        *,
        default_factory: Callable[[], U] | None = None,
    ) -> U | None:
        """Apply f to the value; fall back to the default if f yields Nothing.

        Args:
            f: Selector applied to the value.
            default: Value used when the selector produces Nothing.
            default_factory: Lazily called instead of using `default`.

        Returns:
            The selected value, or the default.
        """
        result = require(f, 'selector')(self.value)
        if is_maybe(result):
            return result.value_or_default(default, default_factory=default_factory)
        return result

    def value_or_default(self, default: T | None = None, *, default_factory: Callable[[], T] | None = None) -> T:  # noqa: ARG002
        """Return the contained value, ignoring the default."""
        return self.value

    def or_(self, alternative: Maybe[T] | Try[T] | Callable[[], Maybe[T]]) -> Some[T] | Success[T]:
        """Return self since this is Some.

        When the alternative is a Try, the value is returned as Success so
        both branches share a type.
        """
        require(alternative, 'alternative')
        from klaw_optional.try_ import Success, is_try

        if is_try(alternative):
            return Success(self.value)
        return self

    def do(self, on_value: Callable[[T], Any] | None = None, on_empty: Callable[[], Any] | None = None) -> None:
        """Call on_value with the contained value.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_value is None and on_empty is None:
            raise InvalidArgumentError('on_value')
        if on_value is not None:
            on_value(self.value)

    def do_if_empty(self, on_empty: Callable[[], Any]) -> None:
        """Do nothing since this is Some."""
        require(on_empty, 'on_empty')

    def as_either[R](self, other: R | None = None, *, other_factory: Callable[[], R] | None = None) -> Left[T]:  # noqa: ARG002
        """Convert to Either, returning Left(value).

        The right-hand fallback is never evaluated for Some.
        """
        from klaw_optional.either import Left

        return Left(self.value)

    def as_try(self) -> Success[T]:
        """Convert to Try, returning Success(value)."""
        from klaw_optional.try_ import Success

        return Success(self.value)

    def unwrap[U](self: Some[Maybe[U]]) -> Maybe[U]:
        """Flatten a nested Maybe by one level."""
        return self.value


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Maybe representing absence of a value.

    This is a singleton - use the `Nothing` constant (or `none()`) instead of
    instantiating directly.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.value_or_default(0)
        0
    """

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    @property
    def value(self) -> NoReturn:
        """Raise since Nothing has no value.

        Raises:
            EmptyValueError: Always.
        """
        raise EmptyValueError()

    def is_some(self) -> TypeIs[Some[Any]]:
        """Return False since this is Nothing."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True since this is Nothing."""
        return True

    def map(self, f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing since there's no value to map."""
        require(f, 'selector')
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> NothingType:
        """Return Nothing since there's no value to filter."""
        require(predicate, 'predicate')
        return self

    def select_or_default[U](
        self,
        f: Callable[[Any], Any],
        default: U | None = None,
        *,
        default_factory: Callable[[], U] | None = None,
    ) -> U | None:
        """Return the default since there's no value to select from."""
        require(f, 'selector')
        return default_factory() if default_factory is not None else default

    def value_or_default[T](self, default: T | None = None, *, default_factory: Callable[[], T] | None = None) -> T | None:
        """Return the default, calling default_factory if one is given."""
        return default_factory() if default_factory is not None else default

    def or_[T](self, alternative: Maybe[T] | Try[T] | Callable[[], Maybe[T]]) -> Maybe[T] | Try[T]:
        """Return the alternative since this is Nothing.

        Args:
            alternative: A Maybe, a Try, or a zero-argument generator returning a Maybe.
        """
        require(alternative, 'alternative')
        if callable(alternative):
            return alternative()
        return alternative

    def do(self, on_value: Callable[[Any], Any] | None = None, on_empty: Callable[[], Any] | None = None) -> None:
        """Call on_empty since this is Nothing.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_value is None and on_empty is None:
            raise InvalidArgumentError('on_empty')
        if on_empty is not None:
            on_empty()

    def do_if_empty(self, on_empty: Callable[[], Any]) -> None:
        """Call on_empty since this is Nothing."""
        require(on_empty, 'on_empty')()

    def as_either[R](self, other: R | None = None, *, other_factory: Callable[[], R] | None = None) -> Right[R]:
        """Convert to Either, returning Right(other).

        Args:
            other: The right-hand value.
            other_factory: Called lazily to produce the right-hand value.
        """
        from klaw_optional.either import Right

        return Right(other_factory() if other_factory is not None else other)

    def as_try(self) -> Failure:
        """Convert to Try, returning Failure(EmptyValueError())."""
        from klaw_optional.try_ import Failure

        return Failure(EmptyValueError())

    def unwrap(self) -> NothingType:
        """Return Nothing since there's nothing to flatten."""
        return self


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Maybe[T] = Some[T] | NothingType


def is_maybe(obj: object) -> TypeIs[Maybe[Any]]:
    """Return True if obj is Some or Nothing."""
    return isinstance(obj, Some | NothingType)


def none() -> NothingType:
    """Return the empty Maybe."""
    return Nothing


def from_value[T](value: T) -> Some[T]:
    """Wrap a value in Some. None is kept as a present value."""
    return Some(value)


def from_nullable[T](value: T | None) -> Maybe[T]:
    """Wrap a value in Some, treating None as Nothing.

    Examples:
        >>> from_nullable(3)
        Some(value=3)
        >>> from_nullable(None)
        NothingType()
    """
    return Nothing if value is None else Some(value)
