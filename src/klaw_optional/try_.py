"""Try type: Success[T] | Failure for reified exceptional computations.

A Try captures either the return value of a computation or the exception it
raised, turning exception-as-control-flow into data. `of()` is the entry
point that executes a function and captures its outcome; `Try.throw()` and
`Try.value` are the exits back into native raise/catch.

Example:
    ```python
    from klaw_optional import try_

    parsed = try_.of(int, 'abc')
    parsed.success           # False
    type(parsed.error)       # ValueError
    parsed.map(lambda x: x * 2).value_or_default(0)  # 0

    try_.of(int, '21').map(lambda x: x * 2)  # Success(value=42)
    ```

Cancellation is never captured silently: unless the caller passes
`suppress_cancellation=True`, a cancellation raised by the wrapped function
propagates out of `of()` instead of becoming a Failure.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from klaw_optional._config import get_config
from klaw_optional._logging import get_logger
from klaw_optional.errors import CancelledError, InvalidArgumentError, is_cancellation, require

if TYPE_CHECKING:
    from klaw_optional.either import Left, Right
    from klaw_optional.maybe import NothingType, Some

__all__ = [
    'Failure',
    'Success',
    'Try',
    'capture',
    'from_error',
    'from_value',
    'is_try',
    'of',
    'unwrap',
]

log = get_logger(__name__)


class Success[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Try holding the computed value.

    Examples:
        >>> Success(2).map(lambda x: x + 1)
        Success(value=3)
        >>> Success(2).success
        True
    """

    value: T

    def __iter__(self) -> Iterator[T]:
        yield self.value

    @property
    def success(self) -> bool:
        """Always True for Success."""
        return True

    @property
    def error(self) -> None:
        """Always None for Success."""
        return None

    def map[U](self, f: Callable[[T], U | Try[U]]) -> Try[U]:
        """Apply f to the value, capturing any exception it raises.

        If f returns a Try, that Try is the result (flat form).

        Args:
            f: Selector applied to the value.

        Returns:
            Success(f(value)), the Try returned by f, or a Failure holding
            the exception f raised.
        """
        return unwrap(of(require(f, 'selector'), self.value))

    def or_(self, alternative: Try[T] | Callable[[], Try[T]]) -> Success[T]:
        """Return self since this is Success."""
        require(alternative, 'alternative')
        return self

    def value_or_default(self, default: T | None = None, *, default_factory: Callable[[], T] | None = None) -> T:  # noqa: ARG002
        """Return the value, ignoring the default."""
        return self.value

    def select_or_default[U](
        self,
        f: Callable[[T], U | Try[U]],
        default: U | None = None,
        *,
        default_factory: Callable[[], U] | None = None,
    ) -> U | None:
        """Apply f to the value; a Failure returned by f falls back to the default."""
        result = require(f, 'selector')(self.value)
        if is_try(result):
            return result.value_or_default(default, default_factory=default_factory)
        return result

    def throw(self, error_type: type[BaseException] | tuple[type[BaseException], ...] | None = None) -> Success[T]:  # noqa: ARG002
        """Return self since there is no error to raise."""
        return self

    def do(
        self,
        on_value: Callable[[T], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
        *,
        throw_if_error: bool = False,  # noqa: ARG002
    ) -> None:
        """Call on_value with the value.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_value is None and on_error is None:
            raise InvalidArgumentError('on_value')
        if on_value is not None:
            on_value(self.value)

    def do_if_error(self, on_error: Callable[[BaseException], Any]) -> None:
        """Do nothing since this is Success."""
        require(on_error, 'on_error')

    def unwrap[U](self: Success[Try[U]]) -> Try[U]:
        """Flatten a nested Try by surfacing the inner one."""
        return unwrap(self)

    def to_maybe(self, suppress_cancellation: bool = False) -> Some[T]:  # noqa: ARG002
        """Convert to Maybe, returning Some(value)."""
        from klaw_optional.maybe import Some

        return Some(self.value)

    def as_either[R](self, other: R | None = None, *, other_factory: Callable[[BaseException], R] | None = None) -> Left[T]:  # noqa: ARG002
        """Convert to Either, returning Left(value)."""
        from klaw_optional.either import Left

        return Left(self.value)


class Failure(msgspec.Struct, frozen=True):
    """Failure variant of Try holding the captured exception.

    The error keeps its traceback, `__cause__` and `__context__`, so
    re-raising it through `throw()` or `value` looks exactly like the
    original raise. Unlike the other variants it stays visible to the cycle
    collector, since that traceback can lead back to whatever holds the
    Failure.

    Examples:
        >>> f = Failure(ValueError('bad'))
        >>> f.success
        False
        >>> f.map(lambda x: x + 1) is f
        True
    """

    error: BaseException

    def __post_init__(self) -> None:
        if self.error is None:
            raise InvalidArgumentError('error')
        if not isinstance(self.error, BaseException):
            raise TypeError(f'Failure requires an exception instance, got {type(self.error).__name__}')

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    @property
    def success(self) -> bool:
        """Always False for Failure."""
        return False

    @property
    def value(self) -> NoReturn:
        """Re-raise the captured error.

        Raises:
            BaseException: The captured error.
        """
        raise self.error

    def map(self, f: Callable[[Any], Any]) -> Failure:
        """Pass the failure through unchanged; the first failure wins."""
        require(f, 'selector')
        return self

    def or_[T](self, alternative: Try[T] | Callable[[], Try[T]]) -> Try[T]:
        """Return the alternative since this is Failure.

        Args:
            alternative: A Try or a zero-argument generator returning a Try.
        """
        require(alternative, 'alternative')
        if callable(alternative):
            return alternative()
        return alternative

    def value_or_default[T](self, default: T | None = None, *, default_factory: Callable[[], T] | None = None) -> T | None:
        """Return the default, calling default_factory if one is given."""
        return default_factory() if default_factory is not None else default

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

    def throw(self, error_type: type[BaseException] | tuple[type[BaseException], ...] | None = None) -> Failure:
        """Re-raise the captured error.

        Args:
            error_type: Only raise if the error is an instance of this type
                (or one of these types). Other errors are kept as Failure.

        Returns:
            self, when the error does not match error_type.

        Raises:
            BaseException: The captured error, when it matches.
        """
        if error_type is None or isinstance(self.error, error_type):
            raise self.error
        return self

    def do(
        self,
        on_value: Callable[[Any], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
        *,
        throw_if_error: bool = False,
    ) -> None:
        """Call on_error with the captured error.

        Args:
            on_value: Ignored for Failure.
            on_error: Called with the captured error.
            throw_if_error: Re-raise the error when no on_error is given.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_value is None and on_error is None:
            raise InvalidArgumentError('on_error')
        if on_error is not None:
            on_error(self.error)
        elif throw_if_error:
            raise self.error

    def do_if_error(self, on_error: Callable[[BaseException], Any]) -> None:
        """Call on_error with the captured error."""
        require(on_error, 'on_error')(self.error)

    def unwrap(self) -> Failure:
        """Return self; the outer failure wins."""
        return self

    def to_maybe(self, suppress_cancellation: bool = False) -> NothingType:
        """Convert to Maybe, returning Nothing.

        Args:
            suppress_cancellation: When False, a captured cancellation is
                re-raised instead of being turned into Nothing.

        Raises:
            BaseException: The captured cancellation, unless suppressed.
        """
        if not suppress_cancellation and is_cancellation(self.error):
            raise self.error
        from klaw_optional.maybe import Nothing

        return Nothing

    def as_either[R](self, other: R | None = None, *, other_factory: Callable[[BaseException], R] | None = None) -> Right[R]:
        """Convert to Either, returning Right(other) or Right(other_factory(error))."""
        from klaw_optional.either import Right

        return Right(other_factory(self.error) if other_factory is not None else other)


type Try[T] = Success[T] | Failure


def is_try(obj: object) -> TypeIs[Try[Any]]:
    """Return True if obj is Success or Failure."""
    return isinstance(obj, Success | Failure)


def from_value[T](value: T) -> Success[T]:
    """Create a successful Try."""
    return Success(value)


def from_error(error: BaseException) -> Failure:
    """Create a failed Try from a known error."""
    return Failure(error)


def of[T](fn: Callable[..., T], *args: Any, suppress_cancellation: bool = False, **kwargs: Any) -> Try[T]:
    """Execute fn and capture its return value or exception.

    Args:
        fn: The function to execute.
        *args: Positional arguments forwarded to fn.
        suppress_cancellation: Capture cancellation as an ordinary Failure
            instead of re-raising it.
        **kwargs: Keyword arguments forwarded to fn.

    Returns:
        Success(fn(*args, **kwargs)), or Failure(exception).

    Raises:
        InvalidArgumentError: If fn is None.
        CancelledError: If fn was cancelled and suppression is off.

    Example:
        ```python
        of(lambda: 1 / 0)      # Failure(error=ZeroDivisionError(...))
        of(divmod, 7, 2)       # Success(value=(3, 1))
        ```
    """
    require(fn, 'fn')
    try:
        return Success(fn(*args, **kwargs))
    except BaseException as e:
        return capture(e, suppress_cancellation=suppress_cancellation)


def capture(
    error: BaseException,
    *,
    types: tuple[type[BaseException], ...] | None = None,
    suppress_cancellation: bool = False,
) -> Failure:
    """Turn a caught exception into a Failure, honouring the capture policy.

    Exceptions outside `types` (by default the configured capture types) are
    re-raised, and so is cancellation unless `suppress_cancellation` is set.
    """
    cancelled = is_cancellation(error)
    if cancelled and not suppress_cancellation:
        raise error
    if not cancelled and not isinstance(error, types or get_config().capture):
        raise error
    if isinstance(error, CancelledError):
        log.debug('try.cancellation_captured', reason=error.reason)
    else:
        log.debug('try.failure_captured', error_type=type(error).__name__)
    return Failure(error)


def unwrap[T](nested: Try[Try[T]] | Try[T]) -> Try[T]:
    """Flatten a Try whose value may itself be a Try."""
    if isinstance(nested, Success) and is_try(nested.value):
        return nested.value
    return nested
