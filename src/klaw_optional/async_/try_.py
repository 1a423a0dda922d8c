"""AsyncTry: Try combinators over an awaitable computation.

`AsyncTry.of` is the async counterpart of `try_.of`: it awaits a coroutine
(or calls a coroutine function and awaits the result) and captures any
non-cancellation exception as a Failure.

Example:
    ```python
    async def fetch(url: str) -> bytes: ...

    body = await (
        AsyncTry.of(fetch('https://example.com'))
        .map(bytes.decode)
        .value_or_default('')
    )
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from klaw_optional.async_._base import AsyncContainer, resolve
from klaw_optional.async_.pending import Pending
from klaw_optional.either import Left, Right
from klaw_optional.errors import InvalidArgumentError, require
from klaw_optional.try_ import Failure, Success, Try, capture, is_try

if TYPE_CHECKING:
    from klaw_optional.async_.cancellation import CancellationToken
    from klaw_optional.async_.either import AsyncEither
    from klaw_optional.async_.maybe import AsyncMaybe

__all__ = ['AsyncTry']


class AsyncTry[T](AsyncContainer):
    """Async-aware Try wrapper.

    Awaiting an AsyncTry yields a Success or Failure; only cancellation (and
    exceptions outside the configured capture types) escape as exceptions.
    `throw()` and `value()` are the exits back into raise-based code.
    """

    __slots__ = ()

    @classmethod
    def of(
        cls,
        source: Try[T] | Awaitable[T] | Callable[[], Awaitable[T]],
        *,
        cancellation: CancellationToken | None = None,
        suppress_cancellation: bool = False,
    ) -> AsyncTry[T]:
        """Lift a Try, or capture the outcome of an awaitable computation.

        Args:
            source: A sync Try, an awaitable, or a zero-argument coroutine function.
            cancellation: Token bound to the computation.
            suppress_cancellation: Capture cancellation as a Failure instead
                of re-raising it on await.

        Returns:
            An AsyncTry resolving to Success(value) or Failure(exception).
        """
        require(source, 'source')
        if is_try(source):
            return cls(Pending.completed(source))

        async def _capture() -> Try[T]:
            try:
                if cancellation is not None and cancellation.cancelled:
                    if inspect.iscoroutine(source):
                        source.close()
                    cancellation.raise_if_cancelled()
                awaitable = source() if callable(source) else source
                value = await (awaitable if cancellation is None else Pending(awaitable).wait(cancellation))
            except BaseException as e:
                return capture(e, suppress_cancellation=suppress_cancellation)
            return Success(value)

        return cls(_capture())

    @classmethod
    def from_value(cls, value: T) -> AsyncTry[T]:
        """Create a successful AsyncTry."""
        return cls(Pending.completed(Success(value)))

    @classmethod
    def from_error(cls, error: BaseException) -> AsyncTry[Any]:
        """Create a failed AsyncTry from a known error."""
        return cls(Pending.completed(Failure(error)))

    # --- Tag tests and extraction ---

    def success(self, *, cancellation: CancellationToken | None = None) -> Pending[bool]:
        """Await whether the computation succeeded."""
        return self._then(lambda t: t.success, cancellation)

    def error(self, *, cancellation: CancellationToken | None = None) -> Pending[BaseException | None]:
        """Await the captured error, or None on success."""
        return self._then(lambda t: t.error, cancellation)

    def value(self, *, cancellation: CancellationToken | None = None) -> Pending[T]:
        """Await the value; a Failure re-raises its error."""
        return self._then(lambda t: t.value, cancellation)

    # --- Transformations ---

    def map[U](self, f: Callable[[T], U | Try[U]], *, cancellation: CancellationToken | None = None) -> AsyncTry[U]:
        """Apply f to a success value, capturing any exception it raises."""
        require(f, 'selector')
        return AsyncTry(self._then(lambda t: t.map(f), cancellation))

    def map_async[U](
        self,
        f: Callable[[T], Awaitable[U | Try[U]]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncTry[U]:
        """Apply an async f to a success value, capturing any exception it raises."""
        require(f, 'selector')

        async def _map(t: Try[T]) -> Try[Any]:
            if not t.success:
                return t
            try:
                result = await resolve(f(t.value))
            except BaseException as e:
                return capture(e)
            return result if is_try(result) else Success(result)

        return AsyncTry(self._then_async(_map, cancellation))

    def or_(
        self,
        alternative: Try[T] | Callable[[], Try[T]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncTry[T]:
        """Use the alternative when failed."""
        require(alternative, 'alternative')
        return AsyncTry(self._then(lambda t: t.or_(alternative), cancellation))

    def or_async(
        self,
        alternative: AsyncTry[T] | Callable[[], Awaitable[Try[T]]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncTry[T]:
        """Use an async alternative (an AsyncTry or a coroutine function) when failed."""
        require(alternative, 'alternative')

        async def _or(t: Try[T]) -> Try[T]:
            if t.success:
                return t
            if isinstance(alternative, AsyncTry):
                return await alternative.wait(cancellation)
            return await resolve(alternative())

        return AsyncTry(self._then_async(_or, cancellation))

    def throw(
        self,
        error_type: type[BaseException] | tuple[type[BaseException], ...] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncTry[T]:
        """Re-raise a matching captured error on await; other outcomes pass through.

        On an already-settled source the check happens immediately, and the
        error is stored to be raised when the result is awaited.
        """
        return AsyncTry(self._then(lambda t: t.throw(error_type), cancellation))

    def unwrap[U](self: AsyncTry[Try[U]], *, cancellation: CancellationToken | None = None) -> AsyncTry[U]:
        """Flatten a nested Try; the outer failure wins."""
        return AsyncTry(self._then(lambda t: t.unwrap(), cancellation))

    # --- Extraction with fallback ---

    def value_or_default(
        self,
        default: T | None = None,
        *,
        default_factory: Callable[[], T] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Pending[T | None]:
        return self._then(lambda t: t.value_or_default(default, default_factory=default_factory), cancellation)

    def value_or_default_async(
        self,
        default_factory: Callable[[], Awaitable[T]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[T]:
        require(default_factory, 'default_factory')

        async def _value(t: Try[T]) -> T:
            return t.value if t.success else await resolve(default_factory())

        return self._then_async(_value, cancellation)

    def select_or_default[U](
        self,
        f: Callable[[T], U | Try[U]],
        default: U | None = None,
        *,
        default_factory: Callable[[], U] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Pending[U | None]:
        require(f, 'selector')
        return self._then(lambda t: t.select_or_default(f, default, default_factory=default_factory), cancellation)

    def select_or_default_async[U](
        self,
        f: Callable[[T], Awaitable[U | Try[U]]],
        default: U | None = None,
        *,
        default_factory: Callable[[], U | Awaitable[U]] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Pending[U | None]:
        require(f, 'selector')

        async def _select(t: Try[T]) -> U | None:
            if t.success:
                result = await resolve(f(t.value))
                if not is_try(result):
                    return result
                if result.success:
                    return result.value
            return await resolve(default_factory()) if default_factory is not None else default

        return self._then_async(_select, cancellation)

    # --- Effects ---

    def do(
        self,
        on_value: Callable[[T], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
        *,
        throw_if_error: bool = False,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        """Run the callback for the outcome.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_value is None and on_error is None:
            raise InvalidArgumentError('on_value')
        return self._then(lambda t: t.do(on_value, on_error, throw_if_error=throw_if_error), cancellation)

    def do_async(
        self,
        on_value: Callable[[T], Awaitable[Any]] | None = None,
        on_error: Callable[[BaseException], Awaitable[Any]] | None = None,
        *,
        throw_if_error: bool = False,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        if on_value is None and on_error is None:
            raise InvalidArgumentError('on_value')

        async def _do(t: Try[T]) -> None:
            if t.success:
                if on_value is not None:
                    await resolve(on_value(t.value))
            elif on_error is not None:
                await resolve(on_error(t.error))
            elif throw_if_error:
                raise t.error

        return self._then_async(_do, cancellation)

    def do_if_error(
        self,
        on_error: Callable[[BaseException], Any],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        require(on_error, 'on_error')
        return self._then(lambda t: t.do_if_error(on_error), cancellation)

    def do_if_error_async(
        self,
        on_error: Callable[[BaseException], Awaitable[Any]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        require(on_error, 'on_error')

        async def _do(t: Try[T]) -> None:
            if not t.success:
                await resolve(on_error(t.error))

        return self._then_async(_do, cancellation)

    # --- Conversions ---

    def to_maybe(
        self,
        suppress_cancellation: bool = False,
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncMaybe[T]:
        """Success becomes Some; Failure becomes Nothing unless it holds a cancellation."""
        from klaw_optional.async_.maybe import AsyncMaybe

        return AsyncMaybe(self._then(lambda t: t.to_maybe(suppress_cancellation), cancellation))

    def as_either[R](
        self,
        other: R | None = None,
        *,
        other_factory: Callable[[BaseException], R] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> AsyncEither[T, R]:
        """Success becomes Left(value); Failure becomes Right(other) or Right(other_factory(error))."""
        from klaw_optional.async_.either import AsyncEither

        return AsyncEither(self._then(lambda t: t.as_either(other, other_factory=other_factory), cancellation))

    def as_either_async[R](
        self,
        other_factory: Callable[[BaseException], Awaitable[R]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncEither[T, R]:
        require(other_factory, 'other_factory')
        from klaw_optional.async_.either import AsyncEither

        async def _either(t: Try[T]) -> Any:
            if t.success:
                return Left(t.value)
            return Right(await resolve(other_factory(t.error)))

        return AsyncEither(self._then_async(_either, cancellation))
