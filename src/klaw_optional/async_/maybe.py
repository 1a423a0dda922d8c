"""AsyncMaybe: Maybe combinators over an awaitable Maybe.

Example:
    ```python
    async def find_user(name: str) -> User | None: ...

    greeting = await (
        AsyncMaybe.from_awaitable(find_user('ada'))
        .filter(lambda user: user.active)
        .map(lambda user: f'hello {user.name}')
        .value_or_default('nobody home')
    )
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from klaw_optional.async_._base import AsyncContainer, resolve
from klaw_optional.async_.pending import Pending
from klaw_optional.either import Left, Right
from klaw_optional.errors import InvalidArgumentError, require
from klaw_optional.maybe import Maybe, Nothing, Some, from_nullable, is_maybe
from klaw_optional.try_ import Try, is_try

if TYPE_CHECKING:
    from klaw_optional.async_.cancellation import CancellationToken
    from klaw_optional.async_.either import AsyncEither
    from klaw_optional.async_.try_ import AsyncTry

__all__ = ['AsyncMaybe']


class AsyncMaybe[T](AsyncContainer):
    """Async-aware Maybe wrapper.

    Every sync Maybe operation is available. Pure operations return a new
    AsyncMaybe (or AsyncEither / AsyncTry for conversions); value-producing
    operations and the `do*` family return an awaitable Pending. Each takes a
    keyword-only `cancellation` token, and every operation that takes a
    callback has an `*_async` twin accepting a coroutine function.

    When the source is already done, sync callbacks run immediately at call
    time; otherwise they run once the source resolves.
    """

    __slots__ = ()

    @classmethod
    def of(cls, maybe: Maybe[T]) -> AsyncMaybe[T]:
        """Lift a sync Maybe."""
        if not is_maybe(maybe):
            raise TypeError(f'AsyncMaybe.of requires a Maybe, got {type(maybe).__name__}')
        return cls(Pending.completed(maybe))

    @classmethod
    def from_value(cls, value: T) -> AsyncMaybe[T]:
        """Create a present AsyncMaybe."""
        return cls(Pending.completed(Some(value)))

    @classmethod
    def none(cls) -> AsyncMaybe[Any]:
        """Create an empty AsyncMaybe."""
        return cls(Pending.completed(Nothing))

    @classmethod
    def from_awaitable(cls, awaitable: Awaitable[T | None]) -> AsyncMaybe[T]:
        """Wrap an awaitable value, treating a None result as Nothing."""
        require(awaitable, 'awaitable')

        async def _nullable() -> Maybe[T]:
            return from_nullable(await awaitable)

        return cls(_nullable())

    # --- Tag tests and extraction ---

    def is_some(self, *, cancellation: CancellationToken | None = None) -> Pending[bool]:
        """Await whether a value is present."""
        return self._then(lambda m: m.is_some(), cancellation)

    def is_none(self, *, cancellation: CancellationToken | None = None) -> Pending[bool]:
        """Await whether the Maybe is empty."""
        return self._then(lambda m: m.is_none(), cancellation)

    def value(self, *, cancellation: CancellationToken | None = None) -> Pending[T]:
        """Await the value; raises EmptyValueError when empty."""
        return self._then(lambda m: m.value, cancellation)

    # --- Transformations ---

    def map[U](self, f: Callable[[T], U | Maybe[U]], *, cancellation: CancellationToken | None = None) -> AsyncMaybe[U]:
        """Apply f to the value; a Maybe returned by f is used directly."""
        require(f, 'selector')
        return AsyncMaybe(self._then(lambda m: m.map(f), cancellation))

    def map_async[U](
        self,
        f: Callable[[T], Awaitable[U | Maybe[U]]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncMaybe[U]:
        """Apply an async f to the value; a Maybe returned by f is used directly."""
        require(f, 'selector')

        async def _map(m: Maybe[T]) -> Maybe[U]:
            if m.is_none():
                return Nothing
            result = await resolve(f(m.value))
            return result if is_maybe(result) else Some(result)

        return AsyncMaybe(self._then_async(_map, cancellation))

    def filter(self, predicate: Callable[[T], bool], *, cancellation: CancellationToken | None = None) -> AsyncMaybe[T]:
        """Keep the value only if the predicate holds."""
        require(predicate, 'predicate')
        return AsyncMaybe(self._then(lambda m: m.filter(predicate), cancellation))

    def filter_async(
        self,
        predicate: Callable[[T], Awaitable[bool]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncMaybe[T]:
        """Keep the value only if the async predicate holds."""
        require(predicate, 'predicate')

        async def _filter(m: Maybe[T]) -> Maybe[T]:
            if m.is_some() and await resolve(predicate(m.value)):
                return m
            return Nothing

        return AsyncMaybe(self._then_async(_filter, cancellation))

    def select_or_default[U](
        self,
        f: Callable[[T], U | Maybe[U]],
        default: U | None = None,
        *,
        default_factory: Callable[[], U] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Pending[U | None]:
        """Await f(value), or the default when empty (or when f yields Nothing)."""
        require(f, 'selector')
        return self._then(lambda m: m.select_or_default(f, default, default_factory=default_factory), cancellation)

    def select_or_default_async[U](
        self,
        f: Callable[[T], Awaitable[U | Maybe[U]]],
        default: U | None = None,
        *,
        default_factory: Callable[[], U | Awaitable[U]] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Pending[U | None]:
        """Async form of select_or_default; default_factory may also be async."""
        require(f, 'selector')

        async def _select(m: Maybe[T]) -> U | None:
            if m.is_some():
                result = await resolve(f(m.value))
                if not is_maybe(result):
                    return result
                if result.is_some():
                    return result.value
            return await resolve(default_factory()) if default_factory is not None else default

        return self._then_async(_select, cancellation)

    def value_or_default(
        self,
        default: T | None = None,
        *,
        default_factory: Callable[[], T] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Pending[T | None]:
        """Await the value, or the default when empty."""
        return self._then(lambda m: m.value_or_default(default, default_factory=default_factory), cancellation)

    def value_or_default_async(
        self,
        default_factory: Callable[[], Awaitable[T]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[T]:
        """Await the value, or await default_factory() when empty."""
        require(default_factory, 'default_factory')

        async def _value(m: Maybe[T]) -> T:
            if m.is_some():
                return m.value
            return await resolve(default_factory())

        return self._then_async(_value, cancellation)

    def or_(
        self,
        alternative: Maybe[T] | Callable[[], Maybe[T]] | Try[T],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncMaybe[T] | AsyncTry[T]:
        """Use the alternative when empty; a Try alternative yields an AsyncTry."""
        require(alternative, 'alternative')

        if is_try(alternative):
            from klaw_optional.async_.try_ import AsyncTry

            return AsyncTry(self._then(lambda m: m.or_(alternative), cancellation))
        return AsyncMaybe(self._then(lambda m: m.or_(alternative), cancellation))

    def or_async(
        self,
        alternative: AsyncMaybe[T] | Callable[[], Awaitable[Maybe[T]]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncMaybe[T]:
        """Use an async alternative (an AsyncMaybe or a coroutine function) when empty."""
        require(alternative, 'alternative')

        async def _or(m: Maybe[T]) -> Maybe[T]:
            if m.is_some():
                return m
            if isinstance(alternative, AsyncMaybe):
                return await alternative.wait(cancellation)
            return await resolve(alternative())

        return AsyncMaybe(self._then_async(_or, cancellation))

    def unwrap[U](self: AsyncMaybe[Maybe[U]], *, cancellation: CancellationToken | None = None) -> AsyncMaybe[U]:
        """Flatten a nested Maybe by one level."""
        return AsyncMaybe(self._then(lambda m: m.unwrap(), cancellation))

    # --- Effects ---

    def do(
        self,
        on_value: Callable[[T], Any] | None = None,
        on_empty: Callable[[], Any] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        """Run exactly one callback by tag.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_value is None and on_empty is None:
            raise InvalidArgumentError('on_value')
        return self._then(lambda m: m.do(on_value, on_empty), cancellation)

    def do_async(
        self,
        on_value: Callable[[T], Awaitable[Any]] | None = None,
        on_empty: Callable[[], Awaitable[Any]] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        """Run exactly one async callback by tag.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_value is None and on_empty is None:
            raise InvalidArgumentError('on_value')

        async def _do(m: Maybe[T]) -> None:
            if m.is_some():
                if on_value is not None:
                    await resolve(on_value(m.value))
            elif on_empty is not None:
                await resolve(on_empty())

        return self._then_async(_do, cancellation)

    def do_if_empty(self, on_empty: Callable[[], Any], *, cancellation: CancellationToken | None = None) -> Pending[None]:
        """Run on_empty only when empty."""
        require(on_empty, 'on_empty')
        return self._then(lambda m: m.do_if_empty(on_empty), cancellation)

    def do_if_empty_async(
        self,
        on_empty: Callable[[], Awaitable[Any]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        """Await on_empty() only when empty."""
        require(on_empty, 'on_empty')

        async def _do(m: Maybe[T]) -> None:
            if m.is_none():
                await resolve(on_empty())

        return self._then_async(_do, cancellation)

    # --- Conversions ---

    def as_either[R](
        self,
        other: R | None = None,
        *,
        other_factory: Callable[[], R] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> AsyncEither[T, R]:
        """Present becomes Left(value); empty becomes Right(other)."""
        from klaw_optional.async_.either import AsyncEither

        return AsyncEither(self._then(lambda m: m.as_either(other, other_factory=other_factory), cancellation))

    def as_either_async[R](
        self,
        other_factory: Callable[[], Awaitable[R]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncEither[T, R]:
        """Present becomes Left(value); empty becomes Right(await other_factory())."""
        require(other_factory, 'other_factory')
        from klaw_optional.async_.either import AsyncEither

        async def _either(m: Maybe[T]) -> Any:
            if m.is_some():
                return Left(m.value)
            return Right(await resolve(other_factory()))

        return AsyncEither(self._then_async(_either, cancellation))

    def as_try(self, *, cancellation: CancellationToken | None = None) -> AsyncTry[T]:
        """Present becomes Success(value); empty becomes Failure(EmptyValueError())."""
        from klaw_optional.async_.try_ import AsyncTry

        return AsyncTry(self._then(lambda m: m.as_try(), cancellation))
