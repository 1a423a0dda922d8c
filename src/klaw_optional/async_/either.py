"""AsyncEither: Either combinators over an awaitable Either."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from klaw_optional.async_._base import AsyncContainer, resolve
from klaw_optional.async_.pending import Pending
from klaw_optional.either import Either, Left, Right, is_either
from klaw_optional.errors import InvalidArgumentError, require

if TYPE_CHECKING:
    from klaw_optional.async_.cancellation import CancellationToken
    from klaw_optional.async_.maybe import AsyncMaybe
    from klaw_optional.async_.try_ import AsyncTry

__all__ = ['AsyncEither']


class AsyncEither[L, R](AsyncContainer):
    """Async-aware Either wrapper.

    Mirrors every Either operation with a keyword-only `cancellation` token;
    callback-taking operations also come in `*_async` form.

    Example:
        ```python
        async def lookup(key: str) -> Either[int, str]: ...

        size = await AsyncEither(lookup('k')).map_left(lambda n: n * 2).left_or_default(0)
        ```
    """

    __slots__ = ()

    @classmethod
    def of(cls, either: Either[L, R]) -> AsyncEither[L, R]:
        """Lift a sync Either."""
        if not is_either(either):
            raise TypeError(f'AsyncEither.of requires an Either, got {type(either).__name__}')
        return cls(Pending.completed(either))

    @classmethod
    def from_left(cls, value: L) -> AsyncEither[L, Any]:
        """Create an AsyncEither holding a left value."""
        return cls(Pending.completed(Left(value)))

    @classmethod
    def from_right(cls, value: R) -> AsyncEither[Any, R]:
        """Create an AsyncEither holding a right value."""
        return cls(Pending.completed(Right(value)))

    # --- Tag tests and extraction ---

    def is_left(self, *, cancellation: CancellationToken | None = None) -> Pending[bool]:
        return self._then(lambda e: e.is_left(), cancellation)

    def is_right(self, *, cancellation: CancellationToken | None = None) -> Pending[bool]:
        return self._then(lambda e: e.is_right(), cancellation)

    def left(self, *, cancellation: CancellationToken | None = None) -> Pending[L]:
        """Await the left value; raises WrongSideError on Right."""
        return self._then(lambda e: e.left, cancellation)

    def right(self, *, cancellation: CancellationToken | None = None) -> Pending[R]:
        """Await the right value; raises WrongSideError on Left."""
        return self._then(lambda e: e.right, cancellation)

    # --- Transformations ---

    def map_left[U](self, f: Callable[[L], U], *, cancellation: CancellationToken | None = None) -> AsyncEither[U, R]:
        """Transform the left side; an Either returned by f is used directly."""
        require(f, 'left_selector')
        return AsyncEither(self._then(lambda e: e.map_left(f), cancellation))

    def map_left_async[U](
        self,
        f: Callable[[L], Awaitable[U]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncEither[U, R]:
        require(f, 'left_selector')

        async def _map(e: Either[L, R]) -> Either[Any, Any]:
            if e.is_right():
                return e
            result = await resolve(f(e.value))
            return result if is_either(result) else Left(result)

        return AsyncEither(self._then_async(_map, cancellation))

    def map_right[U](self, f: Callable[[R], U], *, cancellation: CancellationToken | None = None) -> AsyncEither[L, U]:
        """Transform the right side; an Either returned by f is used directly."""
        require(f, 'right_selector')
        return AsyncEither(self._then(lambda e: e.map_right(f), cancellation))

    def map_right_async[U](
        self,
        f: Callable[[R], Awaitable[U]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncEither[L, U]:
        require(f, 'right_selector')

        async def _map(e: Either[L, R]) -> Either[Any, Any]:
            if e.is_left():
                return e
            result = await resolve(f(e.value))
            return result if is_either(result) else Right(result)

        return AsyncEither(self._then_async(_map, cancellation))

    def map[LU, RU](
        self,
        left_f: Callable[[L], LU],
        right_f: Callable[[R], RU],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncEither[LU, RU]:
        """Transform whichever side is populated."""
        require(left_f, 'left_selector')
        require(right_f, 'right_selector')
        return AsyncEither(self._then(lambda e: e.map(left_f, right_f), cancellation))

    def map_async[LU, RU](
        self,
        left_f: Callable[[L], Awaitable[LU]],
        right_f: Callable[[R], Awaitable[RU]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> AsyncEither[LU, RU]:
        require(left_f, 'left_selector')
        require(right_f, 'right_selector')

        async def _map(e: Either[L, R]) -> Either[LU, RU]:
            if e.is_left():
                return Left(await resolve(left_f(e.value)))
            return Right(await resolve(right_f(e.value)))

        return AsyncEither(self._then_async(_map, cancellation))

    def swap(self, *, cancellation: CancellationToken | None = None) -> AsyncEither[R, L]:
        """Relabel Left as Right and vice versa."""
        return AsyncEither(self._then(lambda e: e.swap(), cancellation))

    # --- Extraction with fallback ---

    def left_or_default(
        self,
        default: L | None = None,
        *,
        default_factory: Callable[[], L] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Pending[L | None]:
        return self._then(lambda e: e.left_or_default(default, default_factory=default_factory), cancellation)

    def left_or_default_async(
        self,
        default_factory: Callable[[], Awaitable[L]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[L]:
        require(default_factory, 'default_factory')

        async def _left(e: Either[L, R]) -> L:
            return e.value if e.is_left() else await resolve(default_factory())

        return self._then_async(_left, cancellation)

    def right_or_default(
        self,
        default: R | None = None,
        *,
        default_factory: Callable[[], R] | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Pending[R | None]:
        return self._then(lambda e: e.right_or_default(default, default_factory=default_factory), cancellation)

    def right_or_default_async(
        self,
        default_factory: Callable[[], Awaitable[R]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[R]:
        require(default_factory, 'default_factory')

        async def _right(e: Either[L, R]) -> R:
            return e.value if e.is_right() else await resolve(default_factory())

        return self._then_async(_right, cancellation)

    def to_value[U](
        self,
        from_left: Callable[[L], U],
        from_right: Callable[[R], U],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[U]:
        """Fold both sides into one value."""
        require(from_left, 'from_left')
        require(from_right, 'from_right')
        return self._then(lambda e: e.to_value(from_left, from_right), cancellation)

    def to_value_async[U](
        self,
        from_left: Callable[[L], Awaitable[U]],
        from_right: Callable[[R], Awaitable[U]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[U]:
        require(from_left, 'from_left')
        require(from_right, 'from_right')

        async def _fold(e: Either[L, R]) -> U:
            if e.is_left():
                return await resolve(from_left(e.value))
            return await resolve(from_right(e.value))

        return self._then_async(_fold, cancellation)

    def to_left(self, right_to_left: Callable[[R], L], *, cancellation: CancellationToken | None = None) -> Pending[L]:
        require(right_to_left, 'right_to_left')
        return self._then(lambda e: e.to_left(right_to_left), cancellation)

    def to_left_async(
        self,
        right_to_left: Callable[[R], Awaitable[L]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[L]:
        require(right_to_left, 'right_to_left')

        async def _left(e: Either[L, R]) -> L:
            return e.value if e.is_left() else await resolve(right_to_left(e.value))

        return self._then_async(_left, cancellation)

    def to_right(self, left_to_right: Callable[[L], R], *, cancellation: CancellationToken | None = None) -> Pending[R]:
        require(left_to_right, 'left_to_right')
        return self._then(lambda e: e.to_right(left_to_right), cancellation)

    def to_right_async(
        self,
        left_to_right: Callable[[L], Awaitable[R]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[R]:
        require(left_to_right, 'left_to_right')

        async def _right(e: Either[L, R]) -> R:
            return e.value if e.is_right() else await resolve(left_to_right(e.value))

        return self._then_async(_right, cancellation)

    # --- Effects ---

    def do(
        self,
        on_left: Callable[[L], Any] | None = None,
        on_right: Callable[[R], Any] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        """Run the callback for the populated side.

        Raises:
            InvalidArgumentError: If both callbacks are None.
        """
        if on_left is None and on_right is None:
            raise InvalidArgumentError('on_left')
        return self._then(lambda e: e.do(on_left, on_right), cancellation)

    def do_async(
        self,
        on_left: Callable[[L], Awaitable[Any]] | None = None,
        on_right: Callable[[R], Awaitable[Any]] | None = None,
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        if on_left is None and on_right is None:
            raise InvalidArgumentError('on_left')

        async def _do(e: Either[L, R]) -> None:
            callback = on_left if e.is_left() else on_right
            if callback is not None:
                await resolve(callback(e.value))

        return self._then_async(_do, cancellation)

    def do_left(self, on_left: Callable[[L], Any], *, cancellation: CancellationToken | None = None) -> Pending[None]:
        require(on_left, 'on_left')
        return self._then(lambda e: e.do_left(on_left), cancellation)

    def do_left_async(
        self,
        on_left: Callable[[L], Awaitable[Any]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        require(on_left, 'on_left')

        async def _do(e: Either[L, R]) -> None:
            if e.is_left():
                await resolve(on_left(e.value))

        return self._then_async(_do, cancellation)

    def do_right(self, on_right: Callable[[R], Any], *, cancellation: CancellationToken | None = None) -> Pending[None]:
        require(on_right, 'on_right')
        return self._then(lambda e: e.do_right(on_right), cancellation)

    def do_right_async(
        self,
        on_right: Callable[[R], Awaitable[Any]],
        *,
        cancellation: CancellationToken | None = None,
    ) -> Pending[None]:
        require(on_right, 'on_right')

        async def _do(e: Either[L, R]) -> None:
            if e.is_right():
                await resolve(on_right(e.value))

        return self._then_async(_do, cancellation)

    # --- Conversions ---

    def to_maybe_left(self, *, cancellation: CancellationToken | None = None) -> AsyncMaybe[L]:
        from klaw_optional.async_.maybe import AsyncMaybe

        return AsyncMaybe(self._then(lambda e: e.to_maybe_left(), cancellation))

    def to_maybe_right(self, *, cancellation: CancellationToken | None = None) -> AsyncMaybe[R]:
        from klaw_optional.async_.maybe import AsyncMaybe

        return AsyncMaybe(self._then(lambda e: e.to_maybe_right(), cancellation))

    def to_try_left(self, *, cancellation: CancellationToken | None = None) -> AsyncTry[L]:
        from klaw_optional.async_.try_ import AsyncTry

        return AsyncTry(self._then(lambda e: e.to_try_left(), cancellation))

    def to_try_right(self, *, cancellation: CancellationToken | None = None) -> AsyncTry[R]:
        from klaw_optional.async_.try_ import AsyncTry

        return AsyncTry(self._then(lambda e: e.to_try_right(), cancellation))
