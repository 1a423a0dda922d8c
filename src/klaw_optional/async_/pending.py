"""Pending: a resolve-once awaitable that caches its outcome as a Try.

Every async container in klaw-optional is a thin wrapper over a `Pending`.
All the combinators are expressed through two primitives, `then` and
`then_async`, which pick between a fast path (the source is already done,
so the continuation runs immediately) and a slow path (a lazy coroutine that
suspends on the source first). Both paths produce the same observable result.

Example:
    ```python
    source = Pending(fetch_user(1))
    name = source.then(lambda user: user.name)

    await name          # resolves fetch_user once, then applies the selector
    await source        # replays the cached user without re-running anything

    Pending.completed(21).then(lambda x: x * 2).done  # True - fast path
    ```
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any

import aiologic

from klaw_optional.async_.cancellation import CancellationToken, guarded
from klaw_optional.errors import CancelledError, is_cancellation, require
from klaw_optional.try_ import Failure, Success, Try

__all__ = ['Pending']


class Pending[T]:
    """An awaitable that is resolved at most once.

    The wrapped awaitable is awaited by the first observer only (guarded by an
    `aiologic.Lock`); its value or exception is cached as a Try and replayed
    to every later observer. A cancellation that interrupts the resolution is
    recorded too, so later observers see `CancelledError`.

    Attributes:
        _awaitable: The source awaitable, or None for pre-settled instances.
        _outcome: The cached outcome once known.
    """

    __slots__ = ('_awaitable', '_lock', '_outcome')

    def __init__(self, awaitable: Awaitable[T]) -> None:
        """Create a Pending from an awaitable.

        Args:
            awaitable: A coroutine, Task, Future or any other awaitable.
        """
        self._awaitable: Awaitable[T] | None = require(awaitable, 'awaitable')
        self._lock = aiologic.Lock()
        self._outcome: Try[T] | None = None

    @classmethod
    def _settled(cls, outcome: Try[T]) -> Pending[T]:
        pending = cls.__new__(cls)
        pending._awaitable = None
        pending._lock = aiologic.Lock()
        pending._outcome = outcome
        return pending

    @classmethod
    def completed(cls, value: T) -> Pending[T]:
        """Create a Pending that is already done with a value."""
        return cls._settled(Success(value))

    @classmethod
    def failed(cls, error: BaseException) -> Pending[Any]:
        """Create a Pending that is already done with an error."""
        return cls._settled(Failure(require(error, 'error')))

    def __repr__(self) -> str:
        if self._outcome is None:
            return f'Pending({self._awaitable!r})'
        return f'Pending({self._outcome!r})'

    def __await__(self) -> Generator[Any, Any, T]:
        return self.wait().__await__()

    @property
    def done(self) -> bool:
        """True once the outcome is known without suspending.

        A wrapped `asyncio.Future` (or Task) that has already finished counts
        as done; its result is harvested on the spot.
        """
        if self._outcome is not None:
            return True
        source = self._awaitable
        if asyncio.isfuture(source) and source.done():
            self._outcome = _harvest(source)
            self._awaitable = None
            return True
        return False

    @property
    def outcome(self) -> Try[T] | None:
        """The cached outcome, or None while still pending."""
        return self._outcome if self.done else None

    async def settle(self, cancellation: CancellationToken | None = None) -> Try[T]:
        """Resolve the source if needed and return the outcome as a Try.

        Args:
            cancellation: Token that interrupts the wait when cancelled.

        Returns:
            Success(value), or Failure(exception) if the source raised.

        Raises:
            CancelledError: If the token is or becomes cancelled before the
                outcome is known.
        """
        if cancellation is not None:
            cancellation.raise_if_cancelled()
        if self.done:
            return self._outcome  # type: ignore[return-value]
        return await guarded(self._resolve(cancellation), cancellation)

    async def wait(self, cancellation: CancellationToken | None = None) -> T:
        """Await the value, re-raising the source's exception if it failed.

        Args:
            cancellation: Token that interrupts the wait when cancelled.

        Raises:
            CancelledError: If the token is or becomes cancelled first.
            BaseException: Whatever the source raised.
        """
        return (await self.settle(cancellation)).value

    async def _resolve(self, cancellation: CancellationToken | None) -> Try[T]:
        async with self._lock:
            if self._outcome is None:
                source = self._awaitable
                assert source is not None
                try:
                    value = await source
                except BaseException as e:
                    if is_cancellation(e):
                        reason = cancellation.reason if cancellation is not None else None
                        self._outcome = Failure(e if isinstance(e, CancelledError) else CancelledError(reason))
                        raise
                    self._outcome = Failure(e)
                else:
                    self._outcome = Success(value)
                finally:
                    self._awaitable = None
        return self._outcome

    def then[U](
        self,
        fn: Callable[[T], U],
        cancellation: CancellationToken | None = None,
    ) -> Pending[U]:
        """Chain a synchronous continuation onto the value.

        Fast path: if this Pending is done and the token is live, `fn` runs
        now and the result is a completed (or failed) Pending. Slow path: a
        lazy coroutine that waits for the value and then applies `fn`.
        A failed source passes its error through without calling `fn`.

        Args:
            fn: Continuation applied to the value.
            cancellation: Token checked before `fn` runs and bound to the wait.

        Returns:
            A new Pending holding `fn(value)`.
        """
        require(fn, 'fn')
        if cancellation is not None and cancellation.cancelled:
            return Pending.failed(CancelledError(cancellation.reason))
        if self.done:
            outcome = self._outcome
            assert outcome is not None
            if not outcome.success:
                return Pending._settled(outcome)
            try:
                return Pending.completed(fn(outcome.value))
            except BaseException as e:
                return Pending.failed(e)

        async def _continue() -> U:
            return fn(await self.wait(cancellation))

        return Pending(_continue())

    def then_async[U](
        self,
        afn: Callable[[T], Awaitable[U]],
        cancellation: CancellationToken | None = None,
    ) -> Pending[U]:
        """Chain an async continuation onto the value.

        Same fast/slow split as `then`: when this Pending is done, `afn` is
        invoked immediately and only its awaitable remains pending.

        Args:
            afn: Coroutine function applied to the value.
            cancellation: Token checked before `afn` runs and bound to both waits.

        Returns:
            A new Pending holding the awaited `afn(value)`.
        """
        require(afn, 'fn')
        if cancellation is not None and cancellation.cancelled:
            return Pending.failed(CancelledError(cancellation.reason))
        if self.done:
            outcome = self._outcome
            assert outcome is not None
            if not outcome.success:
                return Pending._settled(outcome)
            try:
                step = afn(outcome.value)
            except BaseException as e:
                return Pending.failed(e)
            return _bind(step, cancellation)

        async def _continue() -> U:
            value = await self.wait(cancellation)
            return await _bind(afn(value), cancellation).wait()

        return Pending(_continue())


def _bind[U](step: Awaitable[U], cancellation: CancellationToken | None) -> Pending[U]:
    """Wrap a continuation's awaitable, keeping it under the token."""
    if not inspect.isawaitable(step):
        return Pending.completed(step)
    inner = step if isinstance(step, Pending) else Pending(step)
    if cancellation is None:
        return inner
    return Pending(inner.wait(cancellation))


def _harvest[T](future: asyncio.Future[T]) -> Try[T]:
    """Read the outcome of a finished Future without raising."""
    if future.cancelled():
        return Failure(CancelledError('Future was cancelled'))
    error = future.exception()
    if error is not None:
        return Failure(error)
    return Success(future.result())
