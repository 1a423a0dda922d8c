"""Shared plumbing for the async container wrappers."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any

from klaw_optional.async_.cancellation import CancellationToken
from klaw_optional.async_.pending import Pending

__all__ = ['AsyncContainer', 'resolve']


async def resolve[T](value: T | Awaitable[T]) -> T:
    """Await value if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


class AsyncContainer:
    """Base for AsyncMaybe, AsyncEither and AsyncTry.

    Holds a `Pending` that produces the underlying sync container. Awaiting
    the wrapper yields that container; every combinator returns a new
    wrapper (or a Pending, for operations that produce a plain value).
    """

    __slots__ = ('_pending',)

    def __init__(self, source: Awaitable[Any]) -> None:
        """Wrap an awaitable that produces a container.

        Args:
            source: Coroutine, Task, Future or Pending producing the container.
        """
        self._pending: Pending[Any] = source if isinstance(source, Pending) else Pending(source)

    def __await__(self) -> Generator[Any, Any, Any]:
        return self._pending.wait().__await__()

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._pending!r})'

    @property
    def done(self) -> bool:
        """True once the underlying container is available without suspending."""
        return self._pending.done

    @property
    def pending(self) -> Pending[Any]:
        """The underlying Pending."""
        return self._pending

    async def wait(self, cancellation: CancellationToken | None = None) -> Any:
        """Await the underlying container under a cancellation token.

        Raises:
            CancelledError: If the token is or becomes cancelled first.
        """
        return await self._pending.wait(cancellation)

    def _then[U](self, fn: Callable[[Any], U], cancellation: CancellationToken | None) -> Pending[U]:
        return self._pending.then(fn, cancellation)

    def _then_async[U](self, afn: Callable[[Any], Awaitable[U]], cancellation: CancellationToken | None) -> Pending[U]:
        return self._pending.then_async(afn, cancellation)
