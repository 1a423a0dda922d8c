"""CancellationToken: a cooperative cancellation signal shared between callers."""

from __future__ import annotations

import inspect
import threading
from collections.abc import Awaitable, Callable

import aiologic
import anyio
import anyio.from_thread
import anyio.lowlevel

from klaw_optional._logging import get_logger
from klaw_optional.errors import CancelledError, require

__all__ = ['CancellationToken', 'guarded']

log = get_logger(__name__)


class CancellationToken:
    """A one-way cancellation flag with callbacks.

    A token starts live and can be cancelled exactly once. Async combinators
    poll it before starting work and bind it to an `anyio.CancelScope` while
    they are suspended, so cancelling the token interrupts the wait and the
    awaiting caller sees `CancelledError`.

    Callback registration is guarded by an `aiologic.Lock`, so a token may be
    cancelled from a different thread than the one registering callbacks.
    Callbacks run in the cancelling thread, outside the lock; waits bound with
    `guarded()` hop back to their own event loop thread to cancel.

    Examples:
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel('shutting down')
        True
        >>> token.cancel()
        False
        >>> token.reason
        'shutting down'
    """

    __slots__ = ('_callbacks', '_cancelled', '_lock', '_reason')

    def __init__(self) -> None:
        self._lock = aiologic.Lock()
        self._callbacks: list[Callable[[], object]] = []
        self._cancelled = False
        self._reason: str | None = None

    def __repr__(self) -> str:
        if self._cancelled:
            return f'CancellationToken(cancelled, reason={self._reason!r})'
        return 'CancellationToken(live)'

    @property
    def cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._cancelled

    @property
    def reason(self) -> str | None:
        """The reason passed to cancel(), if any."""
        return self._reason

    def cancel(self, reason: str | None = None) -> bool:
        """Cancel the token and run every registered callback.

        Args:
            reason: Optional human-readable reason, carried by the
                resulting CancelledError.

        Returns:
            True if this call cancelled the token, False if it was already cancelled.
        """
        with self._lock:
            if self._cancelled:
                return False
            self._cancelled = True
            self._reason = reason
            callbacks, self._callbacks = self._callbacks, []

        log.debug('cancellation.cancelled', reason=reason, callbacks=len(callbacks))
        for callback in callbacks:
            callback()
        return True

    def raise_if_cancelled(self) -> None:
        """Raise CancelledError if the token has been cancelled.

        Raises:
            CancelledError: If cancelled.
        """
        if self._cancelled:
            raise CancelledError(self._reason)

    def register(self, callback: Callable[[], object]) -> Callable[[], None]:
        """Register a callback to run when the token is cancelled.

        If the token is already cancelled the callback runs immediately.

        Args:
            callback: Zero-argument callable.

        Returns:
            A callable that unregisters the callback. Calling it more than
            once, or after cancellation, is a no-op.
        """
        require(callback, 'callback')
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return lambda: self._unregister(callback)

        callback()
        return _noop

    def _unregister(self, callback: Callable[[], object]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


def _noop() -> None:
    return None


def _cancel_on_loop(scope: anyio.CancelScope) -> Callable[[], None]:
    """Return a callback that cancels scope from whichever thread calls it."""
    loop_token = anyio.lowlevel.current_token()
    loop_thread = threading.get_ident()

    def cancel() -> None:
        if threading.get_ident() == loop_thread:
            scope.cancel()
        else:
            anyio.from_thread.run_sync(scope.cancel, token=loop_token)

    return cancel


async def guarded[T](awaitable: Awaitable[T], cancellation: CancellationToken | None) -> T:
    """Await under a cancellation token.

    The await runs inside an `anyio.CancelScope` registered on the token, so
    cancelling the token, from this thread or any other, interrupts it.

    Args:
        awaitable: What to await. A coroutine that never starts is closed.
        cancellation: Token bound to the wait. None awaits plainly.

    Raises:
        CancelledError: If the token is cancelled before or during the wait.
    """
    if cancellation is None:
        return await awaitable
    if cancellation.cancelled:
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        cancellation.raise_if_cancelled()

    with anyio.CancelScope() as scope:
        unregister = cancellation.register(_cancel_on_loop(scope))
        try:
            return await awaitable
        finally:
            unregister()

    # only reached when the token's scope swallowed the cancellation
    log.debug('cancellation.wait_interrupted', reason=cancellation.reason)
    raise CancelledError(cancellation.reason)
