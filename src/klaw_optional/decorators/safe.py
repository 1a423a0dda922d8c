"""@safe and @safe_async decorators for capturing exceptions as Try."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar, overload

import wrapt

from klaw_optional.try_ import Success, Try, capture

__all__ = ['safe', 'safe_async']

P = ParamSpec('P')
T = TypeVar('T')


@overload
def safe[**P, T](
    func: Callable[P, T],
) -> Callable[P, Try[T]]: ...


@overload
def safe[**P, T](
    func: None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
    suppress_cancellation: bool = False,
) -> Callable[[Callable[P, T]], Callable[P, Try[T]]]: ...


def safe[**P, T](
    func: Callable[P, T] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
    suppress_cancellation: bool = False,
) -> Any:
    """Decorator that captures exceptions into a Failure.

    Wraps a function so that it returns Success(value) on success and
    Failure(exception) if a captured exception is raised. Cancellation
    propagates unless `suppress_cancellation` is set.

    Can be used with or without arguments:
        @safe
        def risky(): ...

        @safe(exceptions=(ValueError, TypeError))
        def specific(): ...

    Args:
        func: The function to wrap (when used without parentheses).
        exceptions: Exception types to capture. Defaults to the configured
            capture types, `(Exception,)` unless changed with `init()`.
        suppress_cancellation: Capture cancellation as a Failure too.

    Returns:
        A wrapped function that returns Try[T] instead of T.

    Example:
        ```python
        @safe
        def divide(a: int, b: int) -> float:
            return a / b
        divide(10, 2)
        # Success(value=5.0)
        divide(10, 0)
        # Failure(error=ZeroDivisionError('division by zero'))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, T],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Try[T]:
        try:
            return Success(wrapped(*args, **kwargs))
        except BaseException as e:
            return capture(e, types=exceptions, suppress_cancellation=suppress_cancellation)

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def safe_async[**P, T](
    func: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[Try[T]]]: ...


@overload
def safe_async[**P, T](
    func: None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
    suppress_cancellation: bool = False,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[Try[T]]]]: ...


def safe_async[**P, T](
    func: Callable[P, Awaitable[T]] | None = None,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
    suppress_cancellation: bool = False,
) -> Any:
    """Async decorator that captures exceptions into a Failure.

    Args:
        func: The async function to wrap (when used without parentheses).
        exceptions: Exception types to capture. Defaults to the configured capture types.
        suppress_cancellation: Capture cancellation as a Failure too.

    Returns:
        A wrapped async function that returns Try[T] instead of T.

    Example:
        ```python
        @safe_async
        async def fetch(url: str) -> str:
            # may raise
            return await http_get(url)
        ```
    """

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Try[T]:
        try:
            return Success(await wrapped(*args, **kwargs))
        except BaseException as e:
            return capture(e, types=exceptions, suppress_cancellation=suppress_cancellation)

    if func is not None:
        return wrapper(func)
    return wrapper
