"""@nullable and @nullable_async decorators turning None results into Nothing."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import wrapt

from klaw_optional.maybe import Maybe, from_nullable

__all__ = ['nullable', 'nullable_async']


def nullable[**P, T](func: Callable[P, T | None]) -> Callable[P, Maybe[T]]:
    """Wrap a function returning `T | None` so it returns Maybe[T].

    Example:
        ```python
        @nullable
        def lookup(key: str) -> int | None:
            return table.get(key)

        lookup('missing')  # NothingType()
        ```
    """

    @wrapt.decorator
    def wrapper(wrapped: Callable[P, T | None], instance: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Maybe[T]:
        return from_nullable(wrapped(*args, **kwargs))

    return wrapper(func)


def nullable_async[**P, T](func: Callable[P, Awaitable[T | None]]) -> Callable[P, Awaitable[Maybe[T]]]:
    """Async form of @nullable."""

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[P, Awaitable[T | None]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Maybe[T]:
        return from_nullable(await wrapped(*args, **kwargs))

    return wrapper(func)
