"""Async sequence queries returning Maybe.

Async counterparts of `klaw_optional.query`. Sources may be sync iterables or
async iterables, and predicates may be plain functions or return awaitables.
Elements are pulled and tested strictly in order, one at a time, and the scan
stops as soon as the answer is fixed. Every function takes an optional
`cancellation` token that is polled before each element is pulled and bound
to every await, so cancelling it also interrupts a slow source or predicate.

Example:
    ```python
    async def is_reachable(host: str) -> bool: ...

    first_up = await async_first_matching(hosts, is_reachable)
    first_up.value_or_default('localhost')
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable
from contextlib import aclosing
from typing import TYPE_CHECKING, Any

from klaw_optional._logging import get_logger
from klaw_optional.async_.cancellation import guarded
from klaw_optional.either import Left, Right
from klaw_optional.errors import MultipleMatchesError, require
from klaw_optional.maybe import Maybe, Nothing, Some
from klaw_optional.try_ import Success

if TYPE_CHECKING:
    from klaw_optional.async_.cancellation import CancellationToken
    from klaw_optional.either import Either

__all__ = [
    'async_first_matching',
    'async_first_not_null',
    'async_last_matching',
    'async_last_not_null',
    'async_left_values',
    'async_right_values',
    'async_single_matching',
    'async_single_not_null',
    'async_values_of',
]

log = get_logger(__name__)

type Source[T] = Iterable[T] | AsyncIterable[T]
type Predicate[T] = Callable[[T], bool | Awaitable[bool]]


async def _pull[T](items: Source[T], cancellation: CancellationToken | None) -> AsyncIterator[T]:
    """Yield items in order, with each pull bound to the token."""
    require(items, 'items')
    if isinstance(items, AsyncIterable):
        iterator = aiter(items)
        while True:
            try:
                item = await guarded(anext(iterator), cancellation)
            except StopAsyncIteration:
                return
            yield item
    else:
        sync_iterator = iter(items)
        while True:
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            try:
                item = next(sync_iterator)
            except StopIteration:
                return
            yield item


async def _matches[T](pred: Predicate[T] | None, item: T, cancellation: CancellationToken | None) -> bool:
    if pred is None:
        return True
    result = pred(item)
    if inspect.isawaitable(result):
        result = await guarded(result, cancellation)
    return bool(result)


async def _not_null_matches[T](pred: Predicate[T] | None, item: T | None, cancellation: CancellationToken | None) -> bool:
    return item is not None and await _matches(pred, item, cancellation)


async def _first[T](items: Source[T], test: Callable[[T], Awaitable[bool]], cancellation: CancellationToken | None) -> Maybe[T]:
    async with aclosing(_pull(items, cancellation)) as stream:
        async for item in stream:
            if await test(item):
                return Some(item)
    return Nothing


async def _last[T](items: Source[T], test: Callable[[T], Awaitable[bool]], cancellation: CancellationToken | None) -> Maybe[T]:
    found: Maybe[T] = Nothing
    async with aclosing(_pull(items, cancellation)) as stream:
        async for item in stream:
            if await test(item):
                found = Some(item)
    return found


async def _single[T](items: Source[T], test: Callable[[T], Awaitable[bool]], cancellation: CancellationToken | None) -> Maybe[T]:
    found: Maybe[T] = Nothing
    async with aclosing(_pull(items, cancellation)) as stream:
        async for item in stream:
            if not await test(item):
                continue
            if found.is_some():
                log.debug('query.multiple_matches', first=found.value, second=item)
                raise MultipleMatchesError()
            found = Some(item)
    return found


async def async_first_matching[T](
    items: Source[T],
    pred: Predicate[T] | None = None,
    *,
    cancellation: CancellationToken | None = None,
) -> Maybe[T]:
    """Return Some(first element satisfying pred), or Nothing.

    Stops pulling at the first match, so infinite async generators are fine.

    Args:
        items: Iterable or async iterable source.
        pred: Sync or async predicate. None matches every element.
        cancellation: Token polled before each element is pulled.

    Raises:
        CancelledError: If the token is cancelled during the scan.

    Example:
        ```python
        await async_first_matching([1, 2, 3], lambda x: x > 1)  # Some(value=2)
        ```
    """
    return await _first(items, lambda item: _matches(pred, item, cancellation), cancellation)


async def async_last_matching[T](
    items: Source[T],
    pred: Predicate[T] | None = None,
    *,
    cancellation: CancellationToken | None = None,
) -> Maybe[T]:
    """Return Some(last element satisfying pred), or Nothing. Consumes the whole source."""
    return await _last(items, lambda item: _matches(pred, item, cancellation), cancellation)


async def async_single_matching[T](
    items: Source[T],
    pred: Predicate[T] | None = None,
    *,
    cancellation: CancellationToken | None = None,
) -> Maybe[T]:
    """Return Some(the only element satisfying pred), or Nothing for no match.

    Predicates run sequentially; the scan stops at the second match.

    Raises:
        MultipleMatchesError: If a second element matches.
        CancelledError: If the token is cancelled during the scan.
    """
    return await _single(items, lambda item: _matches(pred, item, cancellation), cancellation)


async def async_first_not_null[T](
    items: Source[T | None],
    pred: Predicate[T] | None = None,
    *,
    cancellation: CancellationToken | None = None,
) -> Maybe[T]:
    """Like async_first_matching, with None elements never matching."""
    return await _first(items, lambda item: _not_null_matches(pred, item, cancellation), cancellation)


async def async_last_not_null[T](
    items: Source[T | None],
    pred: Predicate[T] | None = None,
    *,
    cancellation: CancellationToken | None = None,
) -> Maybe[T]:
    """Like async_last_matching, with None elements never matching."""
    return await _last(items, lambda item: _not_null_matches(pred, item, cancellation), cancellation)


async def async_single_not_null[T](
    items: Source[T | None],
    pred: Predicate[T] | None = None,
    *,
    cancellation: CancellationToken | None = None,
) -> Maybe[T]:
    """Like async_single_matching, with None elements never matching."""
    return await _single(items, lambda item: _not_null_matches(pred, item, cancellation), cancellation)


def async_values_of[T](
    containers: Source[Any],
    pred: Predicate[T] | None = None,
    *,
    cancellation: CancellationToken | None = None,
) -> AsyncIterator[T]:
    """Yield the payload of every Some, Left and Success, optionally filtered.

    Empty, Right and Failure elements are skipped.

    Example:
        ```python
        [v async for v in async_values_of([Some(1), Nothing, Success(2)])]  # [1, 2]
        ```
    """
    require(containers, 'containers')

    async def _values() -> AsyncIterator[T]:
        async with aclosing(_pull(containers, cancellation)) as stream:
            async for container in stream:
                if isinstance(container, Some | Left | Success) and await _matches(pred, container.value, cancellation):
                    yield container.value

    return _values()


def async_left_values[L](
    eithers: Source[Either[L, Any]],
    *,
    cancellation: CancellationToken | None = None,
) -> AsyncIterator[L]:
    """Yield the payload of every Left."""
    return _side_values(require(eithers, 'eithers'), Left, cancellation)


def async_right_values[R](
    eithers: Source[Either[Any, R]],
    *,
    cancellation: CancellationToken | None = None,
) -> AsyncIterator[R]:
    """Yield the payload of every Right."""
    return _side_values(require(eithers, 'eithers'), Right, cancellation)


async def _side_values(
    eithers: Source[Any],
    side: type[Left[Any]] | type[Right[Any]],
    cancellation: CancellationToken | None,
) -> AsyncIterator[Any]:
    async with aclosing(_pull(eithers, cancellation)) as stream:
        async for either in stream:
            if isinstance(either, side):
                yield either.value
