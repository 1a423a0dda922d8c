"""Sequence queries that answer with a Maybe instead of raising.

Examples:
    >>> from klaw_optional import query
    >>> query.first_matching([1, 2, 3], lambda x: x > 1)
    Some(value=2)
    >>> query.first_matching([], lambda x: x > 1)
    NothingType()
    >>> query.first_not_null([None, 0, 1])
    Some(value=0)
    >>> list(query.values_of([Some(1), Nothing, Some(2)]))
    [1, 2]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any

from klaw_optional._logging import get_logger
from klaw_optional.either import Left, Right
from klaw_optional.errors import MultipleMatchesError, require
from klaw_optional.maybe import Maybe, Nothing, Some
from klaw_optional.try_ import Success

if TYPE_CHECKING:
    from klaw_optional.either import Either

__all__ = [
    'first_matching',
    'first_not_null',
    'last_matching',
    'last_not_null',
    'left_values',
    'right_values',
    'single_matching',
    'single_not_null',
    'values_of',
]

log = get_logger(__name__)


def _any(_: object) -> bool:
    return True


def first_matching[T](items: Iterable[T], pred: Callable[[T], bool] | None = None) -> Maybe[T]:
    """Return Some(first element satisfying pred), or Nothing.

    Stops at the first match, so infinite iterators are fine.

    Args:
        items: The elements to scan.
        pred: Predicate to test; None matches every element.

    Raises:
        InvalidArgumentError: If items is None.
    """
    test = pred or _any
    for item in require(items, 'items'):
        if test(item):
            return Some(item)
    return Nothing


def last_matching[T](items: Iterable[T], pred: Callable[[T], bool] | None = None) -> Maybe[T]:
    """Return Some(last element satisfying pred), or Nothing. Consumes the whole input."""
    test = pred or _any
    found: Maybe[T] = Nothing
    for item in require(items, 'items'):
        if test(item):
            found = Some(item)
    return found


def single_matching[T](items: Iterable[T], pred: Callable[[T], bool] | None = None) -> Maybe[T]:
    """Return Some(the only element satisfying pred), or Nothing if none match.

    Raises:
        MultipleMatchesError: On the second match; no further elements are pulled.
    """
    test = pred or _any
    found: Maybe[T] = Nothing
    for item in require(items, 'items'):
        if not test(item):
            continue
        if found.is_some():
            log.debug('query.multiple_matches', first=found.value, second=item)
            raise MultipleMatchesError()
        found = Some(item)
    return found


def _not_null(pred: Callable[[Any], bool] | None) -> Callable[[Any], bool]:
    if pred is None:
        return lambda item: item is not None
    return lambda item: item is not None and pred(item)


def first_not_null[T](items: Iterable[T | None], pred: Callable[[T], bool] | None = None) -> Maybe[T]:
    """Like first_matching, with None elements never matching."""
    return first_matching(items, _not_null(pred))


def last_not_null[T](items: Iterable[T | None], pred: Callable[[T], bool] | None = None) -> Maybe[T]:
    """Like last_matching, with None elements never matching."""
    return last_matching(items, _not_null(pred))


def single_not_null[T](items: Iterable[T | None], pred: Callable[[T], bool] | None = None) -> Maybe[T]:
    """Like single_matching, with None elements never matching."""
    return single_matching(items, _not_null(pred))


def values_of[T](containers: Iterable[Any], pred: Callable[[T], bool] | None = None) -> Iterator[T]:
    """Lazily yield the payload of every Some, Left and Success.

    Nothing, Right and Failure elements are skipped. Elements are pulled
    only as the result is iterated.

    Args:
        containers: Maybe, Either or Try values (mixing is allowed).
        pred: Optional filter applied to each payload.
    """
    test = pred or _any
    return (
        container.value
        for container in require(containers, 'containers')
        if isinstance(container, Some | Left | Success) and test(container.value)
    )


def left_values[L](eithers: Iterable[Either[L, Any]]) -> Iterator[L]:
    """Lazily yield the payload of every Left."""
    return (either.value for either in require(eithers, 'eithers') if isinstance(either, Left))


def right_values[R](eithers: Iterable[Either[Any, R]]) -> Iterator[R]:
    """Lazily yield the payload of every Right."""
    return (either.value for either in require(eithers, 'eithers') if isinstance(either, Right))
