"""Async containers, cancellation and async sequence queries."""

from klaw_optional.async_.cancellation import CancellationToken
from klaw_optional.async_.either import AsyncEither
from klaw_optional.async_.itertools import (
    async_first_matching,
    async_first_not_null,
    async_last_matching,
    async_last_not_null,
    async_left_values,
    async_right_values,
    async_single_matching,
    async_single_not_null,
    async_values_of,
)
from klaw_optional.async_.maybe import AsyncMaybe
from klaw_optional.async_.pending import Pending
from klaw_optional.async_.try_ import AsyncTry

__all__ = [
    'AsyncEither',
    'AsyncMaybe',
    'AsyncTry',
    'CancellationToken',
    'Pending',
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
