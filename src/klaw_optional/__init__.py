"""klaw-optional: Maybe, Either and Try containers for Python 3.13+.

Three small algebraic containers that make absence, alternatives and failure
explicit, an async lift of every combinator with first-class cancellation,
and sequence queries that answer with a Maybe instead of raising.

Flat imports (preferred):
    from klaw_optional import Some, Nothing, Left, Right, Success, Failure
    from klaw_optional import AsyncMaybe, AsyncTry, CancellationToken, safe

Module imports (for the constructors and queries):
    from klaw_optional import maybe, either, try_, query
    maybe.from_nullable(os.environ.get('HOME'))
    try_.of(int, '42')
    query.single_matching(users, lambda u: u.admin)
"""

from klaw_optional import either, maybe, query, try_
from klaw_optional._config import OptionalConfig, get_config, init
from klaw_optional._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)
from klaw_optional.async_ import (
    AsyncEither,
    AsyncMaybe,
    AsyncTry,
    CancellationToken,
    Pending,
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
from klaw_optional.decorators import nullable, nullable_async, safe, safe_async
from klaw_optional.either import Either, Left, Right
from klaw_optional.errors import (
    Cancelled,
    CancelledError,
    EmptyValueError,
    InvalidArgumentError,
    MultipleMatchesError,
    OptionalError,
    WrongSideError,
    is_cancellation,
)
from klaw_optional.maybe import Maybe, Nothing, NothingType, Some
from klaw_optional.query import (
    first_matching,
    first_not_null,
    last_matching,
    last_not_null,
    left_values,
    right_values,
    single_matching,
    single_not_null,
    values_of,
)
from klaw_optional.try_ import Failure, Success, Try

__all__ = [
    # Async
    'AsyncEither',
    'AsyncMaybe',
    'AsyncTry',
    'CancellationToken',
    # Errors
    'Cancelled',
    'CancelledError',
    # Either
    'Either',
    'EmptyValueError',
    # Try
    'Failure',
    'InvalidArgumentError',
    'Left',
    # Maybe
    'Maybe',
    'MultipleMatchesError',
    'Nothing',
    'NothingType',
    # Config
    'OptionalConfig',
    'OptionalError',
    'Pending',
    'Right',
    'Some',
    'Success',
    'Try',
    'WrongSideError',
    # Logging
    'add_log_hook',
    'async_first_matching',
    'async_first_not_null',
    'async_last_matching',
    'async_last_not_null',
    'async_left_values',
    'async_right_values',
    'async_single_matching',
    'async_single_not_null',
    'async_values_of',
    'clear_log_hooks',
    'configure_logging',
    # Modules
    'either',
    # Queries
    'first_matching',
    'first_not_null',
    'get_config',
    'get_logger',
    'init',
    'is_cancellation',
    'last_matching',
    'last_not_null',
    'left_values',
    'maybe',
    # Decorators
    'nullable',
    'nullable_async',
    'query',
    'remove_log_hook',
    'right_values',
    'safe',
    'safe_async',
    'single_matching',
    'single_not_null',
    'try_',
    'values_of',
]
