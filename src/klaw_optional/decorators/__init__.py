"""Decorators: @safe, @nullable and their async variants."""

from klaw_optional.decorators.nullable import nullable, nullable_async
from klaw_optional.decorators.safe import safe, safe_async

__all__ = [
    'nullable',
    'nullable_async',
    'safe',
    'safe_async',
]
