"""Pytest configuration and shared fixtures for klaw-optional tests."""

import logging

import anyio
import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_state():
    """Reset global configuration, log hooks and root logging around each test."""
    from klaw_optional._config import reset
    from klaw_optional._logging import clear_log_hooks

    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    reset()
    clear_log_hooks()
    yield
    reset()
    clear_log_hooks()
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def token():
    """A live cancellation token."""
    from klaw_optional import CancellationToken

    return CancellationToken()


@pytest.fixture
def cancelled_token():
    """A token that has already been cancelled."""
    from klaw_optional import CancellationToken

    token = CancellationToken()
    token.cancel('test cancelled')
    return token


@pytest.fixture
def later():
    """Factory for coroutines that yield to the event loop before returning a value.

    Wrapping a container in one of these forces the slow (not yet done) path.
    """

    async def _later(value):
        await anyio.sleep(0)
        return value

    return _later
