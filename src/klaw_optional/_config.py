"""Library configuration: OptionalConfig, init() and get_config()."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_optional._logging import configure_logging

__all__ = [
    'OptionalConfig',
    'get_config',
    'init',
    'reset',
]

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class OptionalConfig:
    """Configuration for klaw-optional.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = the library
            leaves logging configuration to the application.
        json_logs: Emit JSON logs (True) or colored console output (False).
        capture: Exception types that `try_.of`, `AsyncTry.of` and `@safe`
            turn into Failure. Anything else propagates.
    """

    log_level: str | None = None
    json_logs: bool = True
    capture: tuple[type[BaseException], ...] = (Exception,)


# Global configuration (set by init(), or built lazily from the environment)
_config: OptionalConfig | None = None


def _detect_log_level() -> str | None:
    """Read KLAW_OPTIONAL_LOG_LEVEL, ignoring unknown level names."""
    level = os.environ.get('KLAW_OPTIONAL_LOG_LEVEL', '').strip().upper()
    if not level:
        return None
    if level not in logging.getLevelNamesMapping():
        logging.warning("Unknown KLAW_OPTIONAL_LOG_LEVEL value '%s', ignoring", level)
        return None
    return level


def _detect_json_logs() -> bool:
    """Read KLAW_OPTIONAL_JSON_LOGS; defaults to JSON output."""
    value = os.environ.get('KLAW_OPTIONAL_JSON_LOGS', '').strip().lower()
    if value in _FALSY:
        return False
    if value and value not in _TRUTHY:
        logging.warning("Unknown KLAW_OPTIONAL_JSON_LOGS value '%s', defaulting to JSON", value)
    return True


def init(
    config: OptionalConfig | None = None,
    *,
    log_level: str | None = None,
    json_logs: bool | None = None,
    capture: tuple[type[BaseException], ...] | None = None,
) -> OptionalConfig:
    """Initialize klaw-optional with the given configuration.

    Keyword overrides win over the fields of `config`; anything left unset
    is read from the environment.

    Args:
        config: A complete configuration to start from.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_logs: JSON (True) or console (False) log rendering.
        capture: Exception types captured into Failure.

    Returns:
        The OptionalConfig that was set.

    Example:
        ```python
        from klaw_optional import init

        init(log_level="DEBUG", json_logs=False)
        init(capture=(ValueError, KeyError))
        ```
    """
    global _config  # noqa: PLW0603

    base = config or OptionalConfig(log_level=_detect_log_level(), json_logs=_detect_json_logs())
    if capture is not None and not capture:
        msg = 'capture must name at least one exception type'
        raise ValueError(msg)

    _config = OptionalConfig(
        log_level=log_level if log_level is not None else base.log_level,
        json_logs=json_logs if json_logs is not None else base.json_logs,
        capture=capture if capture is not None else base.capture,
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_logs)

    return _config


def get_config() -> OptionalConfig:
    """Get the current configuration, initializing from the environment on first use.

    Example:
        ```python
        from klaw_optional import init, get_config

        init(capture=(ValueError,))
        get_config().capture  # (ValueError,)
        ```
    """
    if _config is None:
        return init()
    return _config


def reset() -> None:
    """Forget the current configuration so the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603
    _config = None
