"""Structured logging for klaw-optional.

The library emits DEBUG events only (captured failures, interrupted waits,
single-match violations) through loggers that honour the stdlib level of
their name, so nothing is printed until the application, or
`init(log_level=...)`, calls `configure_logging()`.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import aiologic
import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

type LogHook = Callable[[dict[str, Any]], None]

# replaced wholesale under the lock, read without it
_hooks: tuple[LogHook, ...] = ()
_hooks_lock = aiologic.Lock()


def _call_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in _hooks:
        try:
            hook(dict(event_dict))
        except Exception:  # noqa: S112
            continue
    return event_dict


def _pre_chain() -> list[Any]:
    """Processors that enrich an event before hooks and rendering see it."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
        _call_hooks,
    ]


def _event_chain() -> list[Any]:
    return [*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter]


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Route structlog and stdlib records through one structured handler.

    Replaces the root logger's handlers with a single stderr handler whose
    `ProcessorFormatter` renders JSON, or colored console lines when
    `json_output` is False. Records from third-party stdlib loggers pass
    through the same enrichment and hooks.

    Args:
        level: Root logging level name. Unknown names fall back to INFO.
        json_output: JSON (True) or console (False) rendering.
    """
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, *_event_chain()],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.getLevelNamesMapping().get(level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger over the stdlib logger of the same name.

    Events below that logger's effective level are dropped before any
    processor runs, hooks included.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[structlog.stdlib.filter_by_level, *_event_chain()],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def add_log_hook(hook: LogHook) -> None:
    """Call hook with a copy of every event dict that passes its logger's level.

    A hook that raises is skipped for that event; logging carries on.
    """
    global _hooks  # noqa: PLW0603
    with _hooks_lock:
        _hooks = (*_hooks, hook)


def remove_log_hook(hook: LogHook) -> None:
    """Unregister hook. Unknown hooks are ignored."""
    global _hooks  # noqa: PLW0603
    with _hooks_lock:
        _hooks = tuple(h for h in _hooks if h != hook)


def clear_log_hooks() -> None:
    """Unregister every hook."""
    global _hooks  # noqa: PLW0603
    with _hooks_lock:
        _hooks = ()
