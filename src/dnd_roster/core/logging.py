"""Structured logging for the character roster.

Services log with keyword context (``character_id``, ``owner_id``,
``operation``) through structlog. ``service_operation`` binds the
operation and the ids it was called with for the duration of each call,
so nested log entries carry them without repeating the arguments.

Restore tokens are secrets: any ``restore_token`` value reaching a log
entry is masked by ``redact_restore_tokens``.

Example:
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> with operation_context(operation="take damage", character_id="3f2a"):
    ...     logger.info("Damage applied", amount=8)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from dnd_roster.core.config import Settings


APP_NAME = "dnd_roster"

REDACTED = "***"

SECRET_KEYS = frozenset({"restore_token"})

_log_stream: TextIO | None = None


# =============================================================================
# Processors
# =============================================================================


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Stamp the application name on entries that lack one."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def redact_restore_tokens(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Mask secret values, including ones bound through the context."""
    for key in event_dict.keys() & SECRET_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def build_processors(*, json_format: bool) -> list[Processor]:
    """Processor chain for console or JSON output.

    Args:
        json_format: Render one JSON object per line instead of the
            human-readable console format.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        redact_restore_tokens,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


# =============================================================================
# Configuration
# =============================================================================


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """Configure structlog for the roster.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit JSON lines instead of console output.
        log_file: Append entries to this file instead of stdout.
    """
    global _log_stream

    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _log_stream = path.open("a", encoding="utf-8")

    numeric_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    structlog.configure(
        processors=build_processors(json_format=json_format),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=_log_stream or sys.stdout),
        cache_logger_on_first_use=False,
    )


def configure_logging_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from the application settings.

    Debug mode uses the console renderer; otherwise entries are JSON.
    """
    from dnd_roster.core.config import get_settings

    settings = settings or get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=not settings.debug,
        log_file=settings.log_file,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


@contextmanager
def operation_context(**values: Any) -> Iterator[None]:
    """Bind log context for the duration of a block.

    ``None`` values are skipped. The previous context is restored on exit,
    also when the block raises.
    """
    bound = {key: value for key, value in values.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**bound):
        yield


__all__ = [
    "APP_NAME",
    "REDACTED",
    "add_app_context",
    "redact_restore_tokens",
    "build_processors",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "operation_context",
]
