"""Logging configuration for Mugard."""

import functools
import sys
from pathlib import Path
from typing import Any

import structlog

CLIPPED_FIELDS = ("text", "raw")


def clip_text_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any], limit: int = 80
) -> dict[str, Any]:
    """Shorten player input and narrative text copied into log events."""
    for key in CLIPPED_FIELDS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > limit:
            event_dict[key] = value[: limit - 1] + "…"
    return event_dict


def _level_to_int(level: str) -> int:
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    json_logs: bool = False,
    text_limit: int = 80,
) -> None:
    """Configure structured logging for the application.

    Logs go to stderr unless a file is given, so they never interleave with
    the game text a console presenter writes to stdout.
    """
    if log_file:
        output_stream = open(log_file, "a")
    else:
        output_stream = sys.stderr

    base_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(
            fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
        ),
    ]

    if text_limit > 0:
        base_processors.append(
            functools.partial(clip_text_processor, limit=text_limit)
        )

    if json_logs:
        processors = base_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = base_processors + [
            structlog.dev.ConsoleRenderer(colors=output_stream.isatty())
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_to_int(log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output_stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance for a module."""
    return structlog.get_logger(name)
