"""Structured logging for forever.

Loggers are built with ``structlog.wrap_logger`` rather than through
``structlog.configure``, so creating one never changes global logging
state and tests can keep using structlog's defaults.
"""

import logging
import sys
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger, Processor

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Map ``debug``/``info``/``warning``/``error`` to a ``logging`` level.

    Unknown names map to INFO. With ``respect_env``, a non-empty
    FOREVER_DEBUG forces DEBUG.
    """
    if respect_env and getenv("FOREVER_DEBUG"):
        return logging.DEBUG
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def open_log_file(log_file: str) -> TextIO:
    """Open ``log_file`` for appending, creating its directory.

    The caller owns the returned handle and closes it.
    """
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path.open("a")


def _renderers(log_format: LogFormatType) -> "list[Processor]":  # noqa: UP037
    if log_format == "text":
        # timestamp [level] event key=value ...
        return [structlog.dev.ConsoleRenderer(colors=False)]
    return [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]


def create_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    stream: TextIO | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger writing one record per line.

    Args:
        level: Minimum level to emit (debug, info, warning, error).
            FOREVER_DEBUG in the environment lowers it to debug.
        log_format: ``"json"`` for one JSON object per line, ``"text"``
            for human-readable lines.
        stream: Text stream to write to. Defaults to stderr.

    Returns:
        A bound logger filtering below ``level``.
    """
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        *_renderers(log_format),
    ]
    factory = structlog.WriteLoggerFactory(
        file=sys.stderr if stream is None else stream
    )
    threshold = _log_level_from_string(level, respect_env=True)

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            factory(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(threshold),
            context_class=dict,
        ),
    )
