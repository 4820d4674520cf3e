"""Logging utilities for cxmf.

Stdlib logging wrapper routed through the active reporter, plus the small
``Logger`` collaborators accepted by the public load/save API.
"""

from __future__ import annotations

import logging
from typing import List, Protocol, runtime_checkable

from rich.logging import RichHandler

from .reporting import get_reporter, get_verbosity, set_verbosity

_LOGGER_NAME = "cxmf"

__all__ = [
    "Logger",
    "get_logger",
    "configure_logging",
    "send_log_message",
    "ReporterLogger",
    "StdLogger",
    "CollectingLogger",
]


@runtime_checkable
class Logger(Protocol):
    """Optional message sink handed to load/save calls."""

    def write(self, message: str) -> None: ...


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


class _ReporterHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        rep = get_reporter()
        msg = self.format(record)
        lvl = record.levelno
        if lvl >= logging.ERROR:
            rep.error(msg)
        elif lvl >= logging.WARNING:
            rep.warning(msg)
        elif lvl >= logging.INFO:
            rep.status(msg)
        else:
            rep.verbose(msg)


def configure_logging(verbosity: int = 0, *, rich: bool = False) -> None:
    """Attach a single handler to the package logger.

    By default records go through the active reporter; ``rich=True`` uses
    rich's own handler instead.
    """
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbosity >= 1 else logging.INFO)
    set_verbosity(verbosity)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler: logging.Handler
    if rich:
        handler = RichHandler(show_time=False, show_path=False, markup=False)
    else:
        handler = _ReporterHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def send_log_message(logger: Logger | None, text: str) -> None:
    if logger is not None and text:
        logger.write(text)


class ReporterLogger:
    """Forwards messages to the active reporter as errors."""

    def write(self, message: str) -> None:
        get_reporter().error(message)


class StdLogger:
    """Forwards messages to the package's stdlib logger."""

    def __init__(self, level: int = logging.WARNING) -> None:
        self.level = level

    def write(self, message: str) -> None:
        get_logger().log(self.level, message)


class CollectingLogger:
    """Keeps every message; handy for tests and batch tools."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def write(self, message: str) -> None:
        self.messages.append(message)
        if get_verbosity() >= 2:
            get_logger().debug("collected: %s", message)

    def __contains__(self, fragment: str) -> bool:
        return any(fragment in m for m in self.messages)
