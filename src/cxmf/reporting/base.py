from __future__ import annotations

import sys
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator, Mapping

__all__ = [
    "DecodeStage",
    "Reporter",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
    "section",
]


class DecodeStage(Enum):
    IDLE = "idle"
    HEADER_VALIDATED = "header validated"
    TAG_VALIDATED = "tag validated"
    INFLATED = "inflated"
    DESERIALIZED = "deserialized"


_VERBOSITY: int = 0  # set by the host application


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


class Reporter:
    """Sink for human-readable codec output.

    Subclasses implement ``_emit`` (one tagged line) and ``summary`` (a block
    of key/value rows); the other methods are routed through them.
    """

    def _emit(self, tag: str, message: str) -> None:
        raise NotImplementedError

    def status(self, message: str) -> None:
        self._emit("INFO", message)

    def warning(self, message: str) -> None:
        self._emit("WARN", message)

    def error(self, message: str) -> None:
        self._emit("ERROR", message)

    def verbose(self, message: str, *, level: int = 1) -> None:
        if get_verbosity() >= level:
            self._emit(f"VERB{level}", message)

    def stage(self, stage: DecodeStage, detail: str = "") -> None:
        """Decode progress; only shown from verbosity 2."""
        text = stage.value if not detail else f"{stage.value} ({detail})"
        self.verbose(f"decode: {text}", level=2)

    def summary(self, title: str, rows: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def section(self, title: str) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        pass


_ACTIVE_REPORTER: Reporter | None = None


def set_reporter(rep: Reporter | None) -> None:
    global _ACTIVE_REPORTER
    _ACTIVE_REPORTER = rep


def get_reporter() -> Reporter:
    global _ACTIVE_REPORTER
    if _ACTIVE_REPORTER is None:
        from .plain import PlainReporter  # local import to avoid cycle

        _ACTIVE_REPORTER = PlainReporter(stream=sys.stderr)
    return _ACTIVE_REPORTER


@contextmanager
def section(title: str) -> Iterator[Reporter]:
    rep = get_reporter()
    rep.section(title)
    try:
        yield rep
    finally:
        rep.flush()
