from __future__ import annotations

import sys
from typing import Any, Mapping, TextIO

from .base import Reporter

_COLORS = {"INFO": "32", "WARN": "33", "ERROR": "31"}
_VERBOSE_COLOR = "36"


class PlainReporter(Reporter):
    """Line-oriented reporter; ANSI color only when writing to a terminal."""

    def __init__(self, stream: TextIO | None = None, use_color: bool | None = None):
        self.stream = stream or sys.stderr
        if use_color is None:
            use_color = getattr(self.stream, "isatty", lambda: False)()
        self.use_color = use_color

    def _paint(self, tag: str) -> str:
        if not self.use_color:
            return tag
        code = _COLORS.get(tag, _VERBOSE_COLOR)
        return f"\x1b[{code}m{tag}\x1b[0m"

    def _emit(self, tag: str, message: str) -> None:
        self.stream.write(f"{self._paint(tag)}: {message}\n")

    def summary(self, title: str, rows: Mapping[str, Any]) -> None:
        width = max((len(k) for k in rows), default=0)
        lines = [f"{title}:"]
        lines += [f"  {key.ljust(width)}  {value}" for key, value in rows.items()]
        self.stream.write("\n".join(lines) + "\n")

    def section(self, title: str) -> None:
        self.stream.write(f"\n[{title}]\n")

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()
