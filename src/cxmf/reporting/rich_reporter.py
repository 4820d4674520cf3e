from __future__ import annotations

from typing import Any, Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .base import Reporter

_STYLES = {"INFO": "green", "WARN": "yellow", "ERROR": "bold red"}


class RichReporter(Reporter):
    """Colorized reporter backed by a rich console (stderr by default)."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True, highlight=False)

    def _emit(self, tag: str, message: str) -> None:
        style = _STYLES.get(tag, "cyan")
        self.console.print(f"[{style}]{tag}[/]: {escape(message)}")

    def summary(self, title: str, rows: Mapping[str, Any]) -> None:
        table = Table(title=escape(title), show_header=False, box=None)
        table.add_column(style="bold")
        table.add_column()
        for key, value in rows.items():
            table.add_row(escape(str(key)), escape(str(value)))
        self.console.print(table)

    def section(self, title: str) -> None:
        self.console.rule(escape(title))

    def flush(self) -> None:
        self.console.file.flush()
