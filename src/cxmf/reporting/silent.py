from __future__ import annotations

from typing import Any, Mapping

from .base import Reporter


class SilentReporter(Reporter):
    """Discards everything (quiet hosts, batch conversion)."""

    def _emit(self, tag: str, message: str) -> None:
        pass

    def summary(self, title: str, rows: Mapping[str, Any]) -> None:
        pass

    def section(self, title: str) -> None:
        pass
