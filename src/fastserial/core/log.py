"""Diagnostic output for fastserial components.

Each component takes an optional ``logger`` and wraps it in `Diagnostics`.
Diagnostics are best-effort: a failing logger never changes control flow.
"""

from __future__ import annotations

import logging
from typing import Any

PREFIX = "[fastserial]"


class Diagnostics:
    """Two-level (info/debug) wrapper around an injected logger."""

    def __init__(self, logger: Any = None, *, name: str = "fastserial"):
        self.logger = logger if logger is not None else logging.getLogger(name)

    def info(self, line: Any) -> None:
        self._emit("info", line)

    def debug(self, line: Any) -> None:
        self._emit("debug", line)

    def _emit(self, level: str, line: Any) -> None:
        try:
            getattr(self.logger, level)("%s %s", PREFIX, line)
        except Exception:  # noqa: BLE001 - logging must not alter control flow
            pass


def diagnostics(logger: Any = None, name: str = "fastserial") -> Diagnostics:
    if isinstance(logger, Diagnostics):
        return logger
    return Diagnostics(logger, name=name)
