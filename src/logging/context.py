# src/logging/context.py
"""Contextual logging support: attach operation and source URL to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per refresh.
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_source_url: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source_url", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    operation: str | None = None
    source_url: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        operation=_operation.get(),
        source_url=_source_url.get(),
    )


def set_refresh_context(operation: str, source_url: str | None = None) -> None:
    """Set refresh-level context (called at the start of every refresh)."""
    _operation.set(operation)
    _source_url.set(source_url)


def clear_context() -> None:
    """Reset all context variables."""
    _operation.set(None)
    _source_url.set(None)
