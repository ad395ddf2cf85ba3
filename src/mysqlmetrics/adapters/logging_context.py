"""Context-local fields attached to log records.

The collector sets ``scraper=<name>`` while a scraper runs; because the
context lives in a ContextVar, concurrent scrape tasks each see their own.
"""

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "mysqlmetrics_log_context", default=None
)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current log context."""
    return dict(_log_context.get() or {})


def set_log_context(**fields: Any) -> None:
    """Replace the current log context with fields."""
    _log_context.set(dict(fields))


def update_log_context(**fields: Any) -> None:
    """Add fields to the current log context."""
    _log_context.set({**(_log_context.get() or {}), **fields})


def clear_log_context() -> None:
    """Remove every field from the current log context."""
    _log_context.set(None)


class LogContextFilter(logging.Filter):
    """Copy the current log context onto every record passing through.

    Fields already present on the record (e.g. from ``extra=``) win.

    Example:
        ```python
        handler = logging.StreamHandler()
        handler.addFilter(LogContextFilter())
        handler.setFormatter(logging.Formatter("%(scraper)s %(message)s"))
        ```
    """

    def __init__(self, name: str = "", defaults: dict[str, Any] | None = None) -> None:
        super().__init__(name)
        self._defaults = defaults or {"scraper": "-"}

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in {**self._defaults, **get_log_context()}.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
