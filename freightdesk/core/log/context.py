"""Request-scoped key/value pairs appended to every log record."""
from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator, Mapping

_fields: contextvars.ContextVar[Mapping[str, object]] = contextvars.ContextVar(
    "freightdesk_log_fields", default={}
)


def _clean(values: Mapping[str, object]) -> dict[str, object]:
    return {key: value for key, value in values.items() if value is not None}


class LogContext:
    """Bind fields such as ``user`` or ``screen`` to the current request or task.

    ``scoped`` is the usual entry point; ``bind`` is for scripts that keep
    one context for their whole run.
    """

    @contextmanager
    def scoped(self, **values: object) -> Iterator[None]:
        token = _fields.set({**_fields.get(), **_clean(values)})
        try:
            yield
        finally:
            _fields.reset(token)

    def bind(self, **values: object) -> None:
        _fields.set({**_fields.get(), **_clean(values)})

    def as_dict(self) -> dict[str, object]:
        return dict(_fields.get())


class ContextFilter(logging.Filter):
    """Render the bound fields as ``[key=value ...]`` into ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Already rendered on the producing thread when routed through the queue.
        if hasattr(record, "context"):
            return True
        fields = _fields.get()
        record.context = (
            "[" + " ".join(f"{key}={value}" for key, value in fields.items()) + "] "
            if fields
            else ""
        )
        return True


log_context = LogContext()

__all__ = ["ContextFilter", "LogContext", "log_context"]
