"""Per-quote logging context.

Fields set here are copied onto every record by ContextFilter, so messages
logged while a fare is being quoted carry its quote id, vehicle and promo code.
"""

import logging
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class LogContext:
    """Thread-local stack of context fields. The top entry is the active one."""

    _local = threading.local()

    @classmethod
    def _stack(cls) -> list[dict[str, Any]]:
        if not hasattr(cls._local, "stack"):
            cls._local.stack = []
        stack: list[dict[str, Any]] = cls._local.stack
        return stack

    @classmethod
    def push(cls, **fields: Any) -> None:
        cls._stack().append({**cls.get(), **fields})

    @classmethod
    def pop(cls) -> None:
        stack = cls._stack()
        if stack:
            stack.pop()

    @classmethod
    def get(cls) -> dict[str, Any]:
        stack = cls._stack()
        return dict(stack[-1]) if stack else {}

    @classmethod
    def clear(cls) -> None:
        cls._local.stack = []


class ContextFilter(logging.Filter):
    """Injects LogContext fields into log records without overriding extra={}."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Add fields to records logged inside the block.

    Blocks nest: leaving an inner block restores the outer fields.
    ContextFilter must be attached to the handler (see setup_logging).
    """
    LogContext.push(**fields)
    try:
        yield
    finally:
        LogContext.pop()


def new_quote_id() -> str:
    return uuid.uuid4().hex[:8]


@contextmanager
def log_quote_context(quote_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Tag records with a quote id, generated when omitted, and yield it."""
    quote_id = quote_id or new_quote_id()
    with log_context(quote_id=quote_id, **fields):
        yield quote_id
