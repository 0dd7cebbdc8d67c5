"""Logging module with structured formatters and quote context management."""

from .context import ContextFilter, LogContext, log_context, log_quote_context, new_quote_id
from .filters import DefaultQuoteFilter
from .formatters import DevFormatter, JSONFormatter
from .setup import get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_context",
    "log_quote_context",
    "new_quote_id",
    "JSONFormatter",
    "DevFormatter",
    "DefaultQuoteFilter",
    "LogContext",
    "ContextFilter",
]
