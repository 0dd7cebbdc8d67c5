"""Logging setup and configuration."""

import logging
import sys
from typing import TextIO

from .context import ContextFilter
from .filters import DefaultQuoteFilter
from .formatters import DevFormatter, JSONFormatter


def setup_logging(
    level: str = "WARNING",
    json_output: bool = False,
    environment: str = "development",
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger with appropriate formatter and filters.

    Records go to stderr unless another stream is given; stdout carries the
    prompts and fare breakdowns.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)

    if json_output:
        handler.setFormatter(JSONFormatter(environment))
    else:
        handler.setFormatter(DevFormatter())

    handler.addFilter(DefaultQuoteFilter())
    handler.addFilter(ContextFilter())

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)
