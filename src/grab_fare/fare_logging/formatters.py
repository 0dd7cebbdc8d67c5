"""Log formatters for JSON and human-readable output."""

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime

QUOTE_FIELDS = ("quote_id", "vehicle", "promo_code")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with quote fields copied when present."""

    def __init__(self, environment: str = "development", fields: Sequence[str] = QUOTE_FIELDS):
        super().__init__()
        self.environment = environment
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "env": self.environment,
        }

        for field in self.fields:
            value = getattr(record, field, "-")
            if value != "-":
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class DevFormatter(logging.Formatter):
    """Human-readable format; appends the quote id while one is active."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        quote_id = getattr(record, "quote_id", "-")
        if quote_id != "-":
            line = f"{line} [quote {quote_id}]"
        return line
