"""Log filters."""

import logging


class DefaultQuoteFilter(logging.Filter):
    """Adds a placeholder quote_id so formatters can always reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "quote_id"):
            record.quote_id = "-"
        return True
