"""Exception hierarchy for fare quoting."""

from typing import Any


class FareError(Exception):
    """Base exception for all fare calculator errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FareError):
    """Missing or invalid pricing configuration."""

    pass


class NotFoundError(FareError):
    """Requested catalog entry does not exist."""

    pass
