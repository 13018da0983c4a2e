"""Exceptions raised by the ticker subsystem."""

from __future__ import annotations


class TickerError(Exception):
    """Base exception for ticker errors."""


class UsageError(TickerError):
    """Raised when a lifecycle or registration contract is misused."""


class InvalidStateError(UsageError):
    """Raised when an operation is called in the wrong lifecycle state."""


class AlreadyRunningError(InvalidStateError):
    """Raised when starting a data feed that is already running."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Data feed {url} is already running")


class NotRunningError(InvalidStateError):
    """Raised when stopping a data feed that is not running."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Data feed {url} is not running and cannot be stopped")


class DuplicateListenerError(UsageError):
    """Raised when the same listener is registered twice."""


class TransportError(TickerError):
    """Raised by a fetcher when a resource could not be fetched."""

    def __init__(self, url: str, reason: str, status: int | None = None):
        self.url = url
        self.reason = reason
        self.status = status
        super().__init__(f"Fetching {url} failed: {reason}")


class ParseError(TickerError):
    """Raised when a body does not yield a usable numeric value."""


class UnknownQuantityError(TickerError):
    """Raised when a quantity has no display label."""
