"""Exception hierarchy for outbound notifications."""

from typing import Optional


class NotificationError(Exception):
    """Base class for all notification errors."""


class ConfigurationMissing(NotificationError):
    """Required mail configuration is not set."""


class TransportFailure(NotificationError):
    """The mail transport rejected or could not send a message."""


class DispatchError(NotificationError):
    """A notification that must be delivered could not be sent.

    The original exception is kept on ``cause`` and chained as ``__cause__``
    so callers can decide whether to retry or surface a user-facing error.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
