"""Types shared by the notification dispatcher and its callers."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class NotificationRequest:
    """One dispatch call's input. Never persisted."""
    recipient_address: str
    recipient_name: str
    verification_token: Optional[str] = None


@dataclass(frozen=True)
class Sent:
    """The transport accepted the message."""
    template: str


@dataclass(frozen=True)
class SentWithWarning:
    """The message was not delivered but the failure is non-fatal."""
    template: str
    cause: BaseException

    @property
    def warning(self) -> str:
        return str(self.cause)


DispatchResult = Union[Sent, SentWithWarning]
