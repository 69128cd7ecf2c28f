"""Outbound mail transport: render a named template and hand it to a provider."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from nurse_mail.errors import TransportFailure
from nurse_mail.providers.base import DEFAULT_SENDER_NAME, EmailProvider
from nurse_mail.templates import render_template

logger = logging.getLogger(__name__)


@dataclass
class MailEnvelope:
    """A rendered message, ready for the transport."""
    to: str
    subject: str
    template: str
    context: dict[str, str] = field(default_factory=dict)


class Mailer:
    """Mail transport backed by a single EmailProvider."""

    def __init__(self, provider: EmailProvider, sender_name: Optional[str] = None):
        self.provider = provider
        self.sender_name = sender_name or DEFAULT_SENDER_NAME

    async def send_mail(self, envelope: MailEnvelope) -> None:
        """
        Send one envelope. Any failure, including an unknown template,
        is raised as TransportFailure chained to the original error.
        """
        try:
            html_body = render_template(envelope.template, envelope.context)
            await self.provider.send_email(
                envelope.to,
                envelope.subject,
                html_body,
                self.sender_name,
            )
        except Exception as exc:
            raise TransportFailure(
                f"{self.provider.provider_type} could not send '{envelope.template}' "
                f"to {envelope.to}: {exc}"
            ) from exc

        logger.debug(
            "Mail handed to %s: to=%s template=%s",
            self.provider.provider_type,
            envelope.to,
            envelope.template,
        )
