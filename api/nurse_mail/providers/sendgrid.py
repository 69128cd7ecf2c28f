"""SendGrid email provider (https://sendgrid.com)."""

import logging
from typing import Optional

import httpx

from nurse_mail.config import Settings
from nurse_mail.errors import ConfigurationMissing
from nurse_mail.providers.base import DEFAULT_SENDER_NAME, EmailProvider

logger = logging.getLogger(__name__)

SENDGRID_API_URL = "https://api.sendgrid.com/v3/mail/send"


class SendGridProvider(EmailProvider):
    """Send transactional email via the SendGrid v3 Mail Send API."""

    @property
    def provider_type(self) -> str:
        return "sendgrid"

    def __init__(self, api_key: str, from_email: str):
        self.api_key = api_key
        self.from_email = from_email

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendGridProvider":
        if not settings.sendgrid_api_key:
            raise ConfigurationMissing("SENDGRID_API_KEY is not set")
        if not settings.sender_address:
            raise ConfigurationMissing("MAIL_FROM or MAIL_USER must be set")
        return cls(api_key=settings.sendgrid_api_key, from_email=settings.sender_address)

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        sender_name: Optional[str] = None,
    ) -> None:
        display_name = sender_name or DEFAULT_SENDER_NAME

        async with httpx.AsyncClient(timeout=15) as client:
            resp = await client.post(
                SENDGRID_API_URL,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "personalizations": [{"to": [{"email": to}]}],
                    "from": {"email": self.from_email, "name": display_name},
                    "subject": subject,
                    "content": [{"type": "text/html", "value": html_body}],
                },
            )

            # SendGrid returns 202 on success
            if resp.status_code >= 400:
                raise RuntimeError(f"SendGrid send failed: {resp.status_code} {resp.text}")

        logger.info("Email sent via SendGrid to=%s subject=%s", to, subject)
