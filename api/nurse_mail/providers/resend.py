"""Resend email provider (https://resend.com)."""

import logging
from typing import Optional

import httpx

from nurse_mail.config import Settings
from nurse_mail.errors import ConfigurationMissing
from nurse_mail.providers.base import DEFAULT_SENDER_NAME, EmailProvider

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendProvider(EmailProvider):
    """Send transactional email via the Resend REST API."""

    @property
    def provider_type(self) -> str:
        return "resend"

    def __init__(self, api_key: str, from_email: str):
        self.api_key = api_key
        self.from_email = from_email

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResendProvider":
        if not settings.resend_api_key:
            raise ConfigurationMissing("RESEND_API_KEY is not set")
        if not settings.sender_address:
            raise ConfigurationMissing("MAIL_FROM or MAIL_USER must be set")
        return cls(api_key=settings.resend_api_key, from_email=settings.sender_address)

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        sender_name: Optional[str] = None,
    ) -> None:
        display_name = sender_name or DEFAULT_SENDER_NAME
        from_addr = f"{display_name} <{self.from_email}>"

        async with httpx.AsyncClient(timeout=15) as client:
            resp = await client.post(
                RESEND_API_URL,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": from_addr,
                    "to": [to],
                    "subject": subject,
                    "html": html_body,
                },
            )

            if resp.status_code >= 400:
                raise RuntimeError(f"Resend send failed: {resp.status_code} {resp.text}")

        logger.info("Email sent via Resend to=%s subject=%s", to, subject)
