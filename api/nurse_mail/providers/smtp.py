"""SMTP email provider (generic, works with any SMTP server)."""

import asyncio
import logging
import smtplib
from email.mime.text import MIMEText
from functools import partial
from typing import Optional

from nurse_mail.config import Settings
from nurse_mail.errors import ConfigurationMissing
from nurse_mail.providers.base import DEFAULT_SENDER_NAME, EmailProvider

logger = logging.getLogger(__name__)


class SmtpProvider(EmailProvider):
    """Send email via a standard SMTP server."""

    @property
    def provider_type(self) -> str:
        return "smtp"

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        use_tls: bool,
        from_email: str,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_email = from_email

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpProvider":
        """Build from MAIL_HOST / MAIL_PORT / MAIL_USER / MAIL_PASSWORD."""
        if not settings.mail_host:
            raise ConfigurationMissing("MAIL_HOST is not set")
        if not settings.sender_address:
            raise ConfigurationMissing("MAIL_FROM or MAIL_USER must be set")

        return cls(
            host=settings.mail_host,
            port=settings.mail_port,
            username=settings.mail_user,
            password=settings.mail_password,
            use_tls=settings.mail_use_tls,
            from_email=settings.sender_address,
        )

    def _build_message(
        self,
        to: str,
        subject: str,
        html_body: str,
        sender_name: Optional[str] = None,
    ) -> MIMEText:
        display_name = sender_name or DEFAULT_SENDER_NAME

        msg = MIMEText(html_body, "html")
        msg["Subject"] = subject
        msg["From"] = f"{display_name} <{self.from_email}>"
        msg["To"] = to
        return msg

    def _send_sync(
        self,
        to: str,
        subject: str,
        html_body: str,
        sender_name: Optional[str] = None,
    ) -> None:
        """Synchronous SMTP send."""
        msg = self._build_message(to, subject, html_body, sender_name)

        with smtplib.SMTP(self.host, self.port) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg)

        logger.info("Email sent via SMTP to=%s subject=%s", to, subject)

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        sender_name: Optional[str] = None,
    ) -> None:
        """Send email asynchronously by running sync SMTP in executor."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            partial(self._send_sync, to, subject, html_body, sender_name),
        )
