"""Email provider abstraction layer."""

from nurse_mail.providers.base import EmailProvider
from nurse_mail.providers.resend import ResendProvider
from nurse_mail.providers.sendgrid import SendGridProvider
from nurse_mail.providers.smtp import SmtpProvider
from nurse_mail.providers.resolver import resolve_email_provider

__all__ = [
    "EmailProvider",
    "ResendProvider",
    "SendGridProvider",
    "SmtpProvider",
    "resolve_email_provider",
]
