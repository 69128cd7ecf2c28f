"""Resolve the configured email provider."""

import logging

from nurse_mail.config import Settings
from nurse_mail.providers.base import EmailProvider
from nurse_mail.providers.resend import ResendProvider
from nurse_mail.providers.sendgrid import SendGridProvider
from nurse_mail.providers.smtp import SmtpProvider

logger = logging.getLogger(__name__)

_PROVIDERS = {
    "smtp": SmtpProvider,
    "resend": ResendProvider,
    "sendgrid": SendGridProvider,
}


def resolve_email_provider(settings: Settings) -> EmailProvider:
    """
    Build the provider named by MAIL_PROVIDER.

    Raises ValueError for an unknown provider name and ConfigurationMissing
    when the chosen provider lacks its credentials.
    """
    provider_type = settings.mail_provider.strip().lower()
    provider_cls = _PROVIDERS.get(provider_type)
    if provider_cls is None:
        raise ValueError(f"Unknown email provider type: {settings.mail_provider}")

    provider = provider_cls.from_settings(settings)
    logger.debug("Resolved email provider %s", provider.provider_type)
    return provider
