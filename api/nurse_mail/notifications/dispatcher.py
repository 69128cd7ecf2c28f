"""Dispatcher for account emails sent during registration."""

import logging

from nurse_mail.errors import DispatchError
from nurse_mail.mail import MailEnvelope, Mailer
from nurse_mail.notifications import (
    DispatchResult,
    NotificationRequest,
    Sent,
    SentWithWarning,
)
from nurse_mail.templates import EMAIL_VERIFICATION, WELCOME

logger = logging.getLogger(__name__)

VERIFY_EMAIL_PATH = "/auth/verify-email"

VERIFICATION_SUBJECT = "Verify Your Email - Nurse Platform"
WELCOME_SUBJECT = "Welcome to Nurse Platform!"


def build_verification_url(base_url: str, token: str) -> str:
    """Return ``{base_url}/auth/verify-email?token={token}``. The token is not re-encoded."""
    return f"{base_url}{VERIFY_EMAIL_PATH}?token={token}"


class NotificationDispatcher:
    """
    Render and submit verification and welcome emails.

    Verification failures are raised as DispatchError so the registration
    flow can decide what to do. Welcome failures are logged and returned as
    SentWithWarning, never raised.
    """

    def __init__(self, mailer: Mailer, base_url: str):
        self.mailer = mailer
        self.base_url = base_url or ""

    def _base_context(self, request: NotificationRequest) -> dict[str, str]:
        if not self.base_url:
            logger.warning(
                "FRONTEND_URL is not configured; links in mail to %s will be relative",
                request.recipient_address,
            )
        return {
            "name": request.recipient_name,
            "email": request.recipient_address,
            "frontendUrl": self.base_url,
        }

    def render_verification(self, request: NotificationRequest) -> MailEnvelope:
        context = self._base_context(request)
        context["verificationUrl"] = build_verification_url(
            self.base_url, request.verification_token or ""
        )
        return MailEnvelope(
            to=request.recipient_address,
            subject=VERIFICATION_SUBJECT,
            template=EMAIL_VERIFICATION,
            context=context,
        )

    def render_welcome(self, request: NotificationRequest) -> MailEnvelope:
        return MailEnvelope(
            to=request.recipient_address,
            subject=WELCOME_SUBJECT,
            template=WELCOME,
            context=self._base_context(request),
        )

    async def send_verification(
        self, recipient_address: str, recipient_name: str, token: str
    ) -> Sent:
        request = NotificationRequest(recipient_address, recipient_name, token)
        envelope = self.render_verification(request)

        try:
            await self.mailer.send_mail(envelope)
        except Exception as exc:
            logger.error(
                "Failed to send verification email to %s: %s",
                recipient_address,
                exc,
                exc_info=True,
            )
            raise DispatchError("Failed to send verification email", cause=exc) from exc

        logger.info("Verification email sent to %s", recipient_address)
        return Sent(template=envelope.template)

    async def send_welcome(self, recipient_address: str, recipient_name: str) -> DispatchResult:
        request = NotificationRequest(recipient_address, recipient_name)
        envelope = self.render_welcome(request)

        try:
            await self.mailer.send_mail(envelope)
        except Exception as exc:
            logger.error(
                "Failed to send welcome email to %s: %s",
                recipient_address,
                exc,
                exc_info=True,
            )
            return SentWithWarning(template=envelope.template, cause=exc)

        logger.info("Welcome email sent to %s", recipient_address)
        return Sent(template=envelope.template)
