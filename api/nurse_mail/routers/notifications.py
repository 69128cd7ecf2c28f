"""Routes used by the registration flow to send account emails."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from nurse_mail.auth import require_api_key
from nurse_mail.config import settings
from nurse_mail.errors import ConfigurationMissing, DispatchError
from nurse_mail.mail import Mailer
from nurse_mail.notifications import SentWithWarning
from nurse_mail.notifications.dispatcher import NotificationDispatcher
from nurse_mail.providers import resolve_email_provider
from nurse_mail.response import single_response
from nurse_mail.schemas.notification import (
    DispatchResponse,
    VerificationEmailRequest,
    WelcomeEmailRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_dispatcher() -> NotificationDispatcher:
    try:
        provider = resolve_email_provider(settings)
    except ConfigurationMissing as exc:
        logger.error("Mail provider is not configured: %s", exc)
        raise HTTPException(status_code=503, detail="Email delivery is not configured")
    mailer = Mailer(provider, sender_name=settings.mail_sender_name)
    return NotificationDispatcher(mailer, base_url=settings.frontend_url)


@router.post("/verification-email", summary="Send an email verification link")
async def send_verification_email(
    body: VerificationEmailRequest,
    _key=Depends(require_api_key),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    try:
        result = await dispatcher.send_verification(body.email, body.name, body.token)
    except DispatchError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    return single_response(DispatchResponse(status="sent", template=result.template))


@router.post("/welcome-email", summary="Send a welcome email (best effort)")
async def send_welcome_email(
    body: WelcomeEmailRequest,
    _key=Depends(require_api_key),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    result = await dispatcher.send_welcome(body.email, body.name)

    if isinstance(result, SentWithWarning):
        resp = DispatchResponse(
            status="sent_with_warning",
            template=result.template,
            warning=result.warning,
        )
    else:
        resp = DispatchResponse(status="sent", template=result.template)
    return single_response(resp)
