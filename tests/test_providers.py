"""Tests for email providers and provider resolution."""
from __future__ import annotations

import json

import httpx
import pytest
import respx

from nurse_mail.config import Settings
from nurse_mail.errors import ConfigurationMissing
from nurse_mail.providers import (
    ResendProvider,
    SendGridProvider,
    SmtpProvider,
    resolve_email_provider,
)
from nurse_mail.providers import smtp as smtp_module
from nurse_mail.providers.resend import RESEND_API_URL
from nurse_mail.providers.sendgrid import SENDGRID_API_URL


def _settings(**overrides) -> Settings:
    values = {
        "mail_provider": "smtp",
        "mail_host": "smtp.example.com",
        "mail_port": 587,
        "mail_user": "noreply@example.com",
        "mail_password": "hunter2",
        "mail_from": None,
        "resend_api_key": "",
        "sendgrid_api_key": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeSMTP:
    instances: list = []

    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.actions = []
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.actions.append("quit")
        return False

    def starttls(self):
        self.actions.append("starttls")

    def login(self, username, password):
        self.actions.append(("login", username, password))

    def send_message(self, msg):
        self.actions.append("send")
        self.messages.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtp_module.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


# --- resolution -------------------------------------------------------------


def test_resolve_smtp_provider_from_settings():
    provider = resolve_email_provider(_settings())

    assert isinstance(provider, SmtpProvider)
    assert provider.host == "smtp.example.com"
    assert provider.port == 587
    assert provider.use_tls is True
    assert provider.from_email == "noreply@example.com"


def test_mail_from_overrides_mail_user_as_sender():
    provider = resolve_email_provider(_settings(mail_from="care@example.com"))
    assert provider.from_email == "care@example.com"


@pytest.mark.parametrize(
    "name, api_key_field, expected",
    [
        ("resend", "resend_api_key", ResendProvider),
        ("sendgrid", "sendgrid_api_key", SendGridProvider),
        (" SendGrid ", "sendgrid_api_key", SendGridProvider),
    ],
)
def test_resolve_http_providers(name, api_key_field, expected):
    provider = resolve_email_provider(_settings(mail_provider=name, **{api_key_field: "key"}))
    assert isinstance(provider, expected)
    assert provider.api_key == "key"


def test_resolve_unknown_provider_raises_value_error():
    with pytest.raises(ValueError, match="Unknown email provider type"):
        resolve_email_provider(_settings(mail_provider="carrier-pigeon"))


@pytest.mark.parametrize(
    "overrides, missing",
    [
        ({"mail_host": ""}, "MAIL_HOST"),
        ({"mail_user": "", "mail_from": None}, "MAIL_FROM or MAIL_USER"),
        ({"mail_provider": "resend"}, "RESEND_API_KEY"),
        ({"mail_provider": "sendgrid"}, "SENDGRID_API_KEY"),
    ],
)
def test_missing_configuration_is_reported(overrides, missing):
    with pytest.raises(ConfigurationMissing, match=missing):
        resolve_email_provider(_settings(**overrides))


# --- SMTP -------------------------------------------------------------------


@pytest.mark.asyncio
async def test_smtp_uses_starttls_and_login(fake_smtp):
    provider = SmtpProvider("smtp.example.com", 587, "user", "pw", True, "noreply@example.com")

    await provider.send_email("a@example.com", "Hello", "<p>hi</p>", "Nurse Platform")

    server = fake_smtp.instances[0]
    assert (server.host, server.port) == ("smtp.example.com", 587)
    assert server.actions == ["starttls", ("login", "user", "pw"), "send", "quit"]

    msg = server.messages[0]
    assert msg["To"] == "a@example.com"
    assert msg["Subject"] == "Hello"
    assert msg["From"] == "Nurse Platform <noreply@example.com>"
    assert msg.get_content_type() == "text/html"


@pytest.mark.asyncio
async def test_smtp_without_tls_or_credentials_skips_login(fake_smtp):
    provider = SmtpProvider("localhost", 25, "", "", False, "noreply@example.com")

    await provider.send_email("a@example.com", "Hello", "<p>hi</p>")

    server = fake_smtp.instances[0]
    assert server.actions == ["send", "quit"]
    assert server.messages[0]["From"] == "Nurse Platform <noreply@example.com>"


# --- HTTP providers ---------------------------------------------------------


@pytest.mark.asyncio
async def test_resend_posts_message():
    provider = ResendProvider(api_key="re_key", from_email="noreply@example.com")

    with respx.mock:
        route = respx.post(RESEND_API_URL).mock(
            return_value=httpx.Response(200, json={"id": "msg_1"})
        )
        await provider.send_email("a@example.com", "Hello", "<p>hi</p>", "Nurse Platform")

    assert route.call_count == 1
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer re_key"
    assert json.loads(request.content) == {
        "from": "Nurse Platform <noreply@example.com>",
        "to": ["a@example.com"],
        "subject": "Hello",
        "html": "<p>hi</p>",
    }


@pytest.mark.asyncio
async def test_resend_error_status_raises():
    provider = ResendProvider(api_key="re_key", from_email="noreply@example.com")

    with respx.mock:
        respx.post(RESEND_API_URL).mock(return_value=httpx.Response(422, text="invalid from"))
        with pytest.raises(RuntimeError, match="Resend send failed: 422"):
            await provider.send_email("a@example.com", "Hello", "<p>hi</p>")


@pytest.mark.asyncio
async def test_sendgrid_posts_message():
    provider = SendGridProvider(api_key="sg_key", from_email="noreply@example.com")

    with respx.mock:
        route = respx.post(SENDGRID_API_URL).mock(return_value=httpx.Response(202))
        await provider.send_email("a@example.com", "Hello", "<p>hi</p>")

    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer sg_key"
    payload = json.loads(request.content)
    assert payload["personalizations"] == [{"to": [{"email": "a@example.com"}]}]
    assert payload["from"] == {"email": "noreply@example.com", "name": "Nurse Platform"}
    assert payload["content"] == [{"type": "text/html", "value": "<p>hi</p>"}]


@pytest.mark.asyncio
async def test_sendgrid_error_status_raises():
    provider = SendGridProvider(api_key="sg_key", from_email="noreply@example.com")

    with respx.mock:
        respx.post(SENDGRID_API_URL).mock(return_value=httpx.Response(401, text="unauthorized"))
        with pytest.raises(RuntimeError, match="SendGrid send failed: 401"):
            await provider.send_email("a@example.com", "Hello", "<p>hi</p>")
