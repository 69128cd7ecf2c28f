"""Pytest configuration: test settings, fake transports and an API client."""
from __future__ import annotations

import os
from typing import List

import pytest
from fastapi.testclient import TestClient

os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ["FRONTEND_URL"] = "https://app.example.com"
os.environ["MAIL_PROVIDER"] = "smtp"
os.environ["MAIL_HOST"] = "smtp.example.com"
os.environ["MAIL_USER"] = "noreply@example.com"
os.environ["MAIL_PASSWORD"] = "hunter2"

from nurse_mail.errors import TransportFailure
from nurse_mail.mail import MailEnvelope
from nurse_mail.main import app
from nurse_mail.notifications.dispatcher import NotificationDispatcher

API_KEY_HEADERS = {"X-API-Key": "test-admin-key"}


class RecordingMailer:
    """Transport that accepts every envelope and remembers it."""

    def __init__(self) -> None:
        self.sent: List[MailEnvelope] = []

    async def send_mail(self, envelope: MailEnvelope) -> None:
        self.sent.append(envelope)


class FailingMailer(RecordingMailer):
    """Transport that records the attempt, then fails."""

    def __init__(self, message: str = "SMTP down") -> None:
        super().__init__()
        self.message = message

    async def send_mail(self, envelope: MailEnvelope) -> None:
        self.sent.append(envelope)
        raise TransportFailure(self.message)


@pytest.fixture
def recording_mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def failing_mailer() -> FailingMailer:
    return FailingMailer()


@pytest.fixture
def dispatcher(recording_mailer: RecordingMailer) -> NotificationDispatcher:
    return NotificationDispatcher(recording_mailer, base_url="https://app.example.com")


@pytest.fixture
def failing_dispatcher(failing_mailer: FailingMailer) -> NotificationDispatcher:
    return NotificationDispatcher(failing_mailer, base_url="https://app.example.com")


@pytest.fixture
def test_client() -> TestClient:
    """Provide a FastAPI test client. Dependency overrides are cleared afterwards."""

    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
