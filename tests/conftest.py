"""
Clinick API - Test Infrastructure (conftest.py)
===============================================
Provides:
  - In-memory Firestore (tests/fakes.py) per test
  - Resources wired exactly like production, around the fake client
  - FastAPI TestClient with injected resources
  - Recorders for FCM multicast sends and SMTP sessions
"""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.config.resources import AppResources
from app.core.settings import Settings
from app.main import create_app
from app.services import mail_service, notification_service
from tests.fakes import FakeFirestore


# ============================================================================
# Recorders
# ============================================================================

class FakeSMTP:
    """Records every SMTP session opened by the mailer."""

    sessions = []
    fail_on_send = False

    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.started_tls = False
        self.login_args = None
        self.sent = []
        FakeSMTP.sessions.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.login_args = (user, password)

    def send_message(self, message):
        if FakeSMTP.fail_on_send:
            raise OSError("connection reset")
        self.sent.append(message)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def db():
    return FakeFirestore()


@pytest.fixture
def test_settings():
    return Settings(
        PUSH_ENABLED=True,
        MAIL_ENABLED=True,
        SMTP_HOST="smtp.clinic.test",
        SMTP_PORT=587,
        SMTP_USER="alerts@clinic.test",
        SMTP_PASSWORD="app-password",
        MAIL_FROM="alerts@clinic.test",
        ALERT_EMAIL_TO="oncall@clinic.test",
        CORS_ORIGINS="http://localhost:3000,https://clinick-frontend.vercel.app",
    )


@pytest.fixture
def pushes(monkeypatch):
    """Captured FCM multicast messages; every token succeeds."""
    sent = []

    def fake_send(message, dry_run=False, app=None):
        sent.append(message)
        return SimpleNamespace(success_count=len(message.tokens), failure_count=0, responses=[])

    monkeypatch.setattr(notification_service.messaging, "send_each_for_multicast", fake_send)
    return sent


@pytest.fixture
def smtp(monkeypatch):
    FakeSMTP.sessions = []
    FakeSMTP.fail_on_send = False
    monkeypatch.setattr(mail_service.smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


@pytest.fixture
def resources(db, test_settings, pushes, smtp):
    return AppResources.build(db, test_settings)


@pytest.fixture
def client(resources, test_settings):
    app = create_app(resources=resources, settings=test_settings)
    with TestClient(app) as c:
        yield c
