"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import re
import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from mail import AbstractMailer, MailDeliveryError  # noqa: E402
from models import db  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SMTP_HOST = None
    REQUIRE_EMAIL_VERIFICATION = True
    PROTECT_ADMIN_ROUTES = True
    OTP_TTL_SECONDS = 300


class RecordingMailer(AbstractMailer):
    """Keeps sent messages in memory; set ``fail`` to simulate a relay outage."""

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []
        self.fail = False

    def send(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise MailDeliveryError("relay unavailable")
        self.sent.append({"to": to, "subject": subject, "html": html})

    def last_code(self) -> str:
        match = re.search(r">(\d+)</h2>", self.sent[-1]["html"])
        assert match, "no code in the last message"
        return match.group(1)


@pytest.fixture()
def app(tmp_path) -> Flask:
    """Create a Flask application instance for tests."""

    upload_dir = tmp_path / "uploads"

    class TestConfig(_BaseTestConfig):
        UPLOAD_DIR = str(upload_dir)

    application = create_app(TestConfig)
    application.extensions["mailer"] = RecordingMailer()

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def mailer(app: Flask) -> RecordingMailer:
    return app.extensions["mailer"]

