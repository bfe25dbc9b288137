"""Tests for the mail backends."""

from __future__ import annotations

import smtplib

import pytest

from mail import LogMailer, MailDeliveryError, SMTPMailer
from mail import smtp_mailer


class _FakeSMTP:
    instances: list["_FakeSMTP"] = []
    fail_on_send = False

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls: list[str] = []
        self.messages = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self, context=None):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(f"login:{username}")

    def send_message(self, msg):
        if self.fail_on_send:
            raise smtplib.SMTPRecipientsRefused({})
        self.messages.append(msg)


@pytest.fixture()
def fake_smtp(monkeypatch):
    _FakeSMTP.instances = []
    _FakeSMTP.fail_on_send = False
    monkeypatch.setattr(smtp_mailer.smtplib, "SMTP", _FakeSMTP)
    return _FakeSMTP


def test_smtp_mailer_sends_html(fake_smtp):
    mailer = SMTPMailer(
        "smtp.example.com",
        port=2525,
        username="relay",
        password="secret",
        sender="no-reply@example.com",
        sender_name="Accounts Team",
    )

    mailer.send("to@example.com", "Password Reset OTP", "<h2>123456</h2>")

    smtp = fake_smtp.instances[-1]
    assert (smtp.host, smtp.port) == ("smtp.example.com", 2525)
    assert smtp.calls == ["starttls", "login:relay"]
    msg = smtp.messages[-1]
    assert msg["To"] == "to@example.com"
    assert msg["From"] == "Accounts Team <no-reply@example.com>"
    assert msg["Subject"] == "Password Reset OTP"
    assert "123456" in msg.get_body(preferencelist=("html",)).get_content()


def test_smtp_mailer_without_tls_or_login(fake_smtp):
    SMTPMailer("localhost", port=25, use_tls=False).send("to@example.com", "s", "<p>x</p>")

    assert fake_smtp.instances[-1].calls == []


def test_smtp_failure_raises_delivery_error(fake_smtp):
    fake_smtp.fail_on_send = True

    with pytest.raises(MailDeliveryError):
        SMTPMailer("smtp.example.com").send("to@example.com", "s", "<p>x</p>")


def test_log_mailer_logs_message(caplog):
    with caplog.at_level("INFO", logger="mail.smtp_mailer"):
        LogMailer().send("to@example.com", "Hello", "<p>body</p>")

    assert "to@example.com" in caplog.text
    assert "Hello" in caplog.text
