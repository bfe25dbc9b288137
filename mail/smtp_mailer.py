"""SMTP and logging mail backends."""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage

from .abstract_mailer import AbstractMailer, MailDeliveryError

logger = logging.getLogger(__name__)


class SMTPMailer(AbstractMailer):
    """Send mail through an SMTP relay, one connection per message."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        sender: str = "no-reply@example.com",
        sender_name: str | None = None,
        timeout: int = 10,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender = f"{sender_name} <{sender}>" if sender_name else sender
        self.timeout = timeout

    def _build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html, subtype="html")
        return msg

    def send(self, to: str, subject: str, html: str) -> None:
        msg = self._build_message(to, subject, html)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls(context=ssl.create_default_context())
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(f"SMTP delivery to {to} failed: {exc}") from exc


class LogMailer(AbstractMailer):
    """Development backend that writes messages to the log instead of sending them."""

    def send(self, to: str, subject: str, html: str) -> None:
        logger.info("Mail to=%s subject=%r\n%s", to, subject, html)
