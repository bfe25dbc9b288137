"""Outgoing mail backends."""

from .abstract_mailer import AbstractMailer, MailDeliveryError
from .smtp_mailer import LogMailer, SMTPMailer

__all__ = ["AbstractMailer", "LogMailer", "MailDeliveryError", "SMTPMailer"]
