"""Email dispatch abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod


class MailDeliveryError(Exception):
    """Raised when a message could not be handed to the mail service."""


class AbstractMailer(ABC):
    """Interface for outgoing mail backends."""

    @abstractmethod
    def send(self, to: str, subject: str, html: str) -> None:
        """Deliver an HTML message or raise :class:`MailDeliveryError`."""
