"""Image hosting abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import IO


class ImageHostError(Exception):
    """Raised when the image host cannot store or remove an image."""


@dataclass(frozen=True)
class HostedImage:
    """Reference to an image held by the image host."""

    public_id: str
    url: str


class AbstractImageHost(ABC):
    """Interface for profile image hosts."""

    @abstractmethod
    def upload(self, file_obj: IO[bytes], filename: str) -> HostedImage:
        """Store an image and return its external id and public URL."""

    @abstractmethod
    def destroy(self, public_id: str) -> None:
        """Remove a previously uploaded image. Unknown ids are ignored."""
