"""Image host backends."""

from .abstract_image_host import AbstractImageHost, HostedImage, ImageHostError
from .local_image_host import LocalImageHost

__all__ = ["AbstractImageHost", "HostedImage", "ImageHostError", "LocalImageHost"]
