"""Local filesystem image host."""

from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import IO

from werkzeug.utils import secure_filename

from .abstract_image_host import AbstractImageHost, HostedImage, ImageHostError

PROFILE_FOLDER = "user-profiles"


class LocalImageHost(AbstractImageHost):
    """Keep images under the upload directory and expose them below ``base_url``."""

    def __init__(self, upload_dir: str, base_url: str = "/images", folder: str = PROFILE_FOLDER):
        self.base_directory = Path(upload_dir)
        self.folder = folder
        self.base_url = base_url.rstrip("/")
        os.makedirs(self.base_directory / self.folder, exist_ok=True)

    def upload(self, file_obj: IO[bytes], filename: str) -> HostedImage:
        """Save the image under a fresh id, keeping the original extension."""

        safe_name = secure_filename(filename)
        if not safe_name:
            raise ImageHostError("Filename must contain at least one valid character.")

        suffix = Path(safe_name).suffix.lower()
        public_id = f"{self.folder}/{uuid.uuid4().hex}{suffix}"
        destination = self.base_directory / public_id
        try:
            if hasattr(file_obj, "save"):
                file_obj.save(destination)  # type: ignore[arg-type]
            else:
                with open(destination, "wb") as output:
                    output.write(file_obj.read())
        except OSError as exc:
            raise ImageHostError(f"Could not store image: {exc}") from exc

        return HostedImage(public_id=public_id, url=f"{self.base_url}/{public_id}")

    def destroy(self, public_id: str) -> None:
        path = self.resolve(public_id)
        if path is None:
            return
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise ImageHostError(f"Could not remove image: {exc}") from exc

    def resolve(self, public_id: str) -> Path | None:
        """Return the on-disk path for ``public_id`` if it lies inside the host folder."""

        folder = (self.base_directory / self.folder).resolve()
        candidate = (self.base_directory / public_id).resolve()
        if folder not in candidate.parents:
            return None
        return candidate
