"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

import os
from typing import Iterable

from flask import Request, current_app
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest

MAX_UPLOAD_SIZE_DEFAULT = 5 * 1024 * 1024
ALLOWED_EXTENSIONS_DEFAULT = {"jpg", "jpeg", "png", "gif", "webp"}


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    _check_required(data, required_keys)
    return data


def parse_request_payload(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
) -> dict:
    """Return fields from a JSON body or a form/multipart body."""

    if req.is_json:
        return parse_json_request(req, required_keys=required_keys, allow_empty=True)

    data = req.form.to_dict()
    _check_required(data, required_keys)
    return data


def _check_required(data: dict, required_keys: Iterable[str] | None) -> None:
    if not required_keys:
        return
    missing = [key for key in required_keys if not data.get(key)]
    if missing:
        raise BadRequest(
            "Missing required fields: {}.".format(", ".join(sorted(missing)))
        )


def _allowed_extensions() -> set[str]:
    configured = current_app.config.get("ALLOWED_UPLOAD_TYPES")
    if not configured:
        return set(ALLOWED_EXTENSIONS_DEFAULT)
    if isinstance(configured, str):
        values: Iterable[str] = configured.split(",")
    else:
        values = configured

    normalized = {str(raw).strip().lower().lstrip(".") for raw in values}
    normalized.discard("")
    if not normalized:
        return set(ALLOWED_EXTENSIONS_DEFAULT)
    if "jpeg" in normalized or "jpg" in normalized:
        normalized.update({"jpg", "jpeg"})
    return normalized


def get_image_upload(req: Request, field: str = "profilePic") -> FileStorage | None:
    """Return the uploaded image in ``field`` after type and size checks, or None."""

    file = req.files.get(field)
    if not isinstance(file, FileStorage) or not (file.filename or "").strip():
        return None

    extension = file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
    allowed = _allowed_extensions()
    if extension not in allowed:
        raise BadRequest(
            f"File type not allowed. Allowed types: {', '.join(sorted(allowed))}."
        )

    max_size = int(current_app.config.get("MAX_UPLOAD_SIZE", MAX_UPLOAD_SIZE_DEFAULT))
    file.stream.seek(0, os.SEEK_END)
    size = file.stream.tell()
    file.stream.seek(0)
    if size > max_size:
        raise BadRequest(f"Image exceeds the maximum upload size of {max_size} bytes.")

    return file
