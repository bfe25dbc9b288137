"""Serve profile images kept by the local image host."""

from __future__ import annotations

import mimetypes

from flask import Blueprint, current_app, send_file
from werkzeug.exceptions import NotFound

from storage import LocalImageHost

images_bp = Blueprint("images", __name__)


@images_bp.route("/images/<path:public_id>", methods=["GET"])
def get_image(public_id: str):
    host = current_app.extensions["image_host"]
    if not isinstance(host, LocalImageHost):
        raise NotFound("Image not found.")

    path = host.resolve(public_id)
    if path is None or not path.is_file():
        raise NotFound("Image not found.")

    mimetype = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return send_file(path, mimetype=mimetype)
