"""Profile blueprint for the signed-in account."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from services import accounts, sessions
from utils.request_validation import get_image_upload, parse_json_request, parse_request_payload

profile_bp = Blueprint("profile", __name__)


@profile_bp.route("/my-profile", methods=["GET"])
@jwt_required()
def my_profile():
    account = sessions.current_account()
    return jsonify({"success": True, "user": account.to_dict()})


@profile_bp.route("/update-profile", methods=["PUT"])
@jwt_required()
def update_profile():
    """Update name, role or profile image; a new image replaces the hosted one."""

    account = sessions.current_account()
    payload = parse_request_payload(request)
    image = get_image_upload(request, "profilePic")

    accounts.update_profile(
        account,
        name=payload.get("name"),
        role=payload.get("role"),
        image=image,
        filename=image.filename if image is not None else None,
    )
    return jsonify(
        {
            "success": True,
            "message": "Profile updated successfully",
            "user": account.to_dict(),
        }
    )


@profile_bp.route("/update-password", methods=["PUT"])
@jwt_required()
def update_password():
    account = sessions.current_account()
    payload = parse_json_request(request, allow_empty=True)
    accounts.update_password(
        account,
        payload.get("oldPassword"),
        payload.get("password"),
        payload.get("confirmPassword"),
    )
    return jsonify({"success": True, "message": "Password updated successfully"})
