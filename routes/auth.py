"""Authentication blueprint: signup, login/logout and one-time-code flows."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required, set_access_cookies, unset_jwt_cookies

from services import accounts, otp, sessions
from utils.request_validation import get_image_upload, parse_json_request, parse_request_payload

auth_bp = Blueprint("auth", __name__)


def _set_session_cookie(response, token: str) -> None:
    """Attach the token as an HTTP-only cookie living as long as the token."""

    max_age = int(current_app.config["JWT_ACCESS_TOKEN_EXPIRES"].total_seconds())
    set_access_cookies(response, token, max_age=max_age)


@auth_bp.route("/signup", methods=["POST"])
def signup() -> tuple:
    """Register an account from a multipart form carrying ``profilePic``."""

    payload = parse_request_payload(request)
    image = get_image_upload(request, "profilePic")

    account = accounts.register_account(
        payload.get("email"),
        payload.get("password"),
        image,
        image.filename if image is not None else None,
        name=payload.get("name"),
        role=payload.get("role"),
    )

    message = "User registered successfully"
    if current_app.config.get("REQUIRE_EMAIL_VERIFICATION"):
        otp.issue_otp(account.email, purpose=otp.EMAIL_VERIFICATION)
        message = f"User registered successfully. OTP sent to {account.email}"

    return (
        jsonify({"success": True, "message": message, "user": account.to_dict()}),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login():
    """Check credentials and set the session cookie."""

    payload = parse_json_request(request, allow_empty=True)
    account, token = sessions.authenticate(payload.get("email"), payload.get("password"))

    response = jsonify(
        {"success": True, "message": "Login successful", "user": account.to_dict()}
    )
    _set_session_cookie(response, token)
    return response, HTTPStatus.OK


@auth_bp.route("/logout", methods=["POST"])
@jwt_required()
def logout():
    """Drop the session cookie. Tokens already issued stay valid until they expire."""

    account = sessions.current_account()
    sessions.end_session(account)

    response = jsonify({"success": True, "message": "User logged out successfully"})
    unset_jwt_cookies(response)
    return response, HTTPStatus.OK


@auth_bp.route("/forgot-password", methods=["PUT"])
def forgot_password():
    """Email a password reset code."""

    payload = parse_json_request(request, allow_empty=True)
    email = payload.get("email")
    otp.issue_otp(email, purpose=otp.PASSWORD_RESET)
    return jsonify({"success": True, "message": f"OTP sent to {email} successfully"})


@auth_bp.route("/verify-otp", methods=["PUT"])
def verify_otp():
    """Consume a one-time code.

    For an account still awaiting email verification this also verifies the
    account and signs it in.
    """

    payload = parse_json_request(request, allow_empty=True)
    account = otp.verify_otp(payload.get("email"), payload.get("otp"))

    if current_app.config.get("REQUIRE_EMAIL_VERIFICATION") and not account.is_verified:
        token = sessions.confirm_email(account)
        response = jsonify(
            {
                "success": True,
                "message": "Email verified successfully!",
                "user": account.to_dict(),
            }
        )
        _set_session_cookie(response, token)
        return response, HTTPStatus.OK

    return jsonify({"success": True, "message": "OTP verified successfully!"})


@auth_bp.route("/reset-password", methods=["PUT"])
def reset_password():
    """Set a new password for ``email``."""

    payload = parse_json_request(request, allow_empty=True)
    accounts.reset_password(payload.get("email"), payload.get("newPassword"))
    return jsonify({"success": True, "message": "Password reset successfully"})
