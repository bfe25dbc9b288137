"""Administrative user management routes."""

from __future__ import annotations

from functools import wraps

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import verify_jwt_in_request
from werkzeug.exceptions import Forbidden

from services import accounts, sessions

admin_bp = Blueprint("admin", __name__)


def admin_required(view):
    """Allow only signed-in admins, unless PROTECT_ADMIN_ROUTES is switched off."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        if current_app.config.get("PROTECT_ADMIN_ROUTES", True):
            verify_jwt_in_request()
            if sessions.current_account().role != "admin":
                raise Forbidden("Admin privileges required.")
        return view(*args, **kwargs)

    return wrapped


@admin_bp.route("/users", methods=["GET"])
@admin_required
def list_users():
    users = [account.to_dict() for account in accounts.list_accounts()]
    return jsonify({"success": True, "count": len(users), "users": users})


@admin_bp.route("/users/<string:account_id>", methods=["GET"])
@admin_required
def get_user(account_id: str):
    account = accounts.get_account(account_id)
    return jsonify({"success": True, "user": account.to_dict()})


@admin_bp.route("/users/<string:account_id>", methods=["DELETE"])
@admin_required
def delete_user(account_id: str):
    """Delete an account together with its hosted profile image."""

    account = accounts.get_account(account_id)
    accounts.delete_account(account)
    return jsonify({"success": True, "message": "User deleted successfully"})
