"""Account registration, profile changes and administration."""

from __future__ import annotations

from typing import IO

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import BadRequest, Conflict, Forbidden, InternalServerError, NotFound, Unauthorized

from models import db
from models.account import ROLES, Account
from storage import AbstractImageHost, HostedImage, ImageHostError


def _image_host() -> AbstractImageHost:
    return current_app.extensions["image_host"]


def _extract_role(raw_role: str | None) -> str:
    """Return a valid role, falling back to the configured default when absent."""

    role = (raw_role or "").strip().lower()
    if not role:
        return current_app.config.get("DEFAULT_ROLE", "user")
    if role not in ROLES:
        raise BadRequest(f"Role must be one of: {', '.join(ROLES)}.")
    return role


def _assignable_role(raw_role: str | None, current: str | None = None) -> str:
    """Validate a role chosen by the account holder.

    While admin routes are protected, nobody can grant themselves the admin
    role; administrators are created with ``scripts/seed_admin.py``.
    """

    role = _extract_role(raw_role)
    protected = current_app.config.get("PROTECT_ADMIN_ROUTES", True)
    if role == "admin" and current != "admin" and protected:
        raise Forbidden("Admin role cannot be self-assigned.")
    return role


def _upload_image(image: IO[bytes], filename: str) -> HostedImage:
    try:
        return _image_host().upload(image, filename)
    except ImageHostError as exc:
        current_app.logger.exception("Profile image upload failed")
        raise BadRequest(str(exc))


def _destroy_image(public_id: str | None) -> None:
    if not public_id:
        return
    try:
        _image_host().destroy(public_id)
    except ImageHostError:
        current_app.logger.exception("Could not remove hosted image %s", public_id)
        raise InternalServerError("Failed to remove profile image")


def register_account(
    email: str | None,
    password: str | None,
    image: IO[bytes] | None,
    filename: str | None = None,
    *,
    name: str | None = None,
    role: str | None = None,
) -> Account:
    """Create an account with a hashed password and a hosted profile image."""

    if image is None:
        raise BadRequest("Image file is required")
    if not email:
        raise BadRequest("Invalid email detail")
    if not password:
        raise BadRequest("Password is required")
    role = _assignable_role(role)

    if Account.query.filter_by(email=email).first() is not None:
        raise Conflict("User already exists")

    hosted = _upload_image(image, filename or getattr(image, "filename", None) or "")

    account = Account(
        name=name,
        email=email,
        role=role,
        status=(
            "unverified"
            if current_app.config.get("REQUIRE_EMAIL_VERIFICATION")
            else "verified"
        ),
        profile_pic_public_id=hosted.public_id,
        profile_pic_url=hosted.url,
    )
    account.set_password(password)
    db.session.add(account)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        _destroy_image(hosted.public_id)
        raise Conflict("User already exists")

    current_app.logger.info("Registered account %s (%s)", account.id, account.status)
    return account


def update_profile(
    account: Account,
    *,
    name: str | None = None,
    role: str | None = None,
    image: IO[bytes] | None = None,
    filename: str | None = None,
) -> Account:
    """Replace the profile image and/or name and role when provided.

    Input is validated before the image host is touched. The previous image
    is destroyed only once the new reference has been committed.
    """

    new_role = _assignable_role(role, current=account.role) if role else None

    hosted = None
    if image is not None:
        hosted = _upload_image(image, filename or getattr(image, "filename", None) or "")

    previous_public_id = account.profile_pic_public_id
    if hosted is not None:
        account.profile_pic_public_id = hosted.public_id
        account.profile_pic_url = hosted.url
    if name:
        account.name = name
    if new_role:
        account.role = new_role

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        if hosted is not None:
            _destroy_image(hosted.public_id)
        raise

    if hosted is not None and previous_public_id != hosted.public_id:
        _destroy_image(previous_public_id)
    return account


def update_password(
    account: Account,
    old_password: str | None,
    password: str | None,
    confirm_password: str | None,
) -> None:
    """Change the password of a signed-in account after checking the current one."""

    if not old_password or not password or not confirm_password:
        raise BadRequest("All fields are required")
    if not account.check_password(old_password):
        raise Unauthorized("Old password is incorrect!")
    if password != confirm_password:
        raise BadRequest("Passwords do not match!")

    account.set_password(password)
    db.session.commit()
    current_app.logger.info("Password updated for account %s", account.id)


def reset_password(email: str | None, new_password: str | None) -> None:
    """Overwrite the password of the account registered under ``email``.

    Nothing here checks that a one-time code was verified first.
    """

    if not email or not new_password:
        raise BadRequest("Email and password are required!")
    account = Account.query.filter_by(email=email).first()
    if account is None:
        raise NotFound("User with this email not found!")

    account.set_password(new_password)
    db.session.commit()
    current_app.logger.info("Password reset for account %s", account.id)


def list_accounts() -> list[Account]:
    return Account.query.order_by(Account.created_at.asc()).all()


def get_account(account_id: str) -> Account:
    account = db.session.get(Account, account_id)
    if account is None:
        raise NotFound("User not found!")
    return account


def delete_account(account: Account) -> None:
    """Remove the account and its hosted profile image."""

    account_id = account.id
    _destroy_image(account.profile_pic_public_id)
    db.session.delete(account)
    db.session.commit()
    current_app.logger.info("Deleted account %s", account_id)
