"""Credential checks and session lifecycle."""

from __future__ import annotations

from flask import current_app
from flask_jwt_extended import get_jwt_identity
from werkzeug.exceptions import BadRequest, NotFound, Unauthorized

from models import db
from models.account import Account
from services import accounts, tokens
from utils import clock


def _resolve_account(account_id: str | None) -> Account:
    account = db.session.get(Account, account_id) if account_id else None
    if account is None:
        raise NotFound("User not found!")
    return account


def issue_session(account: Account) -> str:
    """Stamp the account's session field and return a freshly signed token."""

    account.session_issued_at = clock.utcnow()
    db.session.commit()
    return tokens.sign(account.id)


def authenticate(email: str | None, password: str | None) -> tuple[Account, str]:
    """Check credentials and return the account with a new session token.

    With email verification enabled, an account that is still unverified is
    provisional: any login attempt deletes it before the password is checked.
    """

    if not email or not password:
        raise BadRequest("Email and password are required.")

    account = Account.query.filter_by(email=email).first()
    if account is None:
        raise NotFound("User with this email not found!")

    if current_app.config.get("REQUIRE_EMAIL_VERIFICATION") and not account.is_verified:
        current_app.logger.warning(
            "Purging unverified account %s on login attempt", account.id
        )
        accounts.delete_account(account)
        raise Unauthorized("Email was never verified. Please sign up again.")

    if not account.check_password(password):
        raise Unauthorized("Wrong password")

    token = issue_session(account)
    current_app.logger.info("Account %s logged in", account.id)
    return account, token


def verify_session(token: str | None) -> Account:
    """Resolve a presented session token to its account."""

    if not token:
        raise Unauthorized("Please login to access this page")
    try:
        account_id = tokens.verify(token)
    except tokens.InvalidSessionToken:
        raise Unauthorized("Invalid or expired token")
    return _resolve_account(account_id)


def current_account() -> Account:
    """Return the account behind the token already checked by ``jwt_required``."""

    return _resolve_account(get_jwt_identity())


def end_session(account: Account) -> None:
    """Clear the session field. The caller must also drop the cookie."""

    account.session_issued_at = None
    db.session.commit()
    current_app.logger.info("Account %s logged out", account.id)


def confirm_email(account: Account) -> str:
    """Mark a freshly verified account as verified and open its first session."""

    account.mark_verified()
    current_app.logger.info("Account %s verified its email", account.id)
    return issue_session(account)
