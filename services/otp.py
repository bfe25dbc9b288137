"""One-time code issuance and validation.

Each account holds at most one pending code. Issuing a code overwrites any
earlier one, and a successful verification clears it, so a code can be used
once and only the latest one is ever accepted.
"""

from __future__ import annotations

import secrets
import string
from datetime import timedelta
from typing import Literal

from flask import current_app
from sqlalchemy import update
from werkzeug.exceptions import BadRequest, InternalServerError, NotFound

from mail import AbstractMailer, MailDeliveryError
from models import db
from models.account import Account
from utils import clock
from utils.locks import account_lock

OTPPurpose = Literal["password_reset", "email_verification"]

PASSWORD_RESET: OTPPurpose = "password_reset"
EMAIL_VERIFICATION: OTPPurpose = "email_verification"

_SUBJECTS = {
    PASSWORD_RESET: "Password Reset OTP",
    EMAIL_VERIFICATION: "Verify your email address",
}

_INTROS = {
    PASSWORD_RESET: (
        "We received a request to reset your password. "
        "Your One-Time Password (OTP) for this process is:"
    ),
    EMAIL_VERIFICATION: (
        "Thanks for signing up. Use this One-Time Password (OTP) "
        "to verify your email address:"
    ),
}


def generate_code(length: int = 6) -> str:
    """Return a random numeric code of ``length`` digits."""

    return "".join(secrets.choice(string.digits) for _ in range(length))


def _mailer() -> AbstractMailer:
    return current_app.extensions["mailer"]


def _render_message(code: str, purpose: OTPPurpose, ttl_seconds: int) -> str:
    minutes = max(1, ttl_seconds // 60)
    signature = current_app.config.get("MAIL_SENDER_NAME", "Accounts Team")
    return f"""<p>Hi there,</p>
<p>{_INTROS[purpose]}</p>
<h2 style="font-size: 32px; font-weight: bold; color: #4CAF50;">{code}</h2>
<p>This code expires in {minutes} minute{"s" if minutes != 1 else ""}.</p>
<p>If you did not make this request, please ignore this email. Your account is safe.</p>
<p>Best regards,<br>{signature}</p>"""


def _find_account(email: str) -> Account:
    account = Account.query.filter_by(email=email).first()
    if account is None:
        raise NotFound("User with this email not found!")
    return account


def issue_otp(email: str | None, purpose: OTPPurpose = PASSWORD_RESET) -> str:
    """Store a fresh code on the account and email it.

    If the email cannot be sent the code is withdrawn again and a 500 is
    raised, leaving the account with no pending code.
    """

    if not email:
        raise BadRequest("Please provide an email address")
    if purpose not in _SUBJECTS:
        raise ValueError(f"Unknown OTP purpose: {purpose}")

    length = int(current_app.config.get("OTP_LENGTH", 6))
    ttl_seconds = int(current_app.config.get("OTP_TTL_SECONDS", 300))

    account = _find_account(email)
    with account_lock(account.id):
        db.session.refresh(account)
        code = generate_code(length)
        account.set_otp(code, timedelta(seconds=ttl_seconds), now=clock.utcnow())
        db.session.commit()

        try:
            _mailer().send(
                account.email,
                _SUBJECTS[purpose],
                _render_message(code, purpose, ttl_seconds),
            )
        except MailDeliveryError:
            current_app.logger.exception(
                "Error while sending %s OTP to account %s", purpose, account.id
            )
            account.clear_otp()
            db.session.commit()
            raise InternalServerError("Failed to send OTP email")

    current_app.logger.info("Issued %s OTP for account %s", purpose, account.id)
    return code


def verify_otp(email: str | None, candidate: str | int | None) -> Account:
    """Consume the pending code for ``email`` if ``candidate`` matches and is unexpired."""

    if not email or candidate in (None, ""):
        raise BadRequest("Email and otp are required")
    candidate = str(candidate).strip()

    account = _find_account(email)
    with account_lock(account.id):
        db.session.refresh(account)
        now = clock.utcnow()
        if not account.otp_matches(candidate, now):
            current_app.logger.warning("Rejected OTP for account %s", account.id)
            raise BadRequest("Invalid or expired OTP")

        # Compare-and-clear so a code can only be consumed once.
        result = db.session.execute(
            update(Account)
            .where(
                Account.id == account.id,
                Account.otp == candidate,
                Account.otp_expires > now,
            )
            .values(otp=None, otp_expires=None)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            db.session.rollback()
            raise BadRequest("Invalid or expired OTP")
        db.session.commit()
        db.session.refresh(account)

    current_app.logger.info("Verified OTP for account %s", account.id)
    return account
