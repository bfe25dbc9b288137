"""Account model definition."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from utils import clock

from . import db


ROLES = ("user", "admin")
ACCOUNT_STATUSES = ("unverified", "verified")


def _new_account_id() -> str:
    return uuid.uuid4().hex


class Account(db.Model):
    """Represents a user account and its pending one-time code."""

    __tablename__ = "accounts"

    id = db.Column(db.String(32), primary_key=True, default=_new_account_id)
    name = db.Column(db.String(120), nullable=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(16), nullable=False, default="user")
    status = db.Column(
        db.String(16),
        nullable=False,
        default="unverified",
        server_default=db.text("'unverified'"),
    )
    otp = db.Column(db.String(16), nullable=True)
    otp_expires = db.Column(db.DateTime, nullable=True)
    profile_pic_public_id = db.Column(db.String(255), nullable=True)
    profile_pic_url = db.Column(db.String(512), nullable=True)
    session_issued_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=clock.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=clock.utcnow, onupdate=clock.utcnow
    )

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        if not self.password_hash or not password:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_verified(self) -> bool:
        return self.status == "verified"

    def mark_verified(self) -> None:
        self.status = "verified"

    def set_otp(self, code: str, ttl: timedelta, now: Optional[datetime] = None) -> None:
        """Store a one-time code together with its expiry."""

        self.otp = code
        self.otp_expires = (now or clock.utcnow()) + ttl

    def clear_otp(self) -> None:
        self.otp = None
        self.otp_expires = None

    def otp_matches(self, candidate: str, now: Optional[datetime] = None) -> bool:
        """Return True if ``candidate`` is the pending code and it has not expired.

        A code without an expiry is never valid, and a code is already expired
        at the exact instant of its expiry.
        """

        if not self.otp or self.otp_expires is None or not candidate:
            return False
        if (now or clock.utcnow()) >= self.otp_expires:
            return False
        return self.otp == str(candidate)

    @property
    def profile_pic(self) -> dict | None:
        if not self.profile_pic_public_id:
            return None
        return {"public_id": self.profile_pic_public_id, "url": self.profile_pic_url}

    def to_dict(self) -> dict:
        """Serialize the account without credentials or pending codes."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "status": self.status,
            "profilePic": self.profile_pic,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<Account {self.email}>"
