"""Tests for the Account model helpers."""

from datetime import datetime, timedelta

from models import db
from models.account import Account


def test_password_is_hashed(app):
    with app.app_context():
        account = Account(email="helper@example.com")
        account.set_password("password123")
        db.session.add(account)
        db.session.commit()

        assert account.password_hash != "password123"
        assert account.check_password("password123") is True
        assert account.check_password("wrong") is False
        assert account.check_password("") is False


def test_defaults_and_verification(app):
    with app.app_context():
        account = Account(email="helper@example.com")
        account.set_password("pw")
        db.session.add(account)
        db.session.commit()
        db.session.refresh(account)

        assert len(account.id) == 32
        assert account.role == "user"
        assert account.status == "unverified"
        assert account.is_verified is False

        account.mark_verified()
        db.session.commit()
        db.session.refresh(account)

        assert account.status == "verified"


def test_otp_fields_move_together():
    account = Account(email="otp@example.com")
    now = datetime(2026, 3, 1, 9, 0, 0)

    account.set_otp("123456", timedelta(minutes=5), now=now)
    assert account.otp_expires == now + timedelta(minutes=5)
    assert account.otp_matches("123456", now=now + timedelta(minutes=4)) is True
    assert account.otp_matches("654321", now=now) is False
    assert account.otp_matches("123456", now=now + timedelta(minutes=5)) is False

    account.clear_otp()
    assert account.otp is None and account.otp_expires is None
    assert account.otp_matches("123456", now=now) is False


def test_to_dict_hides_credentials():
    account = Account(
        id="abc",
        email="x@example.com",
        role="user",
        status="verified",
        otp="123456",
        profile_pic_public_id="user-profiles/a.png",
        profile_pic_url="/images/user-profiles/a.png",
    )
    account.set_password("pw")

    data = account.to_dict()

    assert "password_hash" not in data
    assert "otp" not in data and "otp_expires" not in data
    assert data["profilePic"] == {
        "public_id": "user-profiles/a.png",
        "url": "/images/user-profiles/a.png",
    }
