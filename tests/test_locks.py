"""Tests for the per-account advisory locks."""

import threading

from models import db
from models.account import Account
from utils import locks


def test_same_key_shares_one_lock():
    first = locks._lock_for("a")
    again = locks._lock_for("a")
    other = locks._lock_for("b")

    assert first is again
    assert first is not other


def test_released_locks_leave_the_registry():
    with locks.account_lock("short-lived"):
        assert "short-lived" in locks._locks

    assert "short-lived" not in locks._locks


def test_account_lock_serializes_holders():
    order = []
    entered = threading.Event()
    release = threading.Event()

    def first():
        with locks.account_lock("k"):
            entered.set()
            release.wait(timeout=5)
            order.append("first")

    def second():
        entered.wait(timeout=5)
        with locks.account_lock("k"):
            order.append("second")

    threads = [threading.Thread(target=first), threading.Thread(target=second)]
    for thread in threads:
        thread.start()
    entered.wait(timeout=5)
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert order == ["first", "second"]


def test_unknown_emails_do_not_grow_the_registry(app, client):
    before = len(locks._locks)

    for number in range(25):
        email = f"nobody{number}@example.com"
        assert client.put("/forgot-password", json={"email": email}).status_code == 404
        assert client.put("/verify-otp", json={"email": email, "otp": "123456"}).status_code == 404

    assert len(locks._locks) == before


def test_known_accounts_do_not_stay_in_the_registry(app, client, mailer):
    with app.app_context():
        account = Account(email="known@example.com", status="verified")
        account.set_password("pw")
        db.session.add(account)
        db.session.commit()
        account_id = account.id

    assert client.put("/forgot-password", json={"email": "known@example.com"}).status_code == 200

    assert account_id not in locks._locks
