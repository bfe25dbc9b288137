"""Seed an administrator account."""

import os

from app import create_app
from models import db
from models.account import Account

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")


def main() -> None:
    app = create_app()
    with app.app_context():
        admin = Account.query.filter_by(email=ADMIN_EMAIL).first()
        if admin is None:
            admin = Account(email=ADMIN_EMAIL, name="Administrator")
            db.session.add(admin)
            action = "created"
        else:
            action = "updated"
        admin.role = "admin"
        admin.mark_verified()
        admin.set_password(ADMIN_PASSWORD)
        db.session.commit()
        print(f"Admin account {action}: {ADMIN_EMAIL}")


if __name__ == "__main__":
    main()
