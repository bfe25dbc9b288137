"""Tests for the Flask application factory."""
from __future__ import annotations

from mail import LogMailer, SMTPMailer
from storage import LocalImageHost


def test_health_endpoint_returns_ok(client, tmp_path):
    """The health endpoint should respond with an OK payload and create the image folder."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert (tmp_path / "uploads" / "user-profiles").is_dir()


def test_blueprints_registered(app):
    """Application factory should register expected blueprints."""
    assert {"auth", "profile", "admin", "images"}.issubset(app.blueprints.keys())


def test_routes_registered(app):
    rules = {(rule.rule, method) for rule in app.url_map.iter_rules() for method in rule.methods}
    expected = {
        ("/signup", "POST"),
        ("/login", "POST"),
        ("/logout", "POST"),
        ("/my-profile", "GET"),
        ("/update-profile", "PUT"),
        ("/update-password", "PUT"),
        ("/forgot-password", "PUT"),
        ("/verify-otp", "PUT"),
        ("/reset-password", "PUT"),
        ("/users", "GET"),
        ("/users/<string:account_id>", "GET"),
        ("/users/<string:account_id>", "DELETE"),
    }
    assert expected.issubset(rules)


def test_collaborators_configured(app):
    assert isinstance(app.extensions["image_host"], LocalImageHost)


def test_mailer_selection(tmp_path):
    from app import create_app
    from config import Config

    class LogConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
        UPLOAD_DIR = str(tmp_path / "a")
        SMTP_HOST = None

    class SMTPConfig(LogConfig):
        UPLOAD_DIR = str(tmp_path / "b")
        SMTP_HOST = "smtp.example.com"

    assert isinstance(create_app(LogConfig).extensions["mailer"], LogMailer)
    assert isinstance(create_app(SMTPConfig).extensions["mailer"], SMTPMailer)
