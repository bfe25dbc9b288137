"""Application configuration module."""

import os
from datetime import timedelta
from pathlib import Path


def _to_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///accounts.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Sessions: signed JWT carried in an HTTP-only cookie named "token"
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SESSION_TTL_DAYS = int(os.getenv("SESSION_TTL_DAYS", "15"))
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=SESSION_TTL_DAYS)
    JWT_TOKEN_LOCATION = ["cookies"]
    JWT_ACCESS_COOKIE_NAME = "token"
    JWT_SESSION_COOKIE = False
    JWT_COOKIE_SECURE = _to_bool(os.getenv("JWT_COOKIE_SECURE"), False)
    JWT_COOKIE_CSRF_PROTECT = _to_bool(os.getenv("JWT_COOKIE_CSRF_PROTECT"), False)

    # Accounts
    DEFAULT_ROLE = "user"
    REQUIRE_EMAIL_VERIFICATION = _to_bool(os.getenv("REQUIRE_EMAIL_VERIFICATION"), True)
    PROTECT_ADMIN_ROUTES = _to_bool(os.getenv("PROTECT_ADMIN_ROUTES"), True)

    # One-time codes
    OTP_LENGTH = int(os.getenv("OTP_LENGTH", "6"))
    OTP_TTL_SECONDS = int(os.getenv("OTP_TTL_SECONDS", "300"))

    # Profile images
    UPLOAD_DIR = os.getenv("UPLOAD_DIR", str(Path("workspace") / "uploads"))
    IMAGE_BASE_URL = os.getenv("IMAGE_BASE_URL", "/images")
    MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", str(5 * 1024 * 1024)))
    ALLOWED_UPLOAD_TYPES = os.getenv("ALLOWED_UPLOAD_TYPES", "jpg,jpeg,png,gif,webp")

    # Mail; without SMTP_HOST messages are only logged
    SMTP_HOST = os.getenv("SMTP_HOST")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME = os.getenv("SMTP_USERNAME")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
    SMTP_USE_TLS = _to_bool(os.getenv("SMTP_USE_TLS"), True)
    SMTP_TIMEOUT = int(os.getenv("SMTP_TIMEOUT", "10"))
    MAIL_FROM = os.getenv("MAIL_FROM", "no-reply@example.com")
    MAIL_SENDER_NAME = os.getenv("MAIL_SENDER_NAME", "Accounts Team")
