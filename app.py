"""Application factory."""

import os
import uuid

from flask import Flask, jsonify, g, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from mail import LogMailer, SMTPMailer
from models import db
from routes.admin import admin_bp
from routes.auth import auth_bp
from routes.images import images_bp
from routes.profile import profile_bp
from storage import LocalImageHost

migrate = Migrate()
jwt = JWTManager()


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Collaborators
    app.extensions["image_host"] = LocalImageHost(
        app.config["UPLOAD_DIR"], base_url=app.config.get("IMAGE_BASE_URL", "/images")
    )
    app.extensions["mailer"] = _build_mailer(app)

    # Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(images_bp)

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)
    _register_session_callbacks()

    return app


def _build_mailer(app: Flask):
    """Use SMTP when a relay is configured, otherwise log outgoing mail."""

    host = app.config.get("SMTP_HOST")
    if not host:
        app.logger.info("SMTP_HOST not set; outgoing mail will be logged only")
        return LogMailer()
    return SMTPMailer(
        host,
        port=app.config.get("SMTP_PORT", 587),
        username=app.config.get("SMTP_USERNAME"),
        password=app.config.get("SMTP_PASSWORD"),
        use_tls=app.config.get("SMTP_USE_TLS", True),
        sender=app.config.get("MAIL_FROM", "no-reply@example.com"),
        sender_name=app.config.get("MAIL_SENDER_NAME"),
        timeout=app.config.get("SMTP_TIMEOUT", 10),
    )


def _error_response(message: str, status_code: int):
    response = jsonify({"success": False, "message": message})
    response.status_code = status_code
    return response


def _register_session_callbacks() -> None:
    """Render session token failures in the common error shape."""

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _error_response("Please login to access this page", 401)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _error_response("Invalid or expired token", 401)

    @jwt.expired_token_loader
    def _expired_token(jwt_header: dict, jwt_payload: dict):
        return _error_response("Invalid or expired token", 401)


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():  # pragma: no cover
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):  # pragma: no cover
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        response = _error_response(error.description, error.code or 500)
        response.headers.setdefault("X-Request-ID", g.get("request_id") or str(uuid.uuid4()))
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        app.logger.exception("Unhandled application error", exc_info=error)
        response = _error_response("An unexpected error occurred.", 500)
        response.headers.setdefault("X-Request-ID", g.get("request_id") or str(uuid.uuid4()))
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
