"""
Application factory and global configuration.

Creates the Flask app, applies security headers (CSP), configures rate limiting,
builds the service bundle (plant store, request store, zone resolver), registers
blueprints, Jinja filters and CLI commands. This file keeps startup/config
concerns together and avoids domain logic here.
"""

from __future__ import annotations
import os
from flask import Flask, Response, jsonify, render_template, request
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv  # <-- ensure .env is loaded for local dev
from .extensions import limiter, Services, init_services
from .routes.api import api_bp
from .routes.web import web_bp
from .services.plant_store import create_plant_store
from .services.request_store import RequestStore
from .services.zone_detection import ZoneResolver


def _validate_production_security(app: Flask, cfg_path: str) -> None:
    """
    Validate critical security settings in production environments.

    Raises RuntimeError if production security requirements are not met.

    Checks:
    - SESSION_COOKIE_SECURE must be True (cookies only over HTTPS)
    - SECRET_KEY must be set and strong (>= 32 characters)
    - DEBUG must be False (no debug mode in production)
    - PREFERRED_URL_SCHEME should be "https"
    """
    is_production = "ProdConfig" in cfg_path
    is_test = app.config.get("TESTING", False)

    if not is_production or is_test:
        return

    errors = []

    if not app.config.get("SESSION_COOKIE_SECURE", False):
        errors.append(
            "SESSION_COOKIE_SECURE must be True in production. "
            "Cookies must only be sent over HTTPS."
        )

    secret_key = app.config.get("SECRET_KEY", "")
    if not secret_key:
        errors.append(
            "SECRET_KEY is not set. Set FLASK_SECRET_KEY environment variable. "
            "Generate with: python -c 'import secrets; print(secrets.token_hex(32))'"
        )
    elif len(secret_key) < 32:
        errors.append(
            f"SECRET_KEY is too weak ({len(secret_key)} chars). "
            "Must be at least 32 characters for production security."
        )

    if app.config.get("DEBUG", False):
        errors.append("DEBUG must be False in production.")

    if app.config.get("PREFERRED_URL_SCHEME", "http") != "https":
        errors.append(
            "PREFERRED_URL_SCHEME should be 'https' in production. "
            "Set PREFERRED_URL_SCHEME=https environment variable."
        )

    if errors:
        error_msg = "\n\n[ERROR] PRODUCTION SECURITY VALIDATION FAILED:\n\n" + "\n\n".join(f"  * {err}" for err in errors)
        error_msg += "\n\n[WARNING] The application will not start until these security issues are resolved.\n"
        raise RuntimeError(error_msg)

    app.logger.info("[OK] Production security validation passed")


def create_app(config_object: str | None = None, services: Services | None = None) -> Flask:
    """
    Build the Flask app.

    Args:
        config_object: Dotted path of a config class; defaults to $APP_CONFIG
                       or plantprop.config.ProdConfig
        services: Prebuilt service bundle (tests inject fakes here)
    """
    # override=False so production env vars are not overwritten by a stale .env file
    load_dotenv(override=False)

    app = Flask(
        __name__,
        static_folder="static",
        template_folder="templates",
    )

    # --- Load central config.py first ---
    cfg_path = config_object or os.getenv("APP_CONFIG", "plantprop.config.ProdConfig")
    try:
        app.config.from_object(cfg_path)
    except (ImportError, AttributeError) as e:
        app.logger.warning(f"Could not load config object {cfg_path}: {e}")

    _validate_production_security(app, cfg_path)

    limiter.init_app(app)

    if not app.config.get("RATELIMIT_ENABLED", True):
        limiter.enabled = False

    if not app.secret_key:
        app.secret_key = app.config.get("SECRET_KEY", "")

    # HTML forms use Flask-WTF CSRF tokens; the JSON API checks X-Requested-With instead
    csrf = CSRFProtect(app)
    csrf.exempt(api_bp)

    # Data access and outbound lookups are built once here and handed to routes
    # through app.extensions (see extensions.get_services()).
    if services is None:
        services = Services(
            plants=create_plant_store(app.config),
            requests=RequestStore(),
            zones=ZoneResolver.from_config(app.config),
        )
    init_services(app, services)

    # ---- Content Security Policy ----
    csp = (
        "default-src 'self'; "
        "script-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data: https://images.unsplash.com https://pixabay.com; "
        "connect-src 'self'; "
        "object-src 'none'; "
        "base-uri 'self'; "
        "frame-ancestors 'none'; "
        "form-action 'self'"
    )

    @app.after_request
    def apply_security_headers(resp: Response) -> Response:
        resp.headers["Content-Security-Policy"] = csp
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-XSS-Protection"] = "0"  # CSP supersedes legacy XSS filter

        if app.config.get("SESSION_COOKIE_SECURE", False):
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains; preload"

        resp.headers["Permissions-Policy"] = (
            "accelerometer=(), camera=(), geolocation=(), gyroscope=(), "
            "magnetometer=(), microphone=(), payment=(), usb=()"
        )

        return resp

    @app.errorhandler(404)
    def not_found(e):
        if request.path.startswith("/api/"):
            return jsonify({"message": "Not found"}), 404
        return render_template("not_found.html"), 404

    # Blueprints
    app.register_blueprint(web_bp)
    app.register_blueprint(api_bp, url_prefix="/api/v1")

    # Register Jinja filters (defined in plantprop/utils/filters.py for testability)
    from .utils.filters import method_label, month_name, difficulty_class
    app.jinja_env.filters["method_label"] = method_label
    app.jinja_env.filters["month_name"] = month_name
    app.jinja_env.filters["difficulty_class"] = difficulty_class

    # Register CLI commands
    from plantprop.cli import detect_zone_command, plant_windows_command
    app.cli.add_command(detect_zone_command)
    app.cli.add_command(plant_windows_command)

    return app
