"""
Flask Application Factory

Creates and configures the Flask application instance.
"""

import logging
import secrets

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from config.database import configure_database, init_database
from config.settings import settings as default_settings
from utils.date_utils import get_zone, utc_now, to_iso
from webapp.errors import ApiError
from webapp.routes.auth import auth_bp
from webapp.routes.habits import habits_bp

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Render every error as a JSON {"message": ...} body."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception(f"Unhandled error: {error}")
        return jsonify({'message': 'Internal server error'}), 500


def resolve_secret_key(app_settings):
    """
    Return the key used to sign bearer tokens.

    Without SECRET_KEY a debug or testing app gets a random per-process key;
    anywhere else startup fails.
    """
    if app_settings.secret_key:
        return app_settings.secret_key
    if app_settings.debug or app_settings.testing:
        logger.warning("SECRET_KEY not set; using a random key, tokens will not survive a restart")
        return secrets.token_hex(32)
    raise RuntimeError("SECRET_KEY must be set to sign auth tokens")


def create_app(overrides=None):
    """
    Create and configure the Flask application.

    Args:
        overrides (dict, optional): Settings fields to replace, e.g. database_url for tests

    Returns:
        Flask: The configured application
    """
    app_settings = default_settings.with_overrides(overrides)
    secret_key = resolve_secret_key(app_settings)
    # Fail at startup rather than on the first toggle
    get_zone(app_settings.habit_timezone)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=secret_key,
        TESTING=app_settings.testing,
        TOKEN_MAX_AGE=app_settings.token_max_age,
        HABIT_TIMEZONE=app_settings.habit_timezone,
        DATABASE_URL=app_settings.database_url,
    )

    CORS(
        app,
        origins=app_settings.cors_origins,
        supports_credentials=True,
        methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
        allow_headers=['Content-Type', 'Authorization'],
    )

    configure_database(app_settings.database_url)
    init_database()

    app.register_blueprint(auth_bp)
    app.register_blueprint(habits_bp)
    register_error_handlers(app)

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return {
            'status': 'ok',
            'timestamp': to_iso(utc_now())
        }

    logger.info(f"App created (timezone={app_settings.habit_timezone})")
    return app
