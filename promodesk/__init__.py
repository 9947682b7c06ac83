"""
PromoDesk coupon platform
Flask application factory
"""
import os
import logging
from flask import Flask
from flask_compress import Compress
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .extensions import db, migrate
from .config import get_config, validate_config
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

compress = Compress()


def create_app(config_name: str = None) -> Flask:
    """
    Application factory for creating Flask app instances.

    Args:
        config_name: Configuration environment (development, production, testing)

    Returns:
        Configured Flask application
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    # Setup logging before anything else
    setup_logging()
    validate_config(config_name)

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    from .utils.cache import init_cache
    init_cache(app)

    compress.init_app(app)
    app.config['COMPRESS_MIMETYPES'] = ['application/json']
    app.config['COMPRESS_MIN_SIZE'] = 500  # Only compress responses > 500 bytes

    CORS(
        app,
        origins=app.config['CORS_ORIGINS'],
        supports_credentials=True,
        allow_headers=['Content-Type', 'X-Request-ID'],
    )

    from .middleware import init_rate_limiter, init_request_id_tracking, init_session_auth
    init_rate_limiter(app)
    if app.config.get('RATELIMIT_ENABLED'):
        logger.info('Rate limiting enabled')

    init_request_id_tracking(app)
    init_session_auth(app)

    register_blueprints(app)

    from .commands import init_app as init_commands
    init_commands(app)

    register_error_handlers(app)

    @app.route('/health')
    def health_check():
        return {'status': 'healthy', 'service': 'promodesk'}

    return app


def register_blueprints(app: Flask) -> None:
    """Register all API blueprints."""
    from .api.auth import auth_bp
    from .api.campaigns import campaigns_bp
    from .api.public import public_bp
    from .api.profiles import profiles_bp
    from .api.staff import staff_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(campaigns_bp, url_prefix='/campaigns')

    # Public landing page (no auth)
    app.register_blueprint(public_bp, url_prefix='/c')

    # /brand/profile and /staff/profile
    app.register_blueprint(profiles_bp)

    # /coupons/verify, /redemptions, /staff/*
    app.register_blueprint(staff_bp)


def register_error_handlers(app: Flask) -> None:
    """Render business errors, HTTP errors and crashes in the standard error shape."""
    from .utils.errors import ErrorCode, error_response, internal_error
    from .utils.exceptions import (
        PromoDeskError,
        AuthenticationError,
        InvalidCredentialsError,
        AuthorizationError,
        NotFoundError,
        ValidationError,
        DuplicateUsernameError,
        SlugTakenError,
        CampaignUnavailableError,
        AlreadyRedeemedError,
    )

    status_map = {
        AuthenticationError: 401,
        InvalidCredentialsError: 401,
        AuthorizationError: 403,
        NotFoundError: 404,
        ValidationError: 400,
        DuplicateUsernameError: 400,
        SlugTakenError: 400,
        CampaignUnavailableError: 400,
        AlreadyRedeemedError: 409,
    }

    http_codes = {
        400: ErrorCode.INVALID_REQUEST,
        401: ErrorCode.AUTH_REQUIRED,
        403: ErrorCode.PERMISSION_DENIED,
        404: ErrorCode.NOT_FOUND,
        409: ErrorCode.STATE_CONFLICT,
    }

    @app.errorhandler(PromoDeskError)
    def handle_business_error(error):
        status = 400
        for cls in type(error).__mro__:
            if cls in status_map:
                status = status_map[cls]
                break
        db.session.rollback()
        return error_response(error.message, error.code, status)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        code = http_codes.get(error.code, ErrorCode.INVALID_REQUEST)
        return error_response(error.description or error.name, code, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.exception(f'Unhandled error: {error}')
        return internal_error()
