"""
Rate limiting for the public and login endpoints.

Uses Flask-Limiter keyed by client address. Enabled by RATELIMIT_ENABLED
(on in production); storage follows RATELIMIT_STORAGE_URI.
"""
import logging

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from ..utils.errors import error_response, ErrorCode

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)


def init_rate_limiter(app) -> None:
    limiter.init_app(app)

    @app.errorhandler(429)
    def ratelimit_exceeded(error):
        return error_response(
            'Too many requests. Please wait a moment and try again.',
            ErrorCode.RATE_LIMITED,
            429,
        )


def _public_submit_limit() -> str:
    return current_app.config['PUBLIC_SUBMIT_RATE_LIMIT']


def _login_limit() -> str:
    return current_app.config['LOGIN_RATE_LIMIT']


ratelimit_public = limiter.limit(_public_submit_limit)
ratelimit_login = limiter.limit(_login_limit)
