"""
Session Authentication Middleware.

Resolves the session cookie to a CallerIdentity once per request and
provides the decorator API routes use to require a signed-in caller.
"""
from datetime import timedelta
from functools import wraps
from typing import Optional

from flask import current_app, g, request

from ..services.access_control import CallerIdentity, require_authenticated, require_role
from ..services.session_store import session_store


def get_session_token() -> Optional[str]:
    return request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])


def get_current_identity() -> Optional[CallerIdentity]:
    """Identity bound to this request's cookie, or None."""
    if 'identity' not in g:
        g.identity = session_store.resolve(get_session_token())
    return g.identity


def set_session_cookie(response, token: str):
    config = current_app.config
    response.set_cookie(
        config['AUTH_COOKIE_NAME'],
        token,
        max_age=int(timedelta(days=config['SESSION_LIFETIME_DAYS']).total_seconds()),
        httponly=True,
        secure=config['AUTH_COOKIE_SECURE'],
        samesite='Lax',
    )
    return response


def clear_session_cookie(response):
    config = current_app.config
    response.delete_cookie(
        config['AUTH_COOKIE_NAME'],
        httponly=True,
        secure=config['AUTH_COOKIE_SECURE'],
        samesite='Lax',
    )
    return response


def require_auth(role: str = None):
    """
    Decorator requiring a signed-in caller, optionally of a given role.

    Sets g.identity for the view. Failures raise AuthenticationError (401)
    or AuthorizationError (403), rendered by the app's error handlers.

    Usage:
        @campaigns_bp.route('', methods=['GET'])
        @require_auth(role='brand')
        def list_campaigns():
            identity = g.identity
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            identity = require_authenticated(get_current_identity())
            if role:
                require_role(identity, role)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def init_session_auth(app) -> None:
    """Drop any identity left on g from an earlier request sharing the app context."""

    @app.before_request
    def reset_identity():
        g.pop('identity', None)
