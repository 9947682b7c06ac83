"""
Authentication API endpoints.
Handles registration, login, logout and the current-user lookup.
"""
from flask import Blueprint, jsonify

from ..middleware.rate_limit import ratelimit_login
from ..middleware.session_auth import (
    clear_session_cookie,
    get_current_identity,
    get_session_token,
    set_session_cookie,
)
from ..services.identity_service import identity_service
from .common import json_body

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """
    Create an account and sign it in.

    Request body:
        username: string (required)
        password: string (required, min 8 chars)
        role: 'brand' | 'staff' (required)

    Returns:
        The new user; the session cookie is set on the response.
    """
    data = json_body()
    token, identity = identity_service.register(
        data.get('username'),
        data.get('password'),
        data.get('role'),
    )
    response = jsonify({'user': identity.to_dict()})
    response.status_code = 201
    return set_session_cookie(response, token)


@auth_bp.route('/login', methods=['POST'])
@ratelimit_login
def login():
    """
    Sign in with username and password.

    Request body:
        username: string (required)
        password: string (required)
    """
    data = json_body()
    token, identity = identity_service.login(data.get('username'), data.get('password'))
    response = jsonify({'user': identity.to_dict()})
    return set_session_cookie(response, token)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the current session. Always succeeds."""
    identity_service.logout(get_session_token())
    response = jsonify({'success': True})
    return clear_session_cookie(response)


@auth_bp.route('/me', methods=['GET'])
def me():
    identity = identity_service.current_user(get_current_identity())
    return jsonify({'user': identity.to_dict()})
