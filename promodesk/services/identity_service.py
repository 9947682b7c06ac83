"""
Identity Service.

Registers and authenticates brand and staff users and binds them to
server-side sessions.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models.user import User, UserRole
from ..utils.exceptions import (
    DuplicateUsernameError,
    InvalidCredentialsError,
    ValidationError,
)
from ..utils.validators import validate_username, validate_password
from .access_control import CallerIdentity, require_authenticated
from .profile_service import PROFILE_MODELS
from .session_store import session_store

logger = logging.getLogger(__name__)


class IdentityService:
    """
    Registration, login and logout.

    Register and login return ``(token, identity)``; the caller delivers the
    token to the client as a cookie.
    """

    def register(self, username, password, role) -> Tuple[str, CallerIdentity]:
        username = validate_username(username).lower()
        password = validate_password(password)
        if role not in UserRole.ALL:
            raise ValidationError(
                f"role must be one of: {', '.join(UserRole.ALL)}", field='role'
            )

        if User.query.filter_by(username=username).first():
            raise DuplicateUsernameError(username)

        user = User(username=username, role=role)
        user.set_password(password)
        db.session.add(user)

        try:
            db.session.flush()
            db.session.add(PROFILE_MODELS[role](user_id=user.id))
            db.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            db.session.rollback()
            raise DuplicateUsernameError(username)

        logger.info(f'Registered {role} user {user.id}')
        return session_store.create(user)

    def login(self, username, password) -> Tuple[str, CallerIdentity]:
        if not isinstance(username, str) or not isinstance(password, str):
            raise InvalidCredentialsError()

        user = User.query.filter_by(username=username.strip().lower()).first()
        if user is None or not user.check_password(password):
            logger.warning('Rejected login attempt')
            raise InvalidCredentialsError()

        logger.info(f'User {user.id} logged in')
        return session_store.create(user)

    def logout(self, token: Optional[str]) -> None:
        session_store.destroy(token)

    def current_user(self, identity: Optional[CallerIdentity]) -> CallerIdentity:
        return require_authenticated(identity)


identity_service = IdentityService()
