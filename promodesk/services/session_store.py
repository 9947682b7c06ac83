"""
Server-side session store.

Sessions are rows keyed by the SHA-256 of an opaque random token. The raw
token only ever lives in the client's cookie.
"""
import hashlib
import logging
import secrets
from datetime import timedelta
from typing import Optional, Tuple

from flask import current_app

from ..extensions import db
from ..models.user import User, UserSession
from ..utils.timeutils import utc_now
from .access_control import CallerIdentity

logger = logging.getLogger(__name__)


def _hash_token(token: str) -> str:
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


class SessionStore:
    """
    Create, resolve and destroy sessions.

    Usage:
        token, identity = session_store.create(user)
        identity = session_store.resolve(token)
        session_store.destroy(token)
    """

    def create(self, user: User) -> Tuple[str, CallerIdentity]:
        token = secrets.token_urlsafe(32)
        lifetime = timedelta(days=current_app.config.get('SESSION_LIFETIME_DAYS', 7))
        now = utc_now()

        db.session.add(UserSession(
            user_id=user.id,
            token_hash=_hash_token(token),
            created_at=now,
            expires_at=now + lifetime,
        ))
        db.session.commit()

        return token, CallerIdentity(user_id=user.id, username=user.username, role=user.role)

    def resolve(self, token: Optional[str]) -> Optional[CallerIdentity]:
        """Identity for a live token, None for unknown or expired ones."""
        if not token:
            return None

        row = UserSession.query.filter_by(token_hash=_hash_token(token)).first()
        if row is None or row.expires_at < utc_now():
            return None

        user = row.user
        if user is None:
            return None
        return CallerIdentity(user_id=user.id, username=user.username, role=user.role)

    def destroy(self, token: Optional[str]) -> None:
        """Delete the session if it exists. Idempotent."""
        if not token:
            return
        UserSession.query.filter_by(token_hash=_hash_token(token)).delete()
        db.session.commit()

    def purge_expired(self) -> int:
        count = UserSession.query.filter(UserSession.expires_at < utc_now()).delete()
        db.session.commit()
        if count:
            logger.info(f'Purged {count} expired sessions')
        return count


session_store = SessionStore()
