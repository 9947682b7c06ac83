"""
User accounts and server-side sessions.
"""
import uuid
from werkzeug.security import generate_password_hash, check_password_hash

from ..extensions import db
from ..utils.timeutils import utc_now, isoformat


class UserRole:
    """Roles a user can hold. Fixed at registration."""
    BRAND = 'brand'
    STAFF = 'staff'

    ALL = (BRAND, STAFF)


class User(db.Model):
    """
    A brand owner or a store staff member.

    Never deleted in-band; only the password may change after creation.
    """
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, default=utc_now, nullable=False)

    campaigns = db.relationship('Campaign', backref='owner', lazy='dynamic')

    def set_password(self, password: str) -> None:
        # Salted, adaptive one-way hash
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f'<User {self.username} ({self.role})>'

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'role': self.role,
            'createdAt': isoformat(self.created_at),
        }


class UserSession(db.Model):
    """
    Server-side session keyed by the hash of an opaque cookie token.

    The raw token never touches the database.
    """
    __tablename__ = 'user_sessions'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    token_hash = db.Column(db.String(64), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utc_now, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    user = db.relationship('User')

    def __repr__(self):
        return f'<UserSession user={self.user_id} expires={self.expires_at}>'
