"""
Access control checks shared by every non-public operation.

Checks compose in a fixed order: authentication, then role, then
ownership. An anonymous caller therefore always gets the generic 401
before anything about the target resource is looked up.
"""
from dataclasses import dataclass
from typing import Optional

from ..utils.exceptions import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller, passed explicitly into service calls."""
    user_id: str
    username: str
    role: str

    def to_dict(self):
        return {'id': self.user_id, 'username': self.username, 'role': self.role}


def require_authenticated(identity: Optional[CallerIdentity]) -> CallerIdentity:
    if identity is None:
        raise AuthenticationError()
    return identity


def require_role(identity: Optional[CallerIdentity], role: str) -> CallerIdentity:
    identity = require_authenticated(identity)
    if identity.role != role:
        raise AuthorizationError(f'This action requires the {role} role')
    return identity


def require_ownership(entity, identity: Optional[CallerIdentity]):
    """Entity must expose ``owner_user_id`` matching the caller."""
    identity = require_authenticated(identity)
    if entity.owner_user_id != identity.user_id:
        raise AuthorizationError('You do not own this campaign')
    return entity
