"""
Profile Service.

Brand and staff profiles are 1:1 with their user and upserted in place.
"""
import logging
from typing import Any, Dict, Optional

from ..extensions import db
from ..models.profile import BrandProfile, StaffProfile
from ..models.user import UserRole
from ..utils.exceptions import ValidationError
from ..utils.validators import optional_text, validate_email, validate_optional_url
from .access_control import CallerIdentity, require_role

logger = logging.getLogger(__name__)

PROFILE_MODELS = {
    UserRole.BRAND: BrandProfile,
    UserRole.STAFF: StaffProfile,
}

MAX_LENGTHS = {
    'brandName': 200,
    'name': 100,
    'storeName': 200,
    'storeAddress': 500,
    'phone': 32,
}


def _clean(key: str, value: Any) -> str:
    if key == 'website':
        return validate_optional_url(value, key)
    if key == 'contactEmail':
        return validate_email(value, key)
    return optional_text(value, key, max_length=MAX_LENGTHS.get(key))


class ProfileService:

    def get(self, identity: Optional[CallerIdentity], role: str):
        identity = require_role(identity, role)
        model = PROFILE_MODELS[role]
        profile = db.session.get(model, identity.user_id)
        if profile is None:
            profile = model(user_id=identity.user_id)
            db.session.add(profile)
            db.session.commit()
        return profile

    def upsert(self, identity: Optional[CallerIdentity], role: str, fields: Dict[str, Any]):
        """
        Create the profile if absent, then overwrite the supplied fields.

        Unknown keys are rejected, the same as a campaign patch.
        """
        profile = self.get(identity, role)
        if not isinstance(fields, dict):
            raise ValidationError('Profile payload must be an object')

        changes = {}
        for key, value in fields.items():
            if key not in profile.FIELDS:
                raise ValidationError(f"Field '{key}' cannot be updated", field=key)
            changes[profile.FIELDS[key]] = _clean(key, value)

        for column, value in changes.items():
            setattr(profile, column, value)
        db.session.commit()

        logger.info(f'{role} profile updated for {identity.user_id}')
        return profile


profile_service = ProfileService()
