"""
Campaign Registry.

Owns campaign creation, lookup and owner-only updates. Slug uniqueness is
pre-checked for a friendly error, but the unique index on
``campaigns.slug`` is what actually guarantees it.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models.campaign import Campaign
from ..models.user import UserRole
from ..utils.cache import cache, public_campaign_key
from ..utils.exceptions import NotFoundError, SlugTakenError, ValidationError
from ..utils.timeutils import parse_datetime, utc_now
from ..utils.validators import (
    require_text,
    validate_percentage,
    validate_slug,
    validate_url,
)
from .access_control import (
    CallerIdentity,
    require_authenticated,
    require_ownership,
    require_role,
)

logger = logging.getLogger(__name__)

# JSON key -> column
CAMPAIGN_FIELDS = {
    'name': 'name',
    'slug': 'slug',
    'promoCode': 'promo_code',
    'discountPercentage': 'discount_percentage',
    'discountedCheckoutUrl': 'discounted_checkout_url',
    'normalCheckoutUrl': 'normal_checkout_url',
    'expirationDate': 'expiration_date',
}

REQUIRED_FIELDS = tuple(CAMPAIGN_FIELDS)

UPDATABLE_FIELDS = (
    'name',
    'promoCode',
    'discountPercentage',
    'discountedCheckoutUrl',
    'normalCheckoutUrl',
    'expirationDate',
    'isActive',
)


def is_redeemable(campaign: Campaign, now: datetime = None) -> bool:
    """A campaign is redeemable iff it is active and not yet expired."""
    return campaign.is_redeemable(now or utc_now())


def unavailable_message(campaign: Campaign) -> str:
    """Customer-facing reason a campaign cannot be redeemed."""
    if not campaign.is_active:
        return 'This campaign is no longer active'
    return 'This campaign has expired'


def _clean_field(key: str, value: Any):
    if key == 'name':
        return require_text(value, 'name', max_length=200)
    if key == 'slug':
        return validate_slug(value)
    if key == 'promoCode':
        return require_text(value, 'promoCode', max_length=50)
    if key == 'discountPercentage':
        return validate_percentage(value)
    if key in ('discountedCheckoutUrl', 'normalCheckoutUrl'):
        return validate_url(value, key)
    if key == 'expirationDate':
        if value in (None, ''):
            raise ValidationError('expirationDate is required', field='expirationDate')
        try:
            return parse_datetime(value)
        except ValueError:
            raise ValidationError('expirationDate must be an ISO-8601 date', field='expirationDate')
    if key == 'isActive':
        if not isinstance(value, bool):
            raise ValidationError('isActive must be true or false', field='isActive')
        return value
    raise ValidationError(f"Unknown field '{key}'", field=key)


class CampaignService:
    """
    Campaign CRUD scoped by owner.

    Usage:
        campaign = campaign_service.create_campaign(identity, payload)
        campaign = campaign_service.update(identity, campaign.id, {'isActive': False})
    """

    # ==================== Lookups ====================

    def get_by_id(self, campaign_id: str) -> Optional[Campaign]:
        if not campaign_id:
            return None
        return db.session.get(Campaign, campaign_id)

    def get_by_slug(self, slug: str) -> Optional[Campaign]:
        if not slug:
            return None
        return Campaign.query.filter_by(slug=slug).first()

    def list_by_owner(self, owner_user_id: str) -> List[Campaign]:
        return (
            Campaign.query
            .filter_by(owner_user_id=owner_user_id)
            .order_by(Campaign.created_at.desc())
            .all()
        )

    def list_for_caller(self, identity: Optional[CallerIdentity]) -> List[Campaign]:
        identity = require_role(identity, UserRole.BRAND)
        return self.list_by_owner(identity.user_id)

    def get_for_caller(self, identity: Optional[CallerIdentity], campaign_id: str) -> Campaign:
        """
        Detail read. Brands only see campaigns they own; staff may read any
        campaign since they verify codes for every brand at the counter.
        """
        identity = require_authenticated(identity)
        campaign = self.get_by_id(campaign_id)
        if campaign is None:
            raise NotFoundError('Campaign', campaign_id)
        if identity.role == UserRole.BRAND:
            require_ownership(campaign, identity)
        return campaign

    def get_owned(self, identity: Optional[CallerIdentity], campaign_id: str) -> Campaign:
        """Campaign the calling brand owns: 401, 403, 404, 403 in that order."""
        identity = require_role(identity, UserRole.BRAND)
        campaign = self.get_by_id(campaign_id)
        if campaign is None:
            raise NotFoundError('Campaign', campaign_id)
        return require_ownership(campaign, identity)

    # ==================== Mutations ====================

    def create_campaign(self, identity: Optional[CallerIdentity], fields: Dict[str, Any]) -> Campaign:
        identity = require_role(identity, UserRole.BRAND)
        if not isinstance(fields, dict):
            raise ValidationError('Campaign payload must be an object')

        values = {}
        for key in REQUIRED_FIELDS:
            value = fields.get(key)
            if value is None:
                raise ValidationError(f'{key} is required', field=key)
            values[CAMPAIGN_FIELDS[key]] = _clean_field(key, value)

        slug = values['slug']
        if self.get_by_slug(slug) is not None:
            raise SlugTakenError(slug)

        campaign = Campaign(owner_user_id=identity.user_id, is_active=True, **values)
        db.session.add(campaign)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            if self.get_by_slug(slug) is not None:
                raise SlugTakenError(slug)
            raise

        logger.info(f'Campaign {campaign.id} created by {identity.user_id} (slug={slug})')
        return campaign

    def update(self, identity: Optional[CallerIdentity], campaign_id: str, patch: Dict[str, Any]) -> Campaign:
        """
        Partial update by the owner.

        ``slug`` is immutable so shared links keep working; sending the
        current slug back is tolerated.
        """
        campaign = self.get_owned(identity, campaign_id)
        if not isinstance(patch, dict):
            raise ValidationError('Update payload must be an object')

        changes = {}
        for key, value in patch.items():
            if key == 'slug':
                if value != campaign.slug:
                    raise ValidationError('slug cannot be changed after creation', field='slug')
                continue
            if key not in UPDATABLE_FIELDS:
                raise ValidationError(f"Field '{key}' cannot be updated", field=key)
            changes[key] = _clean_field(key, value)

        for key, value in changes.items():
            column = 'is_active' if key == 'isActive' else CAMPAIGN_FIELDS[key]
            setattr(campaign, column, value)

        db.session.commit()
        cache.delete(public_campaign_key(campaign.slug))

        if changes:
            logger.info(f"Campaign {campaign.id} updated: {', '.join(sorted(changes))}")
        return campaign


campaign_service = CampaignService()
