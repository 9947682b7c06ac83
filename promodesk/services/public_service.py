"""
Public Resolution Service.

Anonymous-facing logic behind the campaign landing page: the public
campaign view, promo-code submission and per-customer coupon issue.

Nothing returned from here may carry the campaign id, the owner, the
promo code or the discounted checkout URL, except the discounted URL on
a successful submission.
"""
import logging
import secrets
import string
from datetime import datetime
from typing import Any, Dict, Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models.campaign import Campaign, CustomerSubmission, campaign_status, CampaignStatus
from ..models.coupon import Coupon
from ..utils.cache import cache, public_campaign_key
from ..utils.exceptions import CampaignUnavailableError, NotFoundError, ValidationError
from ..utils.timeutils import isoformat, utc_now
from ..utils.validators import require_text
from .campaign_service import campaign_service, is_redeemable, unavailable_message

logger = logging.getLogger(__name__)

COUPON_CODE_ALPHABET = string.ascii_uppercase + string.digits
COUPON_CODE_LENGTH = 6
COUPON_CODE_ATTEMPTS = 5

CUSTOMER_NAME_MAX = 100
CUSTOMER_WHATSAPP_MAX = 32
PROMO_CODE_ENTERED_MAX = 100


def normalize_code(code: str) -> str:
    """Codes are typed on phones: compare trimmed and upper-cased."""
    return code.strip().upper()


def generate_coupon_code() -> str:
    return ''.join(secrets.choice(COUPON_CODE_ALPHABET) for _ in range(COUPON_CODE_LENGTH))


def _public_fields(campaign: Campaign) -> Dict[str, Any]:
    return {
        'name': campaign.name,
        'slug': campaign.slug,
        'discountPercentage': campaign.discount_percentage,
        'expirationDate': campaign.expiration_date,
        'isActive': campaign.is_active,
    }


def build_public_view(fields: Dict[str, Any], now: datetime = None) -> Dict[str, Any]:
    """Public projection with redeemability computed for ``now``."""
    status = campaign_status(fields['isActive'], fields['expirationDate'], now or utc_now())
    view = dict(fields)
    view['expirationDate'] = isoformat(fields['expirationDate'])
    view['isRedeemable'] = status == CampaignStatus.ACTIVE
    view['status'] = status
    return view


def public_view(campaign: Campaign, now: datetime = None) -> Dict[str, Any]:
    return build_public_view(_public_fields(campaign), now)


def _validate_customer(customer_name, customer_whatsapp) -> Tuple[str, str]:
    name = require_text(customer_name, 'customerName', max_length=CUSTOMER_NAME_MAX)
    whatsapp = require_text(customer_whatsapp, 'customerWhatsApp', max_length=CUSTOMER_WHATSAPP_MAX)
    return name, whatsapp


class PublicService:
    """
    Slug-keyed operations for unauthenticated customers.

    Usage:
        view = public_service.resolve('summer')
        result = public_service.submit('summer', 'summer25', 'Ana', '+1555')
    """

    def _campaign_or_404(self, slug: str) -> Campaign:
        campaign = campaign_service.get_by_slug(slug)
        if campaign is None:
            raise NotFoundError('Campaign', slug)
        return campaign

    def resolve(self, slug: str, now: datetime = None) -> Dict[str, Any]:
        config = current_app.config
        if not config.get('PUBLIC_VIEW_CACHE_ENABLED'):
            return public_view(self._campaign_or_404(slug), now)

        key = public_campaign_key(slug)
        fields = cache.get(key)
        if fields is None:
            fields = _public_fields(self._campaign_or_404(slug))
            cache.set(key, fields, timeout=config.get('PUBLIC_VIEW_CACHE_TIMEOUT', 60))
        return build_public_view(fields, now)

    def submit(
        self,
        slug: str,
        promo_code_entered,
        customer_name,
        customer_whatsapp,
        now: datetime = None
    ) -> Dict[str, Any]:
        """
        Check an entered promo code and pick the checkout destination.

        Every submission against a redeemable campaign is written to the
        ledger, matching or not.
        """
        now = now or utc_now()
        campaign = self._campaign_or_404(slug)

        if not is_redeemable(campaign, now):
            return {
                'valid': False,
                'checkoutUrl': None,
                'discountPercentage': 0,
                'status': campaign.status(now),
                'message': unavailable_message(campaign),
            }

        entered = require_text(promo_code_entered, 'promoCode', max_length=PROMO_CODE_ENTERED_MAX)
        if len(promo_code_entered) > PROMO_CODE_ENTERED_MAX:
            raise ValidationError('promoCode is too long', field='promoCode')
        name, whatsapp = _validate_customer(customer_name, customer_whatsapp)

        valid = normalize_code(entered) == campaign.promo_code.upper()

        db.session.add(CustomerSubmission(
            campaign_id=campaign.id,
            customer_name=name,
            customer_whatsapp=whatsapp,
            promo_code_entered=promo_code_entered,
            was_valid=valid,
            submitted_at=now,
        ))
        db.session.commit()

        if valid:
            return {
                'valid': True,
                'checkoutUrl': campaign.discounted_checkout_url,
                'discountPercentage': campaign.discount_percentage,
                'status': CampaignStatus.ACTIVE,
                'message': f'Promo code applied! You get {campaign.discount_percentage}% off.',
            }
        return {
            'valid': False,
            'checkoutUrl': campaign.normal_checkout_url,
            'discountPercentage': 0,
            'status': CampaignStatus.ACTIVE,
            'message': 'Invalid promo code. You can still continue at full price.',
        }

    def issue_coupon(self, slug: str, customer_name, customer_whatsapp, now: datetime = None) -> Coupon:
        """Issue a personal coupon code for a redeemable campaign."""
        now = now or utc_now()
        campaign = self._campaign_or_404(slug)
        if not is_redeemable(campaign, now):
            raise CampaignUnavailableError(unavailable_message(campaign))

        name, whatsapp = _validate_customer(customer_name, customer_whatsapp)

        for _ in range(COUPON_CODE_ATTEMPTS):
            code = generate_coupon_code()
            if Coupon.query.filter_by(code=code).first() is not None:
                continue
            coupon = Coupon(
                campaign_id=campaign.id,
                code=code,
                customer_name=name,
                customer_whatsapp=whatsapp,
                created_at=now,
            )
            db.session.add(coupon)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                continue
            logger.info(f'Coupon {coupon.id} issued for campaign {campaign.id}')
            return coupon

        raise RuntimeError('Could not allocate a unique coupon code')


public_service = PublicService()
