"""
Redemption Service.

In-store flow used by staff: verify a coupon code a customer presents,
then record the purchase against it. Verification never changes state;
a coupon can be redeemed exactly once.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models.campaign import Campaign
from ..models.coupon import Coupon, Redemption
from ..models.user import UserRole
from ..utils.exceptions import (
    AlreadyRedeemedError,
    CampaignUnavailableError,
    NotFoundError,
    ValidationError,
)
from ..utils.timeutils import isoformat, utc_now
from ..utils.validators import validate_positive_int
from .access_control import CallerIdentity, require_role
from .campaign_service import is_redeemable, unavailable_message
from .public_service import normalize_code, public_view

logger = logging.getLogger(__name__)


class RedemptionService:
    """
    Staff-only coupon verification and redemption.

    Usage:
        result = redemption_service.verify(identity, 'AB12CD')
        if result['valid']:
            redemption_service.redeem(identity, result['coupon']['id'], 500)
    """

    def verify(self, identity: Optional[CallerIdentity], code, now: datetime = None) -> Dict[str, Any]:
        require_role(identity, UserRole.STAFF)
        if not isinstance(code, str) or not code.strip():
            raise ValidationError('code is required', field='code')

        now = now or utc_now()
        coupon = Coupon.query.filter_by(code=normalize_code(code)).first()
        if coupon is None:
            return {'valid': False, 'message': 'Coupon code not found'}

        if coupon.redemption is not None:
            return {
                'valid': False,
                'message': 'Coupon has already been redeemed',
                'coupon': coupon.to_dict(),
                'redemption': coupon.redemption.to_dict(),
            }

        campaign = coupon.campaign
        if campaign is None:
            return {'valid': False, 'message': 'Associated campaign not found'}

        if not is_redeemable(campaign, now):
            return {
                'valid': False,
                'message': unavailable_message(campaign),
                'coupon': coupon.to_dict(),
                'campaign': public_view(campaign, now),
            }

        return {
            'valid': True,
            'message': 'Valid coupon',
            'coupon': coupon.to_dict(),
            'campaign': public_view(campaign, now),
        }

    def redeem(
        self,
        identity: Optional[CallerIdentity],
        coupon_id,
        purchase_amount,
        now: datetime = None
    ) -> Redemption:
        """
        Record a purchase against a coupon.

        Checked in order: amount, coupon exists, not yet redeemed, campaign
        still redeemable. The last two mirror what verify reports.
        """
        identity = require_role(identity, UserRole.STAFF)
        amount = validate_positive_int(purchase_amount, 'purchaseAmount')

        coupon = db.session.get(Coupon, coupon_id) if isinstance(coupon_id, str) and coupon_id else None
        if coupon is None:
            raise NotFoundError('Coupon', coupon_id)

        if coupon.redemption is not None:
            raise AlreadyRedeemedError(coupon.id)

        if not is_redeemable(coupon.campaign, now or utc_now()):
            raise CampaignUnavailableError(unavailable_message(coupon.campaign))

        redemption = Redemption(
            coupon_id=coupon.id,
            purchase_amount=amount,
            redeemed_by_user_id=identity.user_id,
        )
        db.session.add(redemption)
        try:
            db.session.commit()
        except IntegrityError:
            # Unique coupon_id: a concurrent redemption got there first
            db.session.rollback()
            raise AlreadyRedeemedError(coupon.id)

        logger.info(f'Coupon {coupon.id} redeemed by {identity.user_id} for {amount}')
        return redemption

    def staff_analytics(self, identity: Optional[CallerIdentity], now: datetime = None) -> Dict[str, Any]:
        require_role(identity, UserRole.STAFF)
        now = now or utc_now()

        total_redemptions, total_revenue = db.session.query(
            func.count(Redemption.id),
            func.coalesce(func.sum(Redemption.purchase_amount), 0),
        ).one()

        active_campaigns = Campaign.query.filter(
            Campaign.is_active.is_(True),
            Campaign.expiration_date >= now,
        ).count()

        return {
            'totalRedemptions': int(total_redemptions),
            'totalRevenue': int(total_revenue),
            'activeCampaigns': active_campaigns,
            'totalCoupons': Coupon.query.count(),
        }

    def redemption_history(self, identity: Optional[CallerIdentity]) -> List[Dict[str, Any]]:
        """Redemptions with coupon and campaign details, newest first."""
        require_role(identity, UserRole.STAFF)

        rows = (
            db.session.query(Redemption, Coupon, Campaign)
            .join(Coupon, Redemption.coupon_id == Coupon.id)
            .join(Campaign, Coupon.campaign_id == Campaign.id)
            .order_by(Redemption.redeemed_at.desc())
            .all()
        )

        return [
            {
                'id': redemption.id,
                'redeemedAt': isoformat(redemption.redeemed_at),
                'purchaseAmount': redemption.purchase_amount,
                'couponCode': coupon.code,
                'customerName': coupon.customer_name,
                'customerWhatsApp': coupon.customer_whatsapp,
                'campaignName': campaign.name,
                'discountPercentage': campaign.discount_percentage,
            }
            for redemption, coupon, campaign in rows
        ]


redemption_service = RedemptionService()
