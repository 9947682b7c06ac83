"""
Campaign Analytics Service.

Owner-only aggregates over the submission ledger and the coupon funnel.

Rates are whole percentages rounded half-up; a campaign with nothing
recorded reports 0.
"""
import math
from typing import Any, Dict, List, Optional

from sqlalchemy import case, func

from ..extensions import db
from ..models.campaign import CustomerSubmission
from ..models.coupon import Coupon, Redemption
from .access_control import CallerIdentity
from .campaign_service import campaign_service


def percent(part: int, whole: int) -> int:
    if not whole:
        return 0
    return int(math.floor(100 * part / whole + 0.5))


class AnalyticsService:
    """
    Usage:
        stats = analytics_service.campaign_analytics(identity, campaign_id)
        rows = analytics_service.list_submissions(identity, campaign_id)
    """

    def campaign_analytics(self, identity: Optional[CallerIdentity], campaign_id: str) -> Dict[str, Any]:
        campaign = campaign_service.get_owned(identity, campaign_id)

        total, valid = db.session.query(
            func.count(CustomerSubmission.id),
            func.coalesce(func.sum(case((CustomerSubmission.was_valid.is_(True), 1), else_=0)), 0),
        ).filter(CustomerSubmission.campaign_id == campaign.id).one()
        total, valid = int(total), int(valid)

        total_coupons = Coupon.query.filter_by(campaign_id=campaign.id).count()
        redeemed_coupons, total_sales = db.session.query(
            func.count(Redemption.id),
            func.coalesce(func.sum(Redemption.purchase_amount), 0),
        ).join(Coupon, Redemption.coupon_id == Coupon.id).filter(
            Coupon.campaign_id == campaign.id
        ).one()
        redeemed_coupons = int(redeemed_coupons)

        return {
            'campaignId': campaign.id,
            'totalSubmissions': total,
            'validSubmissions': valid,
            'invalidSubmissions': total - valid,
            'successRate': percent(valid, total),
            'totalCoupons': total_coupons,
            'redeemedCoupons': redeemed_coupons,
            'totalSales': int(total_sales),
            'redemptionRate': percent(redeemed_coupons, total_coupons),
        }

    def list_submissions(self, identity: Optional[CallerIdentity], campaign_id: str) -> List[CustomerSubmission]:
        """Raw ledger for a campaign, newest first."""
        campaign = campaign_service.get_owned(identity, campaign_id)
        return (
            CustomerSubmission.query
            .filter_by(campaign_id=campaign.id)
            .order_by(CustomerSubmission.submitted_at.desc())
            .all()
        )


analytics_service = AnalyticsService()
