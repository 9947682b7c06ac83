"""
Per-customer coupons and their in-store redemptions.

Coupon lifecycle: issued -> (verified, no state change) -> redeemed (terminal).
"""
import uuid

from ..extensions import db
from ..utils.timeutils import utc_now, isoformat


class Coupon(db.Model):
    """A code issued to one customer for one campaign."""
    __tablename__ = 'coupons'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    campaign_id = db.Column(db.String(36), db.ForeignKey('campaigns.id'), nullable=False, index=True)
    code = db.Column(db.String(16), unique=True, nullable=False, index=True)

    customer_name = db.Column(db.String(100), nullable=False)
    customer_whatsapp = db.Column(db.String(32), nullable=False)

    created_at = db.Column(db.DateTime, default=utc_now, nullable=False)

    redemption = db.relationship('Redemption', backref='coupon', uselist=False)

    @property
    def is_redeemed(self) -> bool:
        return self.redemption is not None

    def __repr__(self):
        return f'<Coupon {self.code}>'

    def to_dict(self):
        return {
            'id': self.id,
            'campaignId': self.campaign_id,
            'code': self.code,
            'customerName': self.customer_name,
            'customerWhatsApp': self.customer_whatsapp,
            'isRedeemed': self.is_redeemed,
            'createdAt': isoformat(self.created_at),
        }


class Redemption(db.Model):
    """
    A recorded in-store purchase against a coupon.

    Additive and permanent; at most one per coupon.
    """
    __tablename__ = 'redemptions'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    coupon_id = db.Column(db.String(36), db.ForeignKey('coupons.id'), unique=True, nullable=False)
    purchase_amount = db.Column(db.Integer, nullable=False)
    redeemed_by_user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True)
    redeemed_at = db.Column(db.DateTime, default=utc_now, nullable=False, index=True)

    def __repr__(self):
        return f'<Redemption coupon={self.coupon_id} amount={self.purchase_amount}>'

    def to_dict(self):
        return {
            'id': self.id,
            'couponId': self.coupon_id,
            'purchaseAmount': self.purchase_amount,
            'redeemedByUserId': self.redeemed_by_user_id,
            'redeemedAt': isoformat(self.redeemed_at),
        }
