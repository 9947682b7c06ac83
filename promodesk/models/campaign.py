"""
Campaigns and the public submission ledger.
"""
import uuid

from ..extensions import db
from ..utils.timeutils import utc_now, isoformat


class CampaignStatus:
    """Derived status of a campaign at a point in time."""
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    EXPIRED = 'expired'


def campaign_status(is_active: bool, expiration_date, now) -> str:
    """Derived status; inactive wins over expired."""
    if not is_active:
        return CampaignStatus.INACTIVE
    if expiration_date < now:
        return CampaignStatus.EXPIRED
    return CampaignStatus.ACTIVE


class Campaign(db.Model):
    """
    A brand's promotional offer.

    Identified publicly by ``slug`` and carrying one shared promo code.
    Never physically deleted; expiration is its natural end of life.
    """
    __tablename__ = 'campaigns'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)

    name = db.Column(db.String(200), nullable=False)
    # Unique index is the real guard against concurrent creations
    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    promo_code = db.Column(db.String(50), nullable=False)
    discount_percentage = db.Column(db.Integer, nullable=False)

    discounted_checkout_url = db.Column(db.String(2000), nullable=False)
    normal_checkout_url = db.Column(db.String(2000), nullable=False)

    expiration_date = db.Column(db.DateTime, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utc_now, nullable=False)

    submissions = db.relationship('CustomerSubmission', backref='campaign', lazy='dynamic')
    coupons = db.relationship('Coupon', backref='campaign', lazy='dynamic')

    __table_args__ = (
        db.CheckConstraint(
            'discount_percentage >= 1 AND discount_percentage <= 100',
            name='ck_campaigns_discount_range'
        ),
    )

    def is_redeemable(self, now=None) -> bool:
        """Active and not yet expired."""
        now = now or utc_now()
        return bool(self.is_active) and self.expiration_date >= now

    def status(self, now=None) -> str:
        return campaign_status(self.is_active, self.expiration_date, now or utc_now())

    def __repr__(self):
        return f'<Campaign {self.slug}>'

    def to_dict(self, now=None):
        """Owner-facing representation."""
        return {
            'id': self.id,
            'ownerUserId': self.owner_user_id,
            'name': self.name,
            'slug': self.slug,
            'promoCode': self.promo_code,
            'discountPercentage': self.discount_percentage,
            'discountedCheckoutUrl': self.discounted_checkout_url,
            'normalCheckoutUrl': self.normal_checkout_url,
            'expirationDate': isoformat(self.expiration_date),
            'isActive': self.is_active,
            'isRedeemable': self.is_redeemable(now),
            'status': self.status(now),
            'createdAt': isoformat(self.created_at),
        }


class CustomerSubmission(db.Model):
    """
    One public promo-code attempt against a campaign.

    Append-only: created once per submission, never updated or deleted.
    """
    __tablename__ = 'customer_submissions'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    campaign_id = db.Column(db.String(36), db.ForeignKey('campaigns.id'), nullable=False, index=True)

    customer_name = db.Column(db.String(100), nullable=False)
    customer_whatsapp = db.Column(db.String(32), nullable=False)
    promo_code_entered = db.Column(db.String(100), nullable=False)  # Raw, as typed
    was_valid = db.Column(db.Boolean, nullable=False)

    submitted_at = db.Column(db.DateTime, default=utc_now, nullable=False, index=True)

    def __repr__(self):
        return f'<CustomerSubmission campaign={self.campaign_id} valid={self.was_valid}>'

    def to_dict(self):
        return {
            'id': self.id,
            'campaignId': self.campaign_id,
            'customerName': self.customer_name,
            'customerWhatsApp': self.customer_whatsapp,
            'promoCodeEntered': self.promo_code_entered,
            'wasValid': self.was_valid,
            'submittedAt': isoformat(self.submitted_at),
        }
