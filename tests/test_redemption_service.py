"""
Tests for the Redemption Service.

Tests cover:
- Verification (normalization, idempotence, already-redeemed, unavailable campaigns)
- Redemption (validation, unknown coupons, double redemption policy)
- Staff analytics and redemption history
"""
from datetime import timedelta

import pytest

from promodesk.models import Redemption
from promodesk.services.campaign_service import campaign_service
from promodesk.services.public_service import public_service
from promodesk.services.redemption_service import redemption_service
from promodesk.utils.exceptions import (
    AlreadyRedeemedError,
    AuthorizationError,
    AuthenticationError,
    CampaignUnavailableError,
    NotFoundError,
    ValidationError,
)

from conftest import campaign_payload


@pytest.fixture
def coupon(app, sample_campaign):
    return public_service.issue_coupon('summer', 'Ana', '+1555')


class TestVerify:

    def test_valid_coupon(self, app, staff_identity, coupon):
        result = redemption_service.verify(staff_identity, coupon.code)

        assert result['valid'] is True
        assert result['message'] == 'Valid coupon'
        assert result['coupon']['id'] == coupon.id
        assert result['campaign']['discountPercentage'] == 25
        assert 'ownerUserId' not in result['campaign']

    def test_code_is_normalized(self, app, staff_identity, coupon):
        result = redemption_service.verify(staff_identity, f'  {coupon.code.lower()} ')
        assert result['valid'] is True

    def test_unknown_code(self, app, staff_identity, sample_campaign):
        result = redemption_service.verify(staff_identity, 'NOPE00')
        assert result == {'valid': False, 'message': 'Coupon code not found'}

    def test_verification_is_repeatable_and_side_effect_free(self, app, staff_identity, coupon):
        first = redemption_service.verify(staff_identity, coupon.code)
        second = redemption_service.verify(staff_identity, coupon.code)
        assert first == second
        assert Redemption.query.count() == 0

    def test_redeemed_coupon_reported_as_such(self, app, staff_identity, coupon):
        redemption_service.redeem(staff_identity, coupon.id, 500)

        result = redemption_service.verify(staff_identity, coupon.code)
        assert result['valid'] is False
        assert result['message'] == 'Coupon has already been redeemed'
        assert result['redemption']['purchaseAmount'] == 500

    def test_expired_campaign_invalidates_coupon(self, app, staff_identity, coupon, sample_campaign):
        later = sample_campaign.expiration_date + timedelta(seconds=1)
        result = redemption_service.verify(staff_identity, coupon.code, now=later)
        assert result['valid'] is False
        assert 'expired' in result['message']

    def test_inactive_campaign_invalidates_coupon(self, app, staff_identity, brand_identity, coupon, sample_campaign):
        campaign_service.update(brand_identity, sample_campaign.id, {'isActive': False})
        result = redemption_service.verify(staff_identity, coupon.code)
        assert result['valid'] is False
        assert 'no longer active' in result['message']

    def test_blank_code_rejected(self, app, staff_identity):
        with pytest.raises(ValidationError):
            redemption_service.verify(staff_identity, '   ')

    def test_brand_cannot_verify(self, app, brand_identity, coupon):
        with pytest.raises(AuthorizationError):
            redemption_service.verify(brand_identity, coupon.code)

    def test_anonymous_cannot_verify(self, app, coupon):
        with pytest.raises(AuthenticationError):
            redemption_service.verify(None, coupon.code)


class TestRedeem:

    def test_redeem_records_purchase(self, app, staff_identity, coupon):
        redemption = redemption_service.redeem(staff_identity, coupon.id, 500)

        assert redemption.coupon_id == coupon.id
        assert redemption.purchase_amount == 500
        assert redemption.redeemed_by_user_id == staff_identity.user_id
        assert redemption.redeemed_at is not None

    def test_second_redemption_rejected(self, app, staff_identity, coupon):
        redemption_service.redeem(staff_identity, coupon.id, 500)

        with pytest.raises(AlreadyRedeemedError):
            redemption_service.redeem(staff_identity, coupon.id, 700)

        rows = Redemption.query.all()
        assert len(rows) == 1
        assert rows[0].purchase_amount == 500

    @pytest.mark.parametrize('amount', [0, -5, 12.5, '500', None, True])
    def test_amount_must_be_positive_integer(self, app, staff_identity, coupon, amount):
        with pytest.raises(ValidationError) as exc:
            redemption_service.redeem(staff_identity, coupon.id, amount)
        assert exc.value.field == 'purchaseAmount'

    def test_amount_validated_before_coupon_lookup(self, app, staff_identity):
        with pytest.raises(ValidationError):
            redemption_service.redeem(staff_identity, 'missing', 0)

    def test_unknown_coupon(self, app, staff_identity):
        with pytest.raises(NotFoundError):
            redemption_service.redeem(staff_identity, 'missing', 500)

    def test_brand_cannot_redeem(self, app, brand_identity, coupon):
        with pytest.raises(AuthorizationError):
            redemption_service.redeem(brand_identity, coupon.id, 500)

    def test_expired_campaign_rejected(self, app, staff_identity, coupon, sample_campaign):
        later = sample_campaign.expiration_date + timedelta(seconds=1)

        with pytest.raises(CampaignUnavailableError) as exc:
            redemption_service.redeem(staff_identity, coupon.id, 500, now=later)

        assert exc.value.message == 'This campaign has expired'
        assert Redemption.query.count() == 0

    def test_paused_campaign_rejected(self, app, staff_identity, brand_identity, coupon, sample_campaign):
        campaign_service.update(brand_identity, sample_campaign.id, {'isActive': False})

        with pytest.raises(CampaignUnavailableError):
            redemption_service.redeem(staff_identity, coupon.id, 500)

        assert redemption_service.verify(staff_identity, coupon.code)['valid'] is False
        assert Redemption.query.count() == 0

    def test_already_redeemed_reported_before_unavailable(self, app, staff_identity, brand_identity, coupon, sample_campaign):
        redemption_service.redeem(staff_identity, coupon.id, 500)
        campaign_service.update(brand_identity, sample_campaign.id, {'isActive': False})

        with pytest.raises(AlreadyRedeemedError):
            redemption_service.redeem(staff_identity, coupon.id, 700)


class TestStaffReporting:

    def test_staff_analytics(self, app, staff_identity, brand_identity, sample_campaign):
        campaign_service.create_campaign(brand_identity, campaign_payload(slug='paused'))
        paused = campaign_service.get_by_slug('paused')
        campaign_service.update(brand_identity, paused.id, {'isActive': False})

        first = public_service.issue_coupon('summer', 'A', '+1')
        second = public_service.issue_coupon('summer', 'B', '+2')
        public_service.issue_coupon('summer', 'C', '+3')
        redemption_service.redeem(staff_identity, first.id, 500)
        redemption_service.redeem(staff_identity, second.id, 250)

        stats = redemption_service.staff_analytics(staff_identity)
        assert stats == {
            'totalRedemptions': 2,
            'totalRevenue': 750,
            'activeCampaigns': 1,
            'totalCoupons': 3,
        }

    def test_empty_analytics(self, app, staff_identity):
        stats = redemption_service.staff_analytics(staff_identity)
        assert stats['totalRedemptions'] == 0
        assert stats['totalRevenue'] == 0

    def test_history_is_enriched_and_newest_first(self, app, staff_identity, sample_campaign):
        first = public_service.issue_coupon('summer', 'Ana', '+1')
        second = public_service.issue_coupon('summer', 'Ben', '+2')
        older = redemption_service.redeem(staff_identity, first.id, 100)
        older.redeemed_at = older.redeemed_at - timedelta(minutes=5)
        redemption_service.redeem(staff_identity, second.id, 200)

        history = redemption_service.redemption_history(staff_identity)
        assert [h['customerName'] for h in history] == ['Ben', 'Ana']
        assert history[0]['couponCode'] == second.code
        assert history[0]['campaignName'] == 'Summer'
        assert history[0]['discountPercentage'] == 25
        assert history[0]['purchaseAmount'] == 200
