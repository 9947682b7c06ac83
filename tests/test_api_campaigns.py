"""
API tests for /campaigns.

Covers the brand workflow end to end and the order of access checks:
anonymous callers get 401 before anything is looked up, wrong roles 403,
and brands cannot read or touch each other's campaigns.
"""
from datetime import timedelta

import pytest

from conftest import campaign_payload
from promodesk.utils.timeutils import isoformat, utc_now


@pytest.fixture
def created(brand_client):
    response = brand_client.post('/campaigns', json=campaign_payload())
    assert response.status_code == 201
    return response.get_json()


class TestCreateCampaign:
    """Tests for POST /campaigns."""

    def test_create(self, app, brand_client, created):
        assert created['slug'] == 'summer'
        assert created['ownerUserId'] == brand_client.user['id']
        assert created['isActive'] is True
        assert created['status'] == 'active'
        assert created['isRedeemable'] is True
        assert created['expirationDate'].endswith('Z')

    def test_is_active_cannot_be_preset(self, app, brand_client):
        response = brand_client.post('/campaigns', json=campaign_payload(isActive=False))

        assert response.status_code == 201
        assert response.get_json()['isActive'] is True

    def test_slug_taken(self, app, other_brand_client, created):
        response = other_brand_client.post('/campaigns', json=campaign_payload(name='Copy'))

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'SLUG_TAKEN'

    @pytest.mark.parametrize('overrides', [
        {'discountPercentage': 0},
        {'discountPercentage': 101},
        {'slug': 'Not A Slug'},
        {'normalCheckoutUrl': 'ftp://s.example'},
        {'expirationDate': 'tomorrow'},
        {'name': ''},
    ])
    def test_invalid_fields(self, app, brand_client, overrides):
        response = brand_client.post('/campaigns', json=campaign_payload(**overrides))

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'VALIDATION_ERROR'

    def test_staff_cannot_create(self, app, staff_client):
        response = staff_client.post('/campaigns', json=campaign_payload())

        assert response.status_code == 403

    def test_anonymous_cannot_create(self, app, client):
        assert client.post('/campaigns', json=campaign_payload()).status_code == 401


class TestReadCampaigns:

    def test_list_only_own(self, app, brand_client, other_brand_client, created):
        other_brand_client.post('/campaigns', json=campaign_payload(slug='fall', promoCode='FALL'))

        data = brand_client.get('/campaigns').get_json()
        assert data['total'] == 1
        assert [c['slug'] for c in data['campaigns']] == ['summer']

    def test_get_own(self, app, brand_client, created):
        response = brand_client.get(f"/campaigns/{created['id']}")

        assert response.status_code == 200
        assert response.get_json()['promoCode'] == 'SUMMER25'

    def test_get_other_brand_forbidden(self, app, other_brand_client, created):
        assert other_brand_client.get(f"/campaigns/{created['id']}").status_code == 403

    def test_staff_can_read(self, app, staff_client, created):
        assert staff_client.get(f"/campaigns/{created['id']}").status_code == 200

    def test_unknown_id(self, app, brand_client):
        response = brand_client.get('/campaigns/does-not-exist')

        assert response.status_code == 404
        assert response.get_json()['error']['code'] == 'CAMPAIGN_NOT_FOUND'

    def test_anonymous_gets_401_even_for_unknown_id(self, app, client):
        assert client.get('/campaigns/does-not-exist').status_code == 401


class TestUpdateCampaign:
    """Tests for PATCH /campaigns/<id>."""

    def test_pause(self, app, brand_client, created):
        response = brand_client.patch(f"/campaigns/{created['id']}", json={'isActive': False})

        assert response.status_code == 200
        body = response.get_json()
        assert body['isActive'] is False
        assert body['status'] == 'inactive'
        assert body['name'] == 'Summer'

    def test_public_view_reflects_pause(self, app, client, brand_client, created):
        assert client.get('/c/summer').get_json()['status'] == 'active'

        brand_client.patch(f"/campaigns/{created['id']}", json={'isActive': False})

        assert client.get('/c/summer').get_json()['status'] == 'inactive'

    def test_extend_expiration(self, app, brand_client, created):
        new_date = isoformat(utc_now() + timedelta(days=90))
        response = brand_client.patch(f"/campaigns/{created['id']}", json={'expirationDate': new_date})

        assert response.status_code == 200
        assert response.get_json()['expirationDate'] == new_date

    def test_slug_change_rejected(self, app, brand_client, created):
        response = brand_client.patch(f"/campaigns/{created['id']}", json={'slug': 'winter'})

        assert response.status_code == 400

    def test_unknown_field_rejected(self, app, brand_client, created):
        response = brand_client.patch(f"/campaigns/{created['id']}", json={'ownerUserId': 'x'})

        assert response.status_code == 400

    def test_other_brand_cannot_update(self, app, other_brand_client, brand_client, created):
        response = other_brand_client.patch(f"/campaigns/{created['id']}", json={'isActive': False})

        assert response.status_code == 403
        assert brand_client.get(f"/campaigns/{created['id']}").get_json()['isActive'] is True


class TestCampaignAnalyticsApi:

    def test_analytics_and_submissions(self, app, client, brand_client, created):
        for code in ['SUMMER25', 'WRONG']:
            client.post('/c/summer/submit', json={
                'promoCode': code,
                'customerName': 'Ana',
                'customerWhatsApp': '+1555',
            })

        stats = brand_client.get(f"/campaigns/{created['id']}/analytics").get_json()
        assert stats['totalSubmissions'] == 2
        assert stats['validSubmissions'] == 1
        assert stats['successRate'] == 50

        ledger = brand_client.get(f"/campaigns/{created['id']}/submissions").get_json()
        assert ledger['total'] == 2
        assert {s['promoCodeEntered'] for s in ledger['submissions']} == {'SUMMER25', 'WRONG'}

    def test_analytics_forbidden_for_other_brand(self, app, other_brand_client, created):
        assert other_brand_client.get(f"/campaigns/{created['id']}/analytics").status_code == 403
        assert other_brand_client.get(f"/campaigns/{created['id']}/submissions").status_code == 403
