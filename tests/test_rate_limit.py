"""
Tests for rate limiting on the public and login endpoints.

Limits are switched on for these tests only, with a small budget so the
third request in a minute is refused.
"""
import pytest

from conftest import DEFAULT_PASSWORD, campaign_payload
from promodesk import create_app
from promodesk.config import TestingConfig
from promodesk.extensions import db
from promodesk.services.campaign_service import campaign_service
from promodesk.services.identity_service import identity_service


@pytest.fixture
def limited_app(monkeypatch):
    monkeypatch.setattr(TestingConfig, 'RATELIMIT_ENABLED', True)
    monkeypatch.setattr(TestingConfig, 'PUBLIC_SUBMIT_RATE_LIMIT', '2 per minute')
    monkeypatch.setattr(TestingConfig, 'LOGIN_RATE_LIMIT', '2 per minute')

    app = create_app('testing')
    with app.app_context():
        db.create_all()
        _, identity = identity_service.register('acme', DEFAULT_PASSWORD, 'brand')
        campaign_service.create_campaign(identity, campaign_payload())
        yield app
        db.session.remove()
        db.drop_all()


def _submit(client):
    return client.post('/c/summer/submit', json={
        'promoCode': 'SUMMER25',
        'customerName': 'Ana',
        'customerWhatsApp': '+1555',
    })


def test_public_submit_is_limited(limited_app):
    client = limited_app.test_client()

    statuses = [_submit(client).status_code for _ in range(3)]

    assert statuses == [200, 200, 429]
    body = _submit(client).get_json()
    assert body['error']['code'] == 'RATE_LIMITED'


def test_coupon_issue_is_limited(limited_app):
    client = limited_app.test_client()
    body = {'customerName': 'Ana', 'customerWhatsApp': '+1555'}

    statuses = [client.post('/c/summer/coupons', json=body).status_code for _ in range(3)]

    assert statuses == [201, 201, 429]


def test_login_is_limited(limited_app):
    client = limited_app.test_client()
    credentials = {'username': 'acme', 'password': 'wrong-password'}

    statuses = [client.post('/auth/login', json=credentials).status_code for _ in range(3)]

    assert statuses == [401, 401, 429]
    response = client.post('/auth/login', json={'username': 'acme', 'password': DEFAULT_PASSWORD})
    assert response.status_code == 429
    assert response.get_json()['error']['code'] == 'RATE_LIMITED'


def test_reads_are_not_limited(limited_app):
    client = limited_app.test_client()

    statuses = {client.get('/c/summer').status_code for _ in range(5)}

    assert statuses == {200}


def test_disabled_by_default_in_testing(app, client, sample_campaign):
    statuses = {_submit(client).status_code for _ in range(5)}

    assert statuses == {200}
