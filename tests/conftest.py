"""
Shared pytest fixtures for PromoDesk.

Every test gets a fresh app on an in-memory SQLite database. The app
context stays pushed for the whole test, so service calls and test-client
requests share one database session.
"""
from datetime import timedelta

import pytest

from promodesk import create_app
from promodesk.extensions import db
from promodesk.services.campaign_service import campaign_service
from promodesk.services.identity_service import identity_service
from promodesk.utils.timeutils import isoformat, utc_now

DEFAULT_PASSWORD = 'correct-horse-battery'


def campaign_payload(**overrides):
    """Valid campaign creation body; override any field."""
    payload = {
        'name': 'Summer',
        'slug': 'summer',
        'promoCode': 'SUMMER25',
        'discountPercentage': 25,
        'discountedCheckoutUrl': 'https://s.example/checkout?d=SUMMER25',
        'normalCheckoutUrl': 'https://s.example/checkout',
        'expirationDate': isoformat(utc_now() + timedelta(days=30)),
    }
    payload.update(overrides)
    return payload


def register_client(app, username, role, password=DEFAULT_PASSWORD):
    """Test client signed in as a freshly registered user."""
    client = app.test_client()
    response = client.post('/auth/register', json={
        'username': username,
        'password': password,
        'role': role,
    })
    assert response.status_code == 201, response.get_json()
    client.user = response.get_json()['user']
    return client


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Anonymous test client."""
    return app.test_client()


# ==================== Signed-in clients ====================

@pytest.fixture
def brand_client(app):
    return register_client(app, 'acme', 'brand')


@pytest.fixture
def other_brand_client(app):
    return register_client(app, 'globex', 'brand')


@pytest.fixture
def staff_client(app):
    return register_client(app, 'counter1', 'staff')


# ==================== Service-level identities ====================

@pytest.fixture
def brand_identity(app):
    _, identity = identity_service.register('brandco', DEFAULT_PASSWORD, 'brand')
    return identity


@pytest.fixture
def other_brand_identity(app):
    _, identity = identity_service.register('rivalco', DEFAULT_PASSWORD, 'brand')
    return identity


@pytest.fixture
def staff_identity(app):
    _, identity = identity_service.register('clerk', DEFAULT_PASSWORD, 'staff')
    return identity


@pytest.fixture
def sample_campaign(app, brand_identity):
    """The 'summer' campaign owned by brand_identity."""
    return campaign_service.create_campaign(brand_identity, campaign_payload())
