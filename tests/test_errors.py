"""
Tests for the standardized error responses and exception mapping.
"""
import pytest

from promodesk.utils.errors import ErrorCode, error_response, internal_error
from promodesk.utils.exceptions import (
    AlreadyRedeemedError,
    AuthenticationError,
    AuthorizationError,
    CampaignUnavailableError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotFoundError,
    SlugTakenError,
    ValidationError,
)


@pytest.mark.parametrize('error, status, code', [
    (AuthenticationError(), 401, ErrorCode.AUTH_REQUIRED),
    (InvalidCredentialsError(), 401, ErrorCode.INVALID_CREDENTIALS),
    (AuthorizationError(), 403, ErrorCode.PERMISSION_DENIED),
    (ValidationError('bad', field='x'), 400, ErrorCode.VALIDATION_ERROR),
    (DuplicateUsernameError('acme'), 400, ErrorCode.DUPLICATE_USERNAME),
    (SlugTakenError('summer'), 400, ErrorCode.SLUG_TAKEN),
    (CampaignUnavailableError('This campaign has expired'), 400, ErrorCode.CAMPAIGN_UNAVAILABLE),
    (AlreadyRedeemedError('c1'), 409, ErrorCode.ALREADY_REDEEMED),
])
def test_business_errors_render_their_code(app, client, error, status, code):
    assert error.code is code

    @app.route('/raise')
    def raise_error():
        raise error

    response = client.get('/raise')

    assert response.status_code == status
    assert response.get_json() == {'error': {'message': error.message, 'code': code.value}}


def test_not_found_code_names_the_resource(app, client):
    @app.route('/missing')
    def missing():
        raise NotFoundError('Coupon', 'AB12CD')

    response = client.get('/missing')

    assert response.status_code == 404
    assert response.get_json()['error']['code'] == 'COUPON_NOT_FOUND'


def test_plain_string_code(app):
    with app.test_request_context():
        response, status_code = error_response('Coupon gone', 'COUPON_NOT_FOUND', 404)

    assert status_code == 404
    assert response.get_json() == {'error': {'message': 'Coupon gone', 'code': 'COUPON_NOT_FOUND'}}


def test_internal_error(app):
    with app.test_request_context():
        response, status_code = internal_error()

    assert status_code == 500
    assert response.get_json()['error']['code'] == 'INTERNAL_ERROR'


def test_unexpected_error_hides_details(app, client):
    @app.route('/boom')
    def boom():
        raise RuntimeError('database password is hunter2')

    response = client.get('/boom')

    assert response.status_code == 500
    body = response.get_json()
    assert body['error']['code'] == 'INTERNAL_ERROR'
    assert 'hunter2' not in body['error']['message']
