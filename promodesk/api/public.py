"""
Public campaign endpoints (no authentication).

The landing page reads the campaign here, then submits the customer's
promo code or asks for a personal coupon.
"""
from flask import Blueprint, jsonify

from ..middleware.rate_limit import ratelimit_public
from ..services.public_service import public_service, public_view
from .common import json_body

public_bp = Blueprint('public', __name__)


@public_bp.route('/<slug>', methods=['GET'])
def get_public_campaign(slug):
    return jsonify(public_service.resolve(slug))


@public_bp.route('/<slug>/submit', methods=['POST'])
@ratelimit_public
def submit_promo_code(slug):
    """
    Check a promo code and return where to send the customer.

    Request body:
        promoCode: string (required)
        customerName: string (required)
        customerWhatsApp: string (required)

    Returns:
        {valid, checkoutUrl, discountPercentage, status, message}
    """
    data = json_body()
    result = public_service.submit(
        slug,
        data.get('promoCode'),
        data.get('customerName'),
        data.get('customerWhatsApp'),
    )
    return jsonify(result)


@public_bp.route('/<slug>/coupons', methods=['POST'])
@ratelimit_public
def issue_coupon(slug):
    """
    Issue a personal coupon code to show in store.

    Request body:
        customerName: string (required)
        customerWhatsApp: string (required)
    """
    data = json_body()
    coupon = public_service.issue_coupon(slug, data.get('customerName'), data.get('customerWhatsApp'))
    return jsonify({
        'code': coupon.code,
        'customerName': coupon.customer_name,
        'createdAt': coupon.to_dict()['createdAt'],
        'campaign': public_view(coupon.campaign),
    }), 201
