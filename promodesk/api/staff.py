"""
Staff counter API.

Endpoints for:
- Verifying a coupon code a customer presents
- Recording the purchase (redemption)
- Redemption totals and history
"""
from flask import Blueprint, g, jsonify

from ..middleware.session_auth import require_auth
from ..models.user import UserRole
from ..services.redemption_service import redemption_service
from .common import json_body

staff_bp = Blueprint('staff', __name__)


@staff_bp.route('/coupons/verify', methods=['POST'])
@require_auth(role=UserRole.STAFF)
def verify_coupon():
    """
    Check a coupon without changing it.

    Request body:
        code: string (required)
    """
    data = json_body()
    return jsonify(redemption_service.verify(g.identity, data.get('code')))


@staff_bp.route('/redemptions', methods=['POST'])
@require_auth(role=UserRole.STAFF)
def redeem_coupon():
    """
    Record a purchase against a coupon. Each coupon redeems once.

    Request body:
        couponId: string (required)
        purchaseAmount: positive int (required)
    """
    data = json_body()
    redemption = redemption_service.redeem(g.identity, data.get('couponId'), data.get('purchaseAmount'))
    return jsonify(redemption.to_dict()), 201


@staff_bp.route('/staff/analytics', methods=['GET'])
@require_auth(role=UserRole.STAFF)
def staff_analytics():
    return jsonify(redemption_service.staff_analytics(g.identity))


@staff_bp.route('/staff/redemptions', methods=['GET'])
@require_auth(role=UserRole.STAFF)
def redemption_history():
    history = redemption_service.redemption_history(g.identity)
    return jsonify({'redemptions': history, 'total': len(history)})
