"""
Campaign API for brand owners.

Endpoints for:
- Listing and creating the caller's campaigns
- Reading and partially updating one campaign
- Per-campaign analytics and the raw submission ledger
"""
from flask import Blueprint, g, jsonify

from ..middleware.session_auth import require_auth
from ..models.user import UserRole
from ..services.analytics_service import analytics_service
from ..services.campaign_service import campaign_service
from .common import json_body

campaigns_bp = Blueprint('campaigns', __name__)


@campaigns_bp.route('', methods=['GET'])
@require_auth(role=UserRole.BRAND)
def list_campaigns():
    campaigns = campaign_service.list_for_caller(g.identity)
    return jsonify({
        'campaigns': [c.to_dict() for c in campaigns],
        'total': len(campaigns),
    })


@campaigns_bp.route('', methods=['POST'])
@require_auth(role=UserRole.BRAND)
def create_campaign():
    """
    Create a campaign owned by the caller.

    Request body:
        name, slug, promoCode: string (required)
        discountPercentage: int 1-100 (required)
        discountedCheckoutUrl, normalCheckoutUrl: absolute URL (required)
        expirationDate: ISO-8601 (required)
    """
    campaign = campaign_service.create_campaign(g.identity, json_body())
    return jsonify(campaign.to_dict()), 201


@campaigns_bp.route('/<campaign_id>', methods=['GET'])
@require_auth()
def get_campaign(campaign_id):
    campaign = campaign_service.get_for_caller(g.identity, campaign_id)
    return jsonify(campaign.to_dict())


@campaigns_bp.route('/<campaign_id>', methods=['PATCH'])
@require_auth(role=UserRole.BRAND)
def update_campaign(campaign_id):
    """Partial update, e.g. {"isActive": false}. Owner only."""
    campaign = campaign_service.update(g.identity, campaign_id, json_body())
    return jsonify(campaign.to_dict())


@campaigns_bp.route('/<campaign_id>/analytics', methods=['GET'])
@require_auth(role=UserRole.BRAND)
def campaign_analytics(campaign_id):
    return jsonify(analytics_service.campaign_analytics(g.identity, campaign_id))


@campaigns_bp.route('/<campaign_id>/submissions', methods=['GET'])
@require_auth(role=UserRole.BRAND)
def campaign_submissions(campaign_id):
    submissions = analytics_service.list_submissions(g.identity, campaign_id)
    return jsonify({
        'submissions': [s.to_dict() for s in submissions],
        'total': len(submissions),
    })
