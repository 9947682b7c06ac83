"""
Brand and staff profile endpoints. GET reads, POST upserts.
"""
from flask import Blueprint, g, jsonify

from ..middleware.session_auth import require_auth
from ..models.user import UserRole
from ..services.profile_service import profile_service
from .common import json_body

profiles_bp = Blueprint('profiles', __name__)


@profiles_bp.route('/brand/profile', methods=['GET'])
@require_auth(role=UserRole.BRAND)
def get_brand_profile():
    return jsonify(profile_service.get(g.identity, UserRole.BRAND).to_dict())


@profiles_bp.route('/brand/profile', methods=['POST'])
@require_auth(role=UserRole.BRAND)
def save_brand_profile():
    """Request body: brandName, website, contactEmail (all optional)."""
    profile = profile_service.upsert(g.identity, UserRole.BRAND, json_body())
    return jsonify(profile.to_dict())


@profiles_bp.route('/staff/profile', methods=['GET'])
@require_auth(role=UserRole.STAFF)
def get_staff_profile():
    return jsonify(profile_service.get(g.identity, UserRole.STAFF).to_dict())


@profiles_bp.route('/staff/profile', methods=['POST'])
@require_auth(role=UserRole.STAFF)
def save_staff_profile():
    """Request body: name, storeName, storeAddress, phone (all optional)."""
    profile = profile_service.upsert(g.identity, UserRole.STAFF, json_body())
    return jsonify(profile.to_dict())
