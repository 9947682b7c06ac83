"""
Database models for PromoDesk.
Campaigns, public submissions, coupons and role profiles.
"""
from .user import User, UserSession, UserRole
from .campaign import Campaign, CustomerSubmission, CampaignStatus
from .coupon import Coupon, Redemption
from .profile import BrandProfile, StaffProfile

__all__ = [
    'User',
    'UserSession',
    'UserRole',
    'Campaign',
    'CustomerSubmission',
    'CampaignStatus',
    'Coupon',
    'Redemption',
    'BrandProfile',
    'StaffProfile',
]
