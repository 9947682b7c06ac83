"""
Role profiles. One row per user, latest write wins.
"""
from ..extensions import db
from ..utils.timeutils import utc_now, isoformat


class BrandProfile(db.Model):
    __tablename__ = 'brand_profiles'

    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    brand_name = db.Column(db.String(200), default='', nullable=False)
    website = db.Column(db.String(500), default='', nullable=False)
    contact_email = db.Column(db.String(255), default='', nullable=False)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    # JSON key -> column
    FIELDS = {
        'brandName': 'brand_name',
        'website': 'website',
        'contactEmail': 'contact_email',
    }

    def to_dict(self):
        data = {key: getattr(self, column) for key, column in self.FIELDS.items()}
        data['userId'] = self.user_id
        data['updatedAt'] = isoformat(self.updated_at)
        return data


class StaffProfile(db.Model):
    __tablename__ = 'staff_profiles'

    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    name = db.Column(db.String(100), default='', nullable=False)
    store_name = db.Column(db.String(200), default='', nullable=False)
    store_address = db.Column(db.String(500), default='', nullable=False)
    phone = db.Column(db.String(32), default='', nullable=False)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now, nullable=False)

    FIELDS = {
        'name': 'name',
        'storeName': 'store_name',
        'storeAddress': 'store_address',
        'phone': 'phone',
    }

    def to_dict(self):
        data = {key: getattr(self, column) for key, column in self.FIELDS.items()}
        data['userId'] = self.user_id
        data['updatedAt'] = isoformat(self.updated_at)
        return data
