"""Initial schema: users, sessions, campaigns, submissions, coupons, profiles.

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1b2c3d4e5f6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'user_sessions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('token_hash', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_user_sessions_user_id', 'user_sessions', ['user_id'])
    op.create_index('ix_user_sessions_token_hash', 'user_sessions', ['token_hash'], unique=True)
    op.create_index('ix_user_sessions_expires_at', 'user_sessions', ['expires_at'])

    op.create_table(
        'campaigns',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('owner_user_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('promo_code', sa.String(50), nullable=False),
        sa.Column('discount_percentage', sa.Integer(), nullable=False),
        sa.Column('discounted_checkout_url', sa.String(2000), nullable=False),
        sa.Column('normal_checkout_url', sa.String(2000), nullable=False),
        sa.Column('expiration_date', sa.DateTime(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_user_id'], ['users.id']),
        sa.CheckConstraint(
            'discount_percentage >= 1 AND discount_percentage <= 100',
            name='ck_campaigns_discount_range'
        ),
    )
    op.create_index('ix_campaigns_owner_user_id', 'campaigns', ['owner_user_id'])
    # Slug uniqueness is enforced here, not only by the application pre-check
    op.create_index('ix_campaigns_slug', 'campaigns', ['slug'], unique=True)

    op.create_table(
        'customer_submissions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('campaign_id', sa.String(36), nullable=False),
        sa.Column('customer_name', sa.String(100), nullable=False),
        sa.Column('customer_whatsapp', sa.String(32), nullable=False),
        sa.Column('promo_code_entered', sa.String(100), nullable=False),
        sa.Column('was_valid', sa.Boolean(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['campaign_id'], ['campaigns.id']),
    )
    op.create_index('ix_customer_submissions_campaign_id', 'customer_submissions', ['campaign_id'])
    op.create_index('ix_customer_submissions_submitted_at', 'customer_submissions', ['submitted_at'])

    op.create_table(
        'coupons',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('campaign_id', sa.String(36), nullable=False),
        sa.Column('code', sa.String(16), nullable=False),
        sa.Column('customer_name', sa.String(100), nullable=False),
        sa.Column('customer_whatsapp', sa.String(32), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['campaign_id'], ['campaigns.id']),
    )
    op.create_index('ix_coupons_campaign_id', 'coupons', ['campaign_id'])
    op.create_index('ix_coupons_code', 'coupons', ['code'], unique=True)

    op.create_table(
        'redemptions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('coupon_id', sa.String(36), nullable=False),
        sa.Column('purchase_amount', sa.Integer(), nullable=False),
        sa.Column('redeemed_by_user_id', sa.String(36), nullable=True),
        sa.Column('redeemed_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['coupon_id'], ['coupons.id']),
        sa.ForeignKeyConstraint(['redeemed_by_user_id'], ['users.id']),
        sa.UniqueConstraint('coupon_id', name='uq_redemptions_coupon_id'),
    )
    op.create_index('ix_redemptions_redeemed_at', 'redemptions', ['redeemed_at'])

    op.create_table(
        'brand_profiles',
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('brand_name', sa.String(200), nullable=False, server_default=''),
        sa.Column('website', sa.String(500), nullable=False, server_default=''),
        sa.Column('contact_email', sa.String(255), nullable=False, server_default=''),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('user_id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )

    op.create_table(
        'staff_profiles',
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(100), nullable=False, server_default=''),
        sa.Column('store_name', sa.String(200), nullable=False, server_default=''),
        sa.Column('store_address', sa.String(500), nullable=False, server_default=''),
        sa.Column('phone', sa.String(32), nullable=False, server_default=''),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('user_id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )


def downgrade():
    op.drop_table('staff_profiles')
    op.drop_table('brand_profiles')
    op.drop_index('ix_redemptions_redeemed_at', table_name='redemptions')
    op.drop_table('redemptions')
    op.drop_index('ix_coupons_code', table_name='coupons')
    op.drop_index('ix_coupons_campaign_id', table_name='coupons')
    op.drop_table('coupons')
    op.drop_index('ix_customer_submissions_submitted_at', table_name='customer_submissions')
    op.drop_index('ix_customer_submissions_campaign_id', table_name='customer_submissions')
    op.drop_table('customer_submissions')
    op.drop_index('ix_campaigns_slug', table_name='campaigns')
    op.drop_index('ix_campaigns_owner_user_id', table_name='campaigns')
    op.drop_table('campaigns')
    op.drop_index('ix_user_sessions_expires_at', table_name='user_sessions')
    op.drop_index('ix_user_sessions_token_hash', table_name='user_sessions')
    op.drop_index('ix_user_sessions_user_id', table_name='user_sessions')
    op.drop_table('user_sessions')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
