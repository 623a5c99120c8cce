"""Initial RentEase schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Users, properties, tenants, rent payments and maintenance requests.
Every record carries owner_id (users.id).
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # === USERS ===
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('firebase_uid', sa.String(128), unique=True, nullable=False, index=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False, index=True),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    # === TENANTS ===
    # property_id has no FK: tenants outlive deleted properties
    op.create_table(
        'tenants',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('first_name', sa.String(50), nullable=False),
        sa.Column('last_name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, index=True),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('street', sa.String(255), nullable=False, server_default=''),
        sa.Column('city', sa.String(100), nullable=False, server_default=''),
        sa.Column('state', sa.String(50), nullable=False, server_default=''),
        sa.Column('zip_code', sa.String(20), nullable=False, server_default=''),
        sa.Column('emergency_contact_name', sa.String(100), nullable=False, server_default=''),
        sa.Column('emergency_contact_phone', sa.String(50), nullable=False, server_default=''),
        sa.Column('emergency_contact_relationship', sa.String(50), nullable=False, server_default=''),
        sa.Column('property_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('lease_start_date', sa.Date(), nullable=False),
        sa.Column('lease_end_date', sa.Date(), nullable=False, index=True),
        sa.Column('lease_complete', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('rent_amount', sa.Float(), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'INACTIVE', 'MOVED_OUT', 'EVICTED', name='tenantstatus'), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    # Expired lease scan: owner + status + end date
    op.create_index('ix_tenants_owner_status_end', 'tenants', ['owner_id', 'status', 'lease_end_date'])

    # === PROPERTIES ===
    op.create_table(
        'properties',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('property_type', sa.Enum('APARTMENT', 'HOUSE', 'CONDO', 'TOWNHOUSE', 'COMMERCIAL', name='propertytype'), nullable=False),
        sa.Column('street', sa.String(255), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('state', sa.String(50), nullable=False),
        sa.Column('zip_code', sa.String(20), nullable=False),
        sa.Column('bedrooms', sa.Integer(), nullable=False),
        sa.Column('bathrooms', sa.Float(), nullable=False),
        sa.Column('square_feet', sa.Float(), nullable=True),
        sa.Column('rent_amount', sa.Float(), nullable=False),
        sa.Column('status', sa.Enum('AVAILABLE', 'UNAVAILABLE', 'OCCUPIED', name='propertystatus'), nullable=False, index=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id', ondelete='SET NULL'), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    # === RENT PAYMENTS ===
    op.create_table(
        'rent_payments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('tenant_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('property_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('late_fee', sa.Float(), nullable=False, server_default='0'),
        sa.Column('due_date', sa.DateTime(), nullable=False, index=True),
        sa.Column('paid_date', sa.DateTime(), nullable=True),
        sa.Column('status', sa.Enum('PENDING', 'PAID', 'LATE', 'OVERDUE', name='paymentstatus'), nullable=False, index=True),
        sa.Column('payment_method', sa.Enum('CASH', 'CHECK', 'BANK_TRANSFER', 'ONLINE', 'OTHER', name='paymentmethod'), nullable=False),
        sa.Column('reference', sa.String(255), nullable=False, server_default=''),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('month >= 1 AND month <= 12', name='ck_rent_payment_month_range'),
        sa.CheckConstraint('year >= 2020', name='ck_rent_payment_year_min'),
    )

    # === MAINTENANCE REQUESTS ===
    op.create_table(
        'maintenance_requests',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('property_id', sa.Uuid(), nullable=False, index=True),
        sa.Column('tenant_id', sa.Uuid(), nullable=True, index=True),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('priority', sa.Enum('LOW', 'MEDIUM', 'HIGH', 'URGENT', name='maintenancepriority'), nullable=False),
        sa.Column('status', sa.Enum('OPEN', 'IN_PROGRESS', 'RESOLVED', 'CANCELLED', name='maintenancestatus'), nullable=False, index=True),
        sa.Column('category', sa.Enum('PLUMBING', 'ELECTRICAL', 'HVAC', 'APPLIANCE', 'STRUCTURAL', 'OTHER', name='maintenancecategory'), nullable=False),
        sa.Column('requested_date', sa.DateTime(), nullable=False),
        sa.Column('scheduled_date', sa.DateTime(), nullable=True),
        sa.Column('completed_date', sa.DateTime(), nullable=True),
        sa.Column('estimated_cost', sa.Float(), nullable=False, server_default='0'),
        sa.Column('actual_cost', sa.Float(), nullable=False, server_default='0'),
        sa.Column('assigned_to', sa.String(255), nullable=False, server_default=''),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('maintenance_requests')
    op.drop_table('rent_payments')
    op.drop_table('properties')
    op.drop_index('ix_tenants_owner_status_end')
    op.drop_table('tenants')
    op.drop_table('users')

    # Drop enums
    op.execute('DROP TYPE IF EXISTS maintenancecategory')
    op.execute('DROP TYPE IF EXISTS maintenancestatus')
    op.execute('DROP TYPE IF EXISTS maintenancepriority')
    op.execute('DROP TYPE IF EXISTS paymentmethod')
    op.execute('DROP TYPE IF EXISTS paymentstatus')
    op.execute('DROP TYPE IF EXISTS propertystatus')
    op.execute('DROP TYPE IF EXISTS propertytype')
    op.execute('DROP TYPE IF EXISTS tenantstatus')
