"""Create rental tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Users, properties (+ media), agreements, payments, inspections (+ photos),
tickets (+ messages), notifications and documents.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('firebase_uid', sa.String(length=128), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('image', sa.String(length=1000), nullable=True),
        sa.Column('roles', sa.JSON(), nullable=False),
        sa.Column('checkpoint', sa.String(length=20), nullable=False),
        sa.Column('landlord_profile', sa.JSON(), nullable=True),
        sa.Column('tenant_profile', sa.JSON(), nullable=True),
        sa.Column('subscription', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            'password_hash IS NOT NULL OR firebase_uid IS NOT NULL',
            name='ck_users_has_credential'
        ),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_firebase_uid', 'users', ['firebase_uid'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('address', sa.JSON(), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('specs', sa.JSON(), nullable=False),
        sa.Column('bhk', sa.String(length=10), nullable=False),
        sa.Column('amenities', sa.JSON(), nullable=False),
        sa.Column('expected_rent', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('expected_deposit', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('maintenance_details', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('available_from', sa.Date(), nullable=True),
        sa.Column('current_agreement_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
    )
    op.create_index('ix_properties_owner_id', 'properties', ['owner_id'])
    op.create_index('ix_properties_city', 'properties', ['city'])
    op.create_index('ix_properties_bhk', 'properties', ['bhk'])
    op.create_index('ix_properties_status', 'properties', ['status'])

    op.create_table(
        'property_media',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(length=1000), nullable=False),
        sa.Column('public_id', sa.String(length=500), nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('caption', sa.String(length=500), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_property_media_property_id', 'property_media', ['property_id'])

    op.create_table(
        'agreements',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=True),
        sa.Column('agreement_type', sa.String(length=20), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('security_deposit', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('rent_payment_date', sa.Integer(), nullable=False),
        sa.Column('late_penalty_percentage', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('maintenance_terms', sa.JSON(), nullable=True),
        sa.Column('lock_in_period', sa.Integer(), nullable=False),
        sa.Column('notice_period', sa.Integer(), nullable=False),
        sa.Column('police_verification_status', sa.String(length=20), nullable=False),
        sa.Column('rent_escalation', sa.JSON(), nullable=True),
        sa.Column('clauses', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('document_url', sa.String(length=1000), nullable=True),
        sa.Column('landlord_signed', sa.Boolean(), nullable=False),
        sa.Column('landlord_signed_at', sa.DateTime(), nullable=True),
        sa.Column('landlord_ip', sa.String(length=64), nullable=True),
        sa.Column('tenant_signed', sa.Boolean(), nullable=False),
        sa.Column('tenant_signed_at', sa.DateTime(), nullable=True),
        sa.Column('tenant_ip', sa.String(length=64), nullable=True),
        sa.Column('termination', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id']),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id']),
    )
    op.create_index('ix_agreements_property_id', 'agreements', ['property_id'])
    op.create_index('ix_agreements_landlord_id', 'agreements', ['landlord_id'])
    op.create_index('ix_agreements_tenant_id', 'agreements', ['tenant_id'])
    op.create_index('ix_agreements_status', 'agreements', ['status'])

    # properties <-> agreements reference each other
    with op.batch_alter_table('properties') as batch_op:
        batch_op.create_foreign_key(
            'fk_properties_current_agreement', 'agreements',
            ['current_agreement_id'], ['id']
        )

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('agreement_id', sa.Integer(), nullable=False),
        sa.Column('payer_id', sa.Integer(), nullable=False),
        sa.Column('receiver_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('paid_date', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=True),
        sa.Column('transaction_id', sa.String(length=200), nullable=True),
        sa.Column('gateway_order_id', sa.String(length=200), nullable=True),
        sa.Column('gateway_payment_id', sa.String(length=200), nullable=True),
        sa.Column('gateway_signature', sa.String(length=500), nullable=True),
        sa.Column('payment_link', sa.String(length=1000), nullable=True),
        sa.Column('gateway_response', sa.JSON(), nullable=True),
        sa.Column('receipt_number', sa.String(length=100), nullable=True),
        sa.Column('receipt_url', sa.String(length=1000), nullable=True),
        sa.Column('late_fee', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('late_days', sa.Integer(), nullable=False),
        sa.Column('refund_details', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['agreement_id'], ['agreements.id']),
        sa.ForeignKeyConstraint(['payer_id'], ['users.id']),
        sa.ForeignKeyConstraint(['receiver_id'], ['users.id']),
    )
    op.create_index('ix_payments_agreement_id', 'payments', ['agreement_id'])
    op.create_index('ix_payments_payer_id', 'payments', ['payer_id'])
    op.create_index('ix_payments_receiver_id', 'payments', ['receiver_id'])
    op.create_index('ix_payments_type', 'payments', ['type'])
    op.create_index('ix_payments_due_date', 'payments', ['due_date'])
    op.create_index('ix_payments_status', 'payments', ['status'])

    op.create_table(
        'inspections',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('agreement_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('conducted_by_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('inspection_date', sa.DateTime(), nullable=False),
        sa.Column('issues', sa.JSON(), nullable=False),
        sa.Column('overall_condition', sa.String(length=20), nullable=True),
        sa.Column('signatures', sa.JSON(), nullable=True),
        sa.Column('ai_summary', sa.Text(), nullable=True),
        sa.Column('recommended_deduction', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('disputed', sa.Boolean(), nullable=False),
        sa.Column('dispute_reason', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['agreement_id'], ['agreements.id']),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.ForeignKeyConstraint(['conducted_by_id'], ['users.id']),
    )
    op.create_index('ix_inspections_agreement_id', 'inspections', ['agreement_id'])
    op.create_index('ix_inspections_property_id', 'inspections', ['property_id'])
    op.create_index('ix_inspections_type', 'inspections', ['type'])

    op.create_table(
        'inspection_photos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('inspection_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(length=1000), nullable=False),
        sa.Column('public_id', sa.String(length=500), nullable=False),
        sa.Column('room', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['inspection_id'], ['inspections.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_inspection_photos_inspection_id', 'inspection_photos', ['inspection_id'])

    op.create_table(
        'tickets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('agreement_id', sa.Integer(), nullable=True),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('assigned_to_id', sa.Integer(), nullable=True),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('priority', sa.String(length=10), nullable=False),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
        sa.Column('resolved_by_id', sa.Integer(), nullable=True),
        sa.Column('resolution_notes', sa.Text(), nullable=True),
        sa.Column('escalated_at', sa.DateTime(), nullable=True),
        sa.Column('escalation_reason', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['agreement_id'], ['agreements.id']),
        sa.ForeignKeyConstraint(['author_id'], ['users.id']),
        sa.ForeignKeyConstraint(['assigned_to_id'], ['users.id']),
        sa.ForeignKeyConstraint(['resolved_by_id'], ['users.id']),
    )
    op.create_index('ix_tickets_agreement_id', 'tickets', ['agreement_id'])
    op.create_index('ix_tickets_author_id', 'tickets', ['author_id'])
    op.create_index('ix_tickets_assigned_to_id', 'tickets', ['assigned_to_id'])
    op.create_index('ix_tickets_type', 'tickets', ['type'])
    op.create_index('ix_tickets_status', 'tickets', ['status'])

    op.create_table(
        'ticket_messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ticket_id', sa.Integer(), nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=True),
        sa.Column('sender_type', sa.String(length=10), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['ticket_id'], ['tickets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['sender_id'], ['users.id']),
    )
    op.create_index('ix_ticket_messages_ticket_id', 'ticket_messages', ['ticket_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('read_at', sa.DateTime(), nullable=True),
        sa.Column('scheduled_for', sa.DateTime(), nullable=True),
        sa.Column('sent_at', sa.DateTime(), nullable=True),
        sa.Column('link_to', sa.String(length=500), nullable=True),
        sa.Column('related_model', sa.String(length=50), nullable=True),
        sa.Column('related_id', sa.Integer(), nullable=True),
        sa.Column('channels', sa.JSON(), nullable=False),
        sa.Column('delivery_status', sa.JSON(), nullable=True),
        sa.Column('priority', sa.String(length=10), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_type', 'notifications', ['type'])
    op.create_index('ix_notifications_is_read', 'notifications', ['is_read'])

    op.create_table(
        'documents',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('uploaded_by_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('storage_url', sa.String(length=1000), nullable=False),
        sa.Column('storage_public_id', sa.String(length=500), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('mime_type', sa.String(length=100), nullable=True),
        sa.Column('related_model', sa.String(length=50), nullable=True),
        sa.Column('related_id', sa.Integer(), nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('access_roles', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('verified_by_id', sa.Integer(), nullable=True),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['uploaded_by_id'], ['users.id']),
        sa.ForeignKeyConstraint(['verified_by_id'], ['users.id']),
    )
    op.create_index('ix_documents_uploaded_by_id', 'documents', ['uploaded_by_id'])
    op.create_index('ix_documents_storage_public_id', 'documents', ['storage_public_id'])


def downgrade() -> None:
    op.drop_table('documents')
    op.drop_table('notifications')
    op.drop_table('ticket_messages')
    op.drop_table('tickets')
    op.drop_table('inspection_photos')
    op.drop_table('inspections')
    op.drop_table('payments')
    with op.batch_alter_table('properties') as batch_op:
        batch_op.drop_constraint('fk_properties_current_agreement', type_='foreignkey')
    op.drop_table('agreements')
    op.drop_table('property_media')
    op.drop_table('properties')
    op.drop_table('users')
