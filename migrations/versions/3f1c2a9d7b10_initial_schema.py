"""initial schema with account types and notification channels

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-09-28 10:12:44.512093
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f1c2a9d7b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    account_types = op.create_table(
        'account_types',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=30), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    notification_channels = op.create_table(
        'notification_channels',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('name', sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'medications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        sa.Column('usage_type', sa.String(length=40), server_default='tablet', nullable=False),
        sa.Column('dietary_precaution', sa.Text(), nullable=True),
        sa.Column('administration_mode', sa.String(length=60), nullable=True),
        sa.Column('meal_timing', sa.String(length=60), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('account_type_id', sa.Integer(), nullable=False),
        sa.Column('is_pharmacist', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['account_type_id'], ['account_types.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)
    op.create_index('ix_users_phone', 'users', ['phone'], unique=False)
    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('full_name', sa.String(length=120), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )
    op.create_table(
        'interactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('source_medication_id', sa.Integer(), nullable=False),
        sa.Column('interacting_medication_id', sa.Integer(), nullable=False),
        sa.Column('risk_level', sa.String(length=20), server_default='moderate', nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['source_medication_id'], ['medications.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['interacting_medication_id'], ['medications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_interactions_source_medication_id', 'interactions', ['source_medication_id'], unique=False)
    op.create_index('ix_interactions_interacting_medication_id', 'interactions', ['interacting_medication_id'], unique=False)
    op.create_table(
        'pharmacies',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('pharmacist_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('opening_time', sa.String(length=5), server_default='08:00', nullable=False),
        sa.Column('closing_time', sa.String(length=5), server_default='20:00', nullable=False),
        sa.ForeignKeyConstraint(['pharmacist_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_pharmacies_pharmacist_id', 'pharmacies', ['pharmacist_id'], unique=False)
    op.create_table(
        'pharmacy_stock',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('pharmacy_id', sa.Integer(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.CheckConstraint('quantity >= 0', name='ck_pharmacy_stock_quantity_non_negative'),
        sa.ForeignKeyConstraint(['pharmacy_id'], ['pharmacies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('pharmacy_id', 'medication_id', name='uq_pharmacy_stock_pharmacy_medication')
    )
    op.create_index('ix_pharmacy_stock_pharmacy_id', 'pharmacy_stock', ['pharmacy_id'], unique=False)
    op.create_index('ix_pharmacy_stock_medication_id', 'pharmacy_stock', ['medication_id'], unique=False)
    op.create_table(
        'prescriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=150), nullable=True),
        sa.Column('patient_weight', sa.Float(), nullable=True),
        sa.Column('patient_age', sa.Integer(), nullable=True),
        sa.Column('prescribed_on', sa.Date(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_prescriptions_user_id', 'prescriptions', ['user_id'], unique=False)
    op.create_table(
        'prescription_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('prescription_id', sa.Integer(), nullable=False),
        sa.Column('medication_id', sa.Integer(), nullable=False),
        sa.Column('frequency_type', sa.String(length=20), nullable=False),
        sa.Column('duration_days', sa.Integer(), nullable=False),
        sa.Column('custom_dose', sa.Integer(), nullable=True),
        sa.Column('unit', sa.String(length=30), server_default='unit', nullable=False),
        sa.ForeignKeyConstraint(['prescription_id'], ['prescriptions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['medication_id'], ['medications.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_prescription_items_prescription_id', 'prescription_items', ['prescription_id'], unique=False)
    op.create_index('ix_prescription_items_medication_id', 'prescription_items', ['medication_id'], unique=False)
    op.create_table(
        'dose_events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('prescription_item_id', sa.Integer(), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('slot', sa.String(length=10), nullable=False),
        sa.Column('dose', sa.Integer(), nullable=True),
        sa.Column('reminder_sent', sa.Boolean(), nullable=False),
        sa.Column('taken', sa.Boolean(), nullable=False),
        sa.Column('taken_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['prescription_item_id'], ['prescription_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_dose_events_prescription_item_id', 'dose_events', ['prescription_item_id'], unique=False)
    op.create_index('ix_dose_events_scheduled_at', 'dose_events', ['scheduled_at'], unique=False)
    op.create_table(
        'notification_preferences',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('channel_id', sa.Integer(), nullable=False),
        sa.Column('contact_value', sa.String(length=255), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['channel_id'], ['notification_channels.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'channel_id', name='uq_notification_preference_user_channel')
    )
    op.create_index('ix_notification_preferences_user_id', 'notification_preferences', ['user_id'], unique=False)

    op.bulk_insert(account_types, [
        {'id': 1, 'name': 'standard'},
        {'id': 2, 'name': 'professional'},
        {'id': 3, 'name': 'pharmacist'},
    ])
    op.bulk_insert(notification_channels, [
        {'id': 1, 'name': 'sms'},
        {'id': 2, 'name': 'whatsapp'},
        {'id': 3, 'name': 'call'},
        {'id': 4, 'name': 'push'},
    ])


def downgrade():
    op.drop_index('ix_notification_preferences_user_id', table_name='notification_preferences')
    op.drop_table('notification_preferences')
    op.drop_index('ix_dose_events_scheduled_at', table_name='dose_events')
    op.drop_index('ix_dose_events_prescription_item_id', table_name='dose_events')
    op.drop_table('dose_events')
    op.drop_index('ix_prescription_items_medication_id', table_name='prescription_items')
    op.drop_index('ix_prescription_items_prescription_id', table_name='prescription_items')
    op.drop_table('prescription_items')
    op.drop_index('ix_prescriptions_user_id', table_name='prescriptions')
    op.drop_table('prescriptions')
    op.drop_index('ix_pharmacy_stock_medication_id', table_name='pharmacy_stock')
    op.drop_index('ix_pharmacy_stock_pharmacy_id', table_name='pharmacy_stock')
    op.drop_table('pharmacy_stock')
    op.drop_index('ix_pharmacies_pharmacist_id', table_name='pharmacies')
    op.drop_table('pharmacies')
    op.drop_index('ix_interactions_interacting_medication_id', table_name='interactions')
    op.drop_index('ix_interactions_source_medication_id', table_name='interactions')
    op.drop_table('interactions')
    op.drop_table('user_profiles')
    op.drop_index('ix_users_phone', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.drop_table('medications')
    op.drop_table('notification_channels')
    op.drop_table('account_types')
