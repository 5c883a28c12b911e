"""initial booking schema

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-10-19 10:12:44.381502

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Service catalog
    op.create_table(
        'services',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('duration_minutes', sa.Integer, nullable=False),
        sa.Column('active', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True)
    )
    op.create_index('ix_services_active', 'services', ['active'])

    # 2. Business settings (single row)
    op.create_table(
        'business_settings',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('work_start_time', sa.Time, nullable=False),
        sa.Column('work_end_time', sa.Time, nullable=False),
        sa.Column('slot_interval_minutes', sa.Integer, nullable=False),
        sa.Column('weekday_off', sa.JSON, nullable=True),
        sa.Column('specific_days_off', sa.JSON, nullable=True),
        sa.Column('whatsapp_number', sa.String(20), nullable=True),
        sa.Column('whatsapp_message_template', sa.Text, nullable=True),
        sa.Column('admin_password_hash', sa.String(255), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True)
    )

    # 3. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('service_id', sa.Uuid(as_uuid=True), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('customer_name', sa.String(200), nullable=False),
        sa.Column('customer_contact', sa.String(30), nullable=False),
        sa.Column('appointment_date', sa.Date, nullable=False),
        sa.Column('appointment_time', sa.Time, nullable=False),
        sa.Column('service_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('duration_minutes', sa.Integer, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True)
    )

    op.create_index('ix_appointments_appointment_date', 'appointments', ['appointment_date'])
    op.create_index('ix_appointments_updated_at', 'appointments', ['updated_at'])

    # One pending/confirmed booking per slot
    op.create_index(
        'uq_appointments_active_slot',
        'appointments',
        ['appointment_date', 'appointment_time'],
        unique=True,
        sqlite_where=sa.text("status != 'cancelled'"),
        postgresql_where=sa.text("status != 'cancelled'")
    )

    # 4. Outbound message queue
    op.create_table(
        'pending_messages',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('appointment_id', sa.Uuid(as_uuid=True), sa.ForeignKey('appointments.id'), nullable=False),
        sa.Column('kind', sa.String(20), nullable=False),
        sa.Column('message', sa.Text, nullable=False),
        sa.Column('sent', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True)
    )

    op.create_index('ix_pending_messages_appointment_id', 'pending_messages', ['appointment_id'])
    op.create_index('ix_pending_messages_sent', 'pending_messages', ['sent'])

    # 5. Admin sessions
    op.create_table(
        'admin_sessions',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True)
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('admin_sessions')

    op.drop_index('ix_pending_messages_sent', table_name='pending_messages')
    op.drop_index('ix_pending_messages_appointment_id', table_name='pending_messages')
    op.drop_table('pending_messages')

    op.drop_index('uq_appointments_active_slot', table_name='appointments')
    op.drop_index('ix_appointments_updated_at', table_name='appointments')
    op.drop_index('ix_appointments_appointment_date', table_name='appointments')
    op.drop_table('appointments')

    op.drop_table('business_settings')

    op.drop_index('ix_services_active', table_name='services')
    op.drop_table('services')
