"""Create booking engine tables

Revision ID: b001_create_booking_tables
Revises:
Create Date: 2026-10-17

This migration creates the tables of the availability and booking engine:
- events: bookable events with their weekly availability template
- event_overrides: per-date blackouts and replacement windows
- event_sessions: explicit sessions of MANUAL events
- invitees: access tokens for RESTRICTED events
- booking_labels: tenant-defined labels for bookings
- bookings: admitted bookings
- slot_locks: one lockable row per bookable slot
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'b001_create_booking_tables'
down_revision = None
branch_labels = None
depends_on = None

NOW = sa.text('CURRENT_TIMESTAMP')


def upgrade() -> None:
    op.create_table(
        'events',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default=sa.text('1')),

        # Presentation
        sa.Column('title_en', sa.String(), nullable=False),
        sa.Column('title_de', sa.String(), nullable=True),
        sa.Column('desc_en', sa.String(), nullable=True),
        sa.Column('desc_de', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('host_name', sa.String(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),

        # Scheduling
        sa.Column('timezone', sa.String(), nullable=False),
        sa.Column('schedule_type', sa.String(20), nullable=False),
        sa.Column('duration_min', sa.Integer(), nullable=False),
        sa.Column('interval_min', sa.Integer(), nullable=False),
        sa.Column('max_participants', sa.Integer(), nullable=False),
        sa.Column('min_notice_general', sa.Integer(), nullable=False),
        sa.Column('min_notice_first', sa.Integer(), nullable=False),
        sa.Column('active_start', sa.DateTime(timezone=True), nullable=True),
        sa.Column('active_end', sa.DateTime(timezone=True), nullable=True),
        sa.Column('access_mode', sa.String(20), nullable=False),
        sa.Column('config', sa.JSON(), nullable=False),

        # Customer self-service
        sa.Column('allow_customer_cancel', sa.Boolean(), nullable=False),
        sa.Column('allow_customer_reschedule', sa.Boolean(), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.text('false')),

        # Timestamps
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=NOW),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=NOW),

        sa.UniqueConstraint('tenant_id', 'slug', name='unique_event_tenant_slug'),
        sa.CheckConstraint('duration_min > 0', name='check_event_duration_positive'),
        sa.CheckConstraint('interval_min > 0', name='check_event_interval_positive'),
        sa.CheckConstraint('max_participants >= 1', name='check_event_capacity_positive'),
    )
    op.create_index('ix_events_tenant_id', 'events', ['tenant_id'])

    op.create_table(
        'event_overrides',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('event_id', sa.String(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('is_unavailable', sa.Boolean(), nullable=False),
        sa.Column('override_config', sa.JSON(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('override_max_participants', sa.Integer(), nullable=True),
        sa.UniqueConstraint('event_id', 'date', name='unique_event_override_date'),
    )
    op.create_index('ix_event_overrides_event_id', 'event_overrides', ['event_id'])

    op.create_table(
        'event_sessions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('event_id', sa.String(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('max_participants', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('host_name', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=NOW),
        sa.CheckConstraint('max_participants >= 1', name='check_session_capacity_positive'),
        sa.CheckConstraint('start_time < end_time', name='check_session_time_order'),
    )
    op.create_index('ix_event_sessions_event_id', 'event_sessions', ['event_id'])
    op.create_index('ix_event_sessions_start_time', 'event_sessions', ['start_time'])

    op.create_table(
        'invitees',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('event_id', sa.String(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=NOW),
    )
    op.create_index('ix_invitees_event_id', 'invitees', ['event_id'])
    op.create_index('ix_invitees_token', 'invitees', ['token'], unique=True)

    op.create_table(
        'booking_labels',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('color', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=NOW),
    )
    op.create_index('ix_booking_labels_tenant_id', 'booking_labels', ['tenant_id'])

    op.create_table(
        'bookings',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('event_id', sa.String(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('session_id', sa.String(), sa.ForeignKey('event_sessions.id', ondelete='SET NULL'), nullable=True),
        sa.Column('invitee_id', sa.String(), sa.ForeignKey('invitees.id', ondelete='SET NULL'), nullable=True),
        sa.Column('label_id', sa.String(), sa.ForeignKey('booking_labels.id', ondelete='SET NULL'), nullable=True),

        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('customer_email', sa.String(), nullable=False),
        sa.Column('customer_note', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('token', sa.String(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='CONFIRMED'),
        sa.Column('management_token', sa.String(), nullable=False),

        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=NOW),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=NOW),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_check_constraint(
        'check_booking_status',
        'bookings',
        "status IN ('CONFIRMED', 'CANCELLED')"
    )
    op.create_index('ix_bookings_tenant_id', 'bookings', ['tenant_id'])
    op.create_index('ix_bookings_event_id', 'bookings', ['event_id'])
    op.create_index('ix_bookings_session_id', 'bookings', ['session_id'])
    op.create_index('ix_bookings_management_token', 'bookings', ['management_token'], unique=True)
    # Capacity counts filter on exactly these columns
    op.create_index('idx_bookings_event_start_status', 'bookings', ['event_id', 'start_time', 'status'])

    op.create_table(
        'slot_locks',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('event_id', sa.String(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('slot_key', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=NOW),
        sa.UniqueConstraint('event_id', 'slot_key', name='unique_slot_lock_event_key'),
    )


def downgrade() -> None:
    op.drop_table('slot_locks')
    op.drop_index('idx_bookings_event_start_status', table_name='bookings')
    op.drop_index('ix_bookings_management_token', table_name='bookings')
    op.drop_index('ix_bookings_session_id', table_name='bookings')
    op.drop_index('ix_bookings_event_id', table_name='bookings')
    op.drop_index('ix_bookings_tenant_id', table_name='bookings')
    op.drop_table('bookings')
    op.drop_index('ix_booking_labels_tenant_id', table_name='booking_labels')
    op.drop_table('booking_labels')
    op.drop_index('ix_invitees_token', table_name='invitees')
    op.drop_index('ix_invitees_event_id', table_name='invitees')
    op.drop_table('invitees')
    op.drop_index('ix_event_sessions_start_time', table_name='event_sessions')
    op.drop_index('ix_event_sessions_event_id', table_name='event_sessions')
    op.drop_table('event_sessions')
    op.drop_index('ix_event_overrides_event_id', table_name='event_overrides')
    op.drop_table('event_overrides')
    op.drop_index('ix_events_tenant_id', table_name='events')
    op.drop_table('events')
