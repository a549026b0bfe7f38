"""Create volunteers and shift_records tables

Revision ID: 5a1f0c2d9e01
Revises:
Create Date: 2025-10-02 09:14:51.204118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5a1f0c2d9e01'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ROLES = ('volunteer', 'admin', 'super_admin', 'parent')
CATEGORIES = ('student', 'adult', 'parent')
ACTIVITY_TYPES = ('sandwich_making', 'distribution', 'parent_dropoff')
SHIFT_STATUSES = ('active', 'pending_review', 'approved', 'rejected')


def upgrade() -> None:
    op.create_table('volunteers',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('first_name', sa.String(length=255), nullable=False),
    sa.Column('last_name', sa.String(length=255), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('password', sa.String(length=255), nullable=True),
    sa.Column('phone', sa.String(length=50), nullable=True),
    sa.Column('role', sa.Enum(*ROLES, name='volunteer_role'), nullable=False),
    sa.Column('volunteer_category', sa.Enum(*CATEGORIES, name='volunteer_category'), nullable=True),
    sa.Column('is_approved', sa.Boolean(), nullable=False),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('managed_by', sa.Integer(), nullable=True),
    sa.Column('contact_email', sa.String(length=255), nullable=True),
    sa.Column('grade', sa.String(length=50), nullable=True),
    sa.Column('school_name', sa.String(length=255), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    sa.ForeignKeyConstraint(['managed_by'], ['volunteers.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_volunteers_id'), 'volunteers', ['id'], unique=False)
    op.create_index(op.f('ix_volunteers_email'), 'volunteers', ['email'], unique=True)
    op.create_index(op.f('ix_volunteers_managed_by'), 'volunteers', ['managed_by'], unique=False)

    op.create_table('shift_records',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('volunteer_id', sa.Integer(), nullable=False),
    sa.Column('activity_type', sa.Enum(*ACTIVITY_TYPES, name='activity_type'), nullable=False),
    sa.Column('status', sa.Enum(*SHIFT_STATUSES, name='shift_status'), nullable=False),
    sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
    sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
    sa.Column('hours', sa.Float(), nullable=True),
    sa.Column('reviewed_by', sa.Integer(), nullable=True),
    sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
    sa.ForeignKeyConstraint(['volunteer_id'], ['volunteers.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['reviewed_by'], ['volunteers.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_shift_records_id'), 'shift_records', ['id'], unique=False)
    op.create_index(op.f('ix_shift_records_volunteer_id'), 'shift_records', ['volunteer_id'], unique=False)
    op.create_index(op.f('ix_shift_records_status'), 'shift_records', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_shift_records_status'), table_name='shift_records')
    op.drop_index(op.f('ix_shift_records_volunteer_id'), table_name='shift_records')
    op.drop_index(op.f('ix_shift_records_id'), table_name='shift_records')
    op.drop_table('shift_records')
    op.drop_index(op.f('ix_volunteers_managed_by'), table_name='volunteers')
    op.drop_index(op.f('ix_volunteers_email'), table_name='volunteers')
    op.drop_index(op.f('ix_volunteers_id'), table_name='volunteers')
    op.drop_table('volunteers')
    sa.Enum(name='shift_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='activity_type').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='volunteer_category').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='volunteer_role').drop(op.get_bind(), checkfirst=True)
