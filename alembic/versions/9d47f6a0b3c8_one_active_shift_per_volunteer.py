"""Allow at most one active shift per volunteer

Revision ID: 9d47f6a0b3c8
Revises: 7c3e8b41d2a6
Create Date: 2025-10-14 11:02:37.913460

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '9d47f6a0b3c8'
down_revision: Union[str, None] = '7c3e8b41d2a6'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Close duplicates left by concurrent check-ins before the index exists:
    # keep the most recent active shift of each volunteer.
    op.execute(
        """
        UPDATE shift_records SET status = 'rejected'
        WHERE status = 'active' AND id NOT IN (
            SELECT MAX(id) FROM shift_records WHERE status = 'active' GROUP BY volunteer_id
        )
        """
    )
    op.create_index(
        'uq_shift_records_one_active_per_volunteer',
        'shift_records',
        ['volunteer_id'],
        unique=True,
        sqlite_where=sa.text("status = 'active'"),
        postgresql_where=sa.text("status = 'active'"),
    )


def downgrade() -> None:
    op.drop_index('uq_shift_records_one_active_per_volunteer', table_name='shift_records')
