"""Add centers table and link shift_records to a center

Revision ID: 7c3e8b41d2a6
Revises: 5a1f0c2d9e01
Create Date: 2025-10-09 16:40:12.558031

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c3e8b41d2a6'
down_revision: Union[str, None] = '5a1f0c2d9e01'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('centers',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('latitude', sa.Float(), nullable=False),
    sa.Column('longitude', sa.Float(), nullable=False),
    sa.Column('radius', sa.Integer(), nullable=False, server_default='150'),
    sa.Column('created_by', sa.Integer(), nullable=True),
    sa.ForeignKeyConstraint(['created_by'], ['volunteers.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_centers_id'), 'centers', ['id'], unique=False)

    with op.batch_alter_table('shift_records') as batch_op:
        batch_op.add_column(sa.Column('center_id', sa.Integer(), nullable=True))
        batch_op.create_foreign_key(
            'fk_shift_records_center_id_centers', 'centers', ['center_id'], ['id'], ondelete='SET NULL'
        )


def downgrade() -> None:
    with op.batch_alter_table('shift_records') as batch_op:
        batch_op.drop_constraint('fk_shift_records_center_id_centers', type_='foreignkey')
        batch_op.drop_column('center_id')
    op.drop_index(op.f('ix_centers_id'), table_name='centers')
    op.drop_table('centers')
