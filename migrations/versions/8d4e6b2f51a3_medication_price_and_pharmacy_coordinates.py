"""medication price/added_at and pharmacy coordinates

Revision ID: 8d4e6b2f51a3
Revises: 3f1c2a9d7b10
Create Date: 2026-10-06 17:40:03.981177
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '8d4e6b2f51a3'
down_revision = '3f1c2a9d7b10'
branch_labels = None
depends_on = None


def upgrade():
    # SQLite cannot ADD COLUMN with a CURRENT_TIMESTAMP default; backfill instead
    with op.batch_alter_table('medications', schema=None) as batch_op:
        batch_op.add_column(sa.Column('price', sa.String(length=50), nullable=True))
        batch_op.add_column(sa.Column('added_at', sa.DateTime(), nullable=True))
    op.execute("UPDATE medications SET added_at = CURRENT_TIMESTAMP WHERE added_at IS NULL")

    with op.batch_alter_table('pharmacies', schema=None) as batch_op:
        batch_op.add_column(sa.Column('latitude', sa.Float(), nullable=True))
        batch_op.add_column(sa.Column('longitude', sa.Float(), nullable=True))


def downgrade():
    with op.batch_alter_table('pharmacies', schema=None) as batch_op:
        batch_op.drop_column('longitude')
        batch_op.drop_column('latitude')

    with op.batch_alter_table('medications', schema=None) as batch_op:
        batch_op.drop_column('added_at')
        batch_op.drop_column('price')
