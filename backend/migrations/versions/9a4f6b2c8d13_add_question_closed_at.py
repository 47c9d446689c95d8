"""add closed_at to question

Revision ID: 9a4f6b2c8d13
Revises: 5c2d9e7a1b40
Create Date: 2026-10-20 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '9a4f6b2c8d13'
down_revision = '5c2d9e7a1b40'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    cols = {c['name'] for c in insp.get_columns('question')}
    if 'closed_at' not in cols:
        with op.batch_alter_table('question') as batch_op:
            batch_op.add_column(sa.Column('closed_at', sa.Float(), nullable=True))
        # Every activated question except the newest one is already closed
        op.execute(
            "UPDATE question SET closed_at = activated_at "
            "WHERE activated_at IS NOT NULL "
            "AND activated_at < (SELECT MAX(q.activated_at) FROM question q)"
        )


def downgrade():
    with op.batch_alter_table('question') as batch_op:
        batch_op.drop_column('closed_at')
