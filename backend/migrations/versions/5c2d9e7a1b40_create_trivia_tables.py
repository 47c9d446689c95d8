"""create user, question, answer, answer_entry, image and message tables

Revision ID: 5c2d9e7a1b40
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d9e7a1b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('external_id', sa.String(length=64), nullable=False),
            sa.Column('display_name', sa.String(length=128), nullable=False),
            sa.Column('image_url', sa.String(length=512), nullable=True),
            sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        )
        op.create_index('ix_user_external_id', 'user', ['external_id'], unique=True)

    if 'question' not in existing_tables:
        op.create_table(
            'question',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('author_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('text', sa.String(length=128), nullable=False),
            sa.Column('correct_answer_id', sa.Integer(), nullable=True),
            sa.Column('activated_at', sa.Float(), nullable=True),
            sa.Column('created_at', sa.Float(), nullable=False),
        )
        op.create_index('ix_question_activated_at', 'question', ['activated_at'])

    if 'answer' not in existing_tables:
        op.create_table(
            'answer',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('question_id', sa.Integer(), sa.ForeignKey('question.id'), nullable=False),
            sa.Column('text', sa.String(length=32), nullable=False),
        )
        op.create_index('ix_answer_question_id', 'answer', ['question_id'])
        # question <-> answer is circular; add the back-reference once both tables exist
        with op.batch_alter_table('question') as batch_op:
            batch_op.create_foreign_key('fk_question_correct_answer_id', 'answer', ['correct_answer_id'], ['id'])

    if 'answer_entry' not in existing_tables:
        op.create_table(
            'answer_entry',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('question_id', sa.Integer(), sa.ForeignKey('question.id'), nullable=False),
            sa.Column('answer_id', sa.Integer(), sa.ForeignKey('answer.id'), nullable=False),
            sa.Column('updated_at', sa.Float(), nullable=False),
            sa.UniqueConstraint('user_id', 'question_id', name='uq_answer_entry_user_question'),
        )
        op.create_index('ix_answer_entry_question_id', 'answer_entry', ['question_id'])

    if 'image' not in existing_tables:
        op.create_table(
            'image',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('url', sa.String(length=512), nullable=False),
            sa.Column('created_at', sa.Float(), nullable=False),
        )

    if 'message' not in existing_tables:
        op.create_table(
            'message',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('posted_at', sa.Float(), nullable=False),
        )
        op.create_index('ix_message_posted_at', 'message', ['posted_at'])


def downgrade():
    with op.batch_alter_table('question') as batch_op:
        batch_op.drop_constraint('fk_question_correct_answer_id', type_='foreignkey')
    op.drop_table('message')
    op.drop_table('image')
    op.drop_table('answer_entry')
    op.drop_table('answer')
    op.drop_table('question')
    op.drop_table('user')
