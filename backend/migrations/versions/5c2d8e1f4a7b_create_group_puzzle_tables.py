"""create group, member, puzzle, category, word and attempt tables

Revision ID: 5c2d8e1f4a7b
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d8e1f4a7b'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'group',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('code', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_group_code', 'group', ['code'], unique=True)

    op.create_table(
        'member',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['group.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('group_id', 'name', name='uq_member_group_name'),
    )
    op.create_index('ix_member_group_id', 'member', ['group_id'])

    op.create_table(
        'puzzle',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('difficulty', sa.String(length=32), nullable=False),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['group.id']),
        sa.ForeignKeyConstraint(['author_id'], ['member.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_puzzle_group_id', 'puzzle', ['group_id'])

    op.create_table(
        'category',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('color', sa.String(length=16), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('puzzle_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['puzzle_id'], ['puzzle.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('puzzle_id', 'name', name='uq_category_puzzle_name'),
    )
    op.create_index('ix_category_puzzle_id', 'category', ['puzzle_id'])

    op.create_table(
        'word',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('text', sa.String(length=100), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['category_id'], ['category.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_word_category_id', 'word', ['category_id'])

    op.create_table(
        'attempt',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('puzzle_id', sa.Integer(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('incorrect_guesses', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['member_id'], ['member.id']),
        sa.ForeignKeyConstraint(['puzzle_id'], ['puzzle.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('member_id', 'puzzle_id', name='uq_attempt_member_puzzle'),
    )
    op.create_index('ix_attempt_member_id', 'attempt', ['member_id'])
    op.create_index('ix_attempt_puzzle_id', 'attempt', ['puzzle_id'])


def downgrade():
    op.drop_table('attempt')
    op.drop_table('word')
    op.drop_table('category')
    op.drop_table('puzzle')
    op.drop_table('member')
    op.drop_index('ix_group_code', table_name='group')
    op.drop_table('group')
