"""create reading plans

Revision ID: 5b2d9c4e7a10
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b2d9c4e7a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('author', sa.String(length=150), nullable=False),
        sa.Column('ocr_source', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'chapters',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('estimated_pages', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('book_id', 'number'),
    )

    op.create_table(
        'reading_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('reading_level', sa.Integer(), nullable=False),
        sa.Column('daily_minutes', sa.Integer(), nullable=False),
        sa.Column('preferred_time', sa.Time(), nullable=True),
        sa.Column('include_weekends', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reading_profiles_user_id', 'reading_profiles', ['user_id'])

    op.create_table(
        'reading_plans',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('original_end_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('progress_percent', sa.Float(), nullable=False),
        sa.Column('pages_per_day', sa.Integer(), nullable=False),
        sa.Column('minutes_per_day', sa.Integer(), nullable=False),
        sa.Column('include_weekends', sa.Boolean(), nullable=False),
        sa.Column('days_behind', sa.Integer(), nullable=False),
        sa.Column('pending_regeneration', sa.Boolean(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['profile_id'], ['reading_profiles.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reading_plans_user_id', 'reading_plans', ['user_id'])

    op.create_table(
        'plan_details',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=False),
        sa.Column('chapter_id', sa.Integer(), nullable=False),
        sa.Column('assigned_date', sa.Date(), nullable=False),
        sa.Column('day', sa.Integer(), nullable=False),
        sa.Column('start_page', sa.Integer(), nullable=False),
        sa.Column('end_page', sa.Integer(), nullable=False),
        sa.Column('estimated_minutes', sa.Integer(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
        sa.Column('actual_minutes', sa.Integer(), nullable=True),
        sa.Column('difficulty', sa.Integer(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_late', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['plan_id'], ['reading_plans.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_plan_details_plan_id', 'plan_details', ['plan_id'])

    op.create_table(
        'reading_progress',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('chapters_read', sa.Integer(), nullable=False),
        sa.Column('pages_read', sa.Integer(), nullable=False),
        sa.Column('minutes_spent', sa.Integer(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('day_status', sa.String(length=20), nullable=False),
        sa.Column('day_percent', sa.Float(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['plan_id'], ['reading_plans.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('plan_id', 'date'),
    )
    op.create_index('ix_reading_progress_plan_id', 'reading_progress', ['plan_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_reading_progress_plan_id', 'reading_progress')
    op.drop_table('reading_progress')
    op.drop_index('ix_plan_details_plan_id', 'plan_details')
    op.drop_table('plan_details')
    op.drop_index('ix_reading_plans_user_id', 'reading_plans')
    op.drop_table('reading_plans')
    op.drop_index('ix_reading_profiles_user_id', 'reading_profiles')
    op.drop_table('reading_profiles')
    op.drop_table('chapters')
    op.drop_table('books')
