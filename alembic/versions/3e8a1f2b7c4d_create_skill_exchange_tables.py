"""create skill exchange tables

Revision ID: 3e8a1f2b7c4d
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql


# revision identifiers, used by Alembic.
revision: str = '3e8a1f2b7c4d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

REQUEST_STATUS = sa.Enum('pending', 'accepted', 'declined', name='request_status')


def _timestamp() -> sa.types.TypeEngine:
    return sa.DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), 'mysql')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('mobile', sa.String(length=32), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('profession', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', _timestamp(), nullable=False),
        sa.Column('updated_at', _timestamp(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'skills',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('video_path', sa.String(length=255), nullable=False),
        sa.Column('owner_id', sa.String(length=36), nullable=False),
        sa.Column('created_at', _timestamp(), nullable=False),
    )
    op.create_index('ix_skills_id', 'skills', ['id'])
    op.create_index('ix_skills_owner_id', 'skills', ['owner_id'])
    op.create_index('ix_skills_created_at', 'skills', ['created_at'])

    op.create_table(
        'wants',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.String(length=36), nullable=False),
        sa.Column('created_at', _timestamp(), nullable=False),
    )
    op.create_index('ix_wants_id', 'wants', ['id'])
    op.create_index('ix_wants_owner_id', 'wants', ['owner_id'])
    op.create_index('ix_wants_created_at', 'wants', ['created_at'])

    op.create_table(
        'requests',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('from_id', sa.String(length=36), nullable=False),
        sa.Column('to_id', sa.String(length=36), nullable=False),
        sa.Column('skill_id', sa.String(length=36), nullable=False),
        sa.Column('status', REQUEST_STATUS, nullable=False),
        sa.Column('created_at', _timestamp(), nullable=False),
        sa.Column('updated_at', _timestamp(), nullable=False),
    )
    op.create_index('ix_requests_id', 'requests', ['id'])
    op.create_index('ix_requests_from_id', 'requests', ['from_id'])
    op.create_index('ix_requests_to_id', 'requests', ['to_id'])
    op.create_index('ix_requests_skill_id', 'requests', ['skill_id'])
    op.create_index('ix_requests_created_at', 'requests', ['created_at'])

    op.create_table(
        'permissions',
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('skill_id', sa.String(length=36), nullable=False),
        sa.Column('created_at', _timestamp(), nullable=False),
        sa.PrimaryKeyConstraint('user_id', 'skill_id'),
    )
    op.create_index('ix_permissions_skill_id', 'permissions', ['skill_id'])
    op.create_index('ix_permissions_created_at', 'permissions', ['created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('permissions')
    op.drop_table('requests')
    op.drop_table('wants')
    op.drop_table('skills')
    op.drop_table('users')
    REQUEST_STATUS.drop(op.get_bind(), checkfirst=True)
