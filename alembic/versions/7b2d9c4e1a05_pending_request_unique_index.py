"""unique pending request per requester and skill

Revision ID: 7b2d9c4e1a05
Revises: 3e8a1f2b7c4d
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7b2d9c4e1a05'
down_revision: Union[str, Sequence[str], None] = '3e8a1f2b7c4d'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

INDEX_NAME = 'ux_requests_pending_pair'
PARTIAL_DIALECTS = ('sqlite', 'postgresql')


def upgrade() -> None:
    """Upgrade schema."""
    if op.get_bind().dialect.name not in PARTIAL_DIALECTS:
        return
    pending_only = sa.text("status = 'pending'")
    op.create_index(
        INDEX_NAME,
        'requests',
        ['from_id', 'skill_id'],
        unique=True,
        sqlite_where=pending_only,
        postgresql_where=pending_only,
    )


def downgrade() -> None:
    """Downgrade schema."""
    if op.get_bind().dialect.name not in PARTIAL_DIALECTS:
        return
    op.drop_index(INDEX_NAME, table_name='requests')
