"""unique daily set per day and sequence read per verse

Revision ID: 8e2d4b61c9a5
Revises: 3c1f9a2b7d40
Create Date: 2026-10-19 14:02:17.551930

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "8e2d4b61c9a5"
down_revision: Union[str, Sequence[str], None] = "3c1f9a2b7d40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Enforce one set per local day and one sequence read per verse."""
    op.drop_index("ix_daily_set_user_date", table_name="daily_set")
    op.create_index(
        "uq_daily_set_user_date",
        "daily_set",
        ["user_id", "local_date"],
        unique=True,
    )
    op.create_index(
        "uq_read_event_sequence_verse",
        "read_event",
        ["daily_set_id", "verse_id"],
        unique=True,
        sqlite_where=sa.text("kind = 'sequence'"),
        postgresql_where=sa.text("kind = 'sequence'"),
    )


def downgrade() -> None:
    op.drop_index("uq_read_event_sequence_verse", table_name="read_event")
    op.drop_index("uq_daily_set_user_date", table_name="daily_set")
    op.create_index(
        "ix_daily_set_user_date",
        "daily_set",
        ["user_id", "local_date"],
        unique=False,
    )
