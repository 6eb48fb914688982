"""initial schema

Revision ID: 3c1f9a2b7d40
Revises:
Create Date: 2026-10-19 09:12:44.318204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1f9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the catalog, reading and community tables."""
    op.create_table(
        "verse",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("chapter_number", sa.Integer(), nullable=False),
        sa.Column("verse_number", sa.Integer(), nullable=False),
        sa.Column("sanskrit_text", sa.Text(), nullable=False),
        sa.Column("transliteration", sa.Text(), nullable=False),
        sa.Column("translation", sa.Text(), nullable=False),
        sa.Column("source_key", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("chapter_number", "verse_number", name="uq_verse_position"),
    )
    op.create_index("ix_verse_chapter_verse", "verse", ["chapter_number", "verse_number"])

    op.create_table(
        "app_user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("auth_id", sa.Text(), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=False),
        sa.Column("timezone", sa.Text(), nullable=False),
        sa.Column("reminder_time", sa.Text(), nullable=True),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("auth_id"),
    )

    op.create_table(
        "daily_set",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("local_date", sa.Text(), nullable=False),
        sa.Column("verse_ids", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("completed_at", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_daily_set_user_id", "daily_set", ["user_id"])
    op.create_index("ix_daily_set_user_date", "daily_set", ["user_id", "local_date"])

    op.create_table(
        "user_reading_state",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("mode", sa.Text(), nullable=False),
        sa.Column("sequential_pointer", sa.Integer(), nullable=False),
        sa.Column("last_daily_date", sa.Text(), nullable=False),
        sa.Column("current_daily_set_id", sa.Integer(), nullable=True),
        sa.Column("sequence_initialized", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["current_daily_set_id"], ["daily_set.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "read_event",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("daily_set_id", sa.Integer(), nullable=False),
        sa.Column("verse_id", sa.Integer(), nullable=False),
        sa.Column("read_at", sa.BigInteger(), nullable=False),
        sa.Column("kind", sa.Text(), nullable=False),
        sa.CheckConstraint("kind IN ('sequence', 'reread')", name="ck_read_event_kind"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["daily_set_id"], ["daily_set.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["verse_id"], ["verse.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_read_event_user_id", "read_event", ["user_id"])
    op.create_index("ix_read_event_daily_set_id", "read_event", ["daily_set_id"])

    op.create_table(
        "streak",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False),
        sa.Column("longest_streak", sa.Integer(), nullable=False),
        sa.Column("last_completed_local_date", sa.Text(), nullable=False),
        sa.Column("last_read_local_date", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.BigInteger(), nullable=False),
        sa.CheckConstraint("current_streak >= 0", name="ck_streak_current_non_negative"),
        sa.CheckConstraint("longest_streak >= current_streak", name="ck_streak_longest_bound"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "community",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("invite_code", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.CheckConstraint("type IN ('public', 'private')", name="ck_community_type"),
        sa.ForeignKeyConstraint(["created_by"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invite_code"),
    )
    op.create_index("ix_community_type", "community", ["type"])

    op.create_table(
        "community_member",
        sa.Column("community_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role", sa.Text(), nullable=False),
        sa.Column("joined_at", sa.BigInteger(), nullable=False),
        sa.CheckConstraint(
            "role IN ('owner', 'admin', 'member')", name="ck_community_member_role"
        ),
        sa.ForeignKeyConstraint(["community_id"], ["community.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("community_id", "user_id"),
    )
    op.create_index("ix_community_member_user_id", "community_member", ["user_id"])

    op.create_table(
        "active_community",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("community_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["community_id"], ["community.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Drop every table created by :func:`upgrade`."""
    op.drop_table("active_community")
    op.drop_index("ix_community_member_user_id", table_name="community_member")
    op.drop_table("community_member")
    op.drop_index("ix_community_type", table_name="community")
    op.drop_table("community")
    op.drop_table("streak")
    op.drop_index("ix_read_event_daily_set_id", table_name="read_event")
    op.drop_index("ix_read_event_user_id", table_name="read_event")
    op.drop_table("read_event")
    op.drop_table("user_reading_state")
    op.drop_index("ix_daily_set_user_date", table_name="daily_set")
    op.drop_index("ix_daily_set_user_id", table_name="daily_set")
    op.drop_table("daily_set")
    op.drop_table("app_user")
    op.drop_index("ix_verse_chapter_verse", table_name="verse")
    op.drop_table("verse")
