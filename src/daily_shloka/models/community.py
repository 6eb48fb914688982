"""SQLAlchemy models for community membership and metadata."""
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from daily_shloka.db.session import Base
from daily_shloka.db.time import now_ms

COMMUNITY_PUBLIC = "public"
COMMUNITY_PRIVATE = "private"

ROLE_OWNER = "owner"
ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"


class Community(Base):
    """A reader-formed group with its own leaderboard."""

    __tablename__ = "community"
    __table_args__ = (
        CheckConstraint("type IN ('public', 'private')", name="ck_community_type"),
        Index("ix_community_type", "type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False, default=COMMUNITY_PUBLIC)
    # Only private communities carry a code.
    invite_code: Mapped[str | None] = mapped_column(Text, unique=True, nullable=True)
    created_by: Mapped[int] = mapped_column(Integer, ForeignKey("app_user.id"), nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)


class CommunityMember(Base):
    """Join table mapping users into communities."""

    __tablename__ = "community_member"
    __table_args__ = (
        CheckConstraint("role IN ('owner', 'admin', 'member')", name="ck_community_member_role"),
        Index("ix_community_member_user_id", "user_id"),
    )

    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role: Mapped[str] = mapped_column(Text, nullable=False, default=ROLE_MEMBER)
    joined_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)


class ActiveCommunity(Base):
    """The community a user currently has selected in the social tab."""

    __tablename__ = "active_community"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=False,
    )
