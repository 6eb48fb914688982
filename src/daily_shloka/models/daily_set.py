# src/daily_shloka/models/daily_set.py
"""Models for assigned daily verse sets and the read log."""

from sqlalchemy import JSON, BigInteger, CheckConstraint, ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from daily_shloka.db.session import Base
from daily_shloka.db.time import now_ms

READ_KIND_SEQUENCE = "sequence"
READ_KIND_REREAD = "reread"


class DailySet(Base):
    """The batch of verses assigned to one user for one local calendar day."""

    __tablename__ = "daily_set"
    __table_args__ = (
        Index("ix_daily_set_user_id", "user_id"),
        # One set per user and local day.
        Index("uq_daily_set_user_date", "user_id", "local_date", unique=True),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    local_date: Mapped[str] = mapped_column(Text, nullable=False)
    # Ordered verse ids; reads must follow this order.
    verse_ids: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
    # Stamped once, when the last verse of the set is read.
    completed_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    @property
    def is_complete(self) -> bool:
        """Return True once the set has been fully read."""
        return self.completed_at is not None


class ReadEvent(Base):
    """Append-only log of verse reads.

    ``sequence`` events are forward progress through the set; ``reread``
    events only keep the streak alive.
    """

    __tablename__ = "read_event"
    __table_args__ = (
        CheckConstraint("kind IN ('sequence', 'reread')", name="ck_read_event_kind"),
        Index("ix_read_event_user_id", "user_id"),
        Index("ix_read_event_daily_set_id", "daily_set_id"),
        # A verse is read in sequence at most once per set; rereads are unbounded.
        Index(
            "uq_read_event_sequence_verse",
            "daily_set_id",
            "verse_id",
            unique=True,
            sqlite_where=text("kind = 'sequence'"),
            postgresql_where=text("kind = 'sequence'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    daily_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("daily_set.id", ondelete="CASCADE"),
        nullable=False,
    )
    verse_id: Mapped[int] = mapped_column(Integer, ForeignKey("verse.id"), nullable=False)
    read_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
    kind: Mapped[str] = mapped_column(Text, nullable=False, default=READ_KIND_SEQUENCE)
