# src/daily_shloka/models/streak.py
"""Model for per-user reading streak counters."""

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from daily_shloka.db.session import Base
from daily_shloka.db.time import now_ms


class Streak(Base):
    """Consecutive-day counters, mutated only by the streak engine."""

    __tablename__ = "streak"
    __table_args__ = (
        CheckConstraint("current_streak >= 0", name="ck_streak_current_non_negative"),
        CheckConstraint("longest_streak >= current_streak", name="ck_streak_longest_bound"),
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_completed_local_date: Mapped[str] = mapped_column(Text, nullable=False, default="")
    last_read_local_date: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=now_ms,
        onupdate=now_ms,
    )
