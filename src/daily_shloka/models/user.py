# src/daily_shloka/models/user.py
"""SQLAlchemy models for readers and their reading cursor."""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from daily_shloka.db.session import Base
from daily_shloka.db.time import now_ms

READING_MODE_SEQUENTIAL = "sequential"


class User(Base):
    """Reader identity synced from the external auth provider."""

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    auth_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False, default="Reader")
    avatar_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # IANA identifier; invalid values fall back to UTC at read time.
    timezone: Mapped[str] = mapped_column(Text, nullable=False, default="UTC")
    # "HH:mm" 24h, consumed by the client-side reminder scheduler.
    reminder_time: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)

    reading_state: Mapped[UserReadingState] = relationship(
        "UserReadingState",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )


class UserReadingState(Base):
    """Per-user cursor into the canonical verse order.

    ``sequential_pointer`` is the index of the next verse the user has not
    consumed. It only moves when a sequence read is logged.
    """

    __tablename__ = "user_reading_state"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    )
    mode: Mapped[str] = mapped_column(Text, nullable=False, default=READING_MODE_SEQUENTIAL)
    sequential_pointer: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # YYYY-MM-DD of the last assigned set; empty until the first set exists.
    last_daily_date: Mapped[str] = mapped_column(Text, nullable=False, default="")
    current_daily_set_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("daily_set.id", ondelete="SET NULL"),
        nullable=True,
    )
    sequence_initialized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    user: Mapped[User] = relationship("User", back_populates="reading_state")
