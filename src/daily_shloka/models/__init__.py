# src/daily_shloka/models/__init__.py
"""SQLAlchemy models for the Daily Shloka application."""

from .community import ActiveCommunity, Community, CommunityMember
from .daily_set import DailySet, ReadEvent
from .streak import Streak
from .user import User, UserReadingState
from .verse import Verse

__all__ = [
    "ActiveCommunity", "Community", "CommunityMember",
    "DailySet", "ReadEvent",
    "Streak",
    "User", "UserReadingState",
    "Verse",
]
