# src/daily_shloka/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .communities import router as communities_router
from .daily_sets import router as daily_sets_router
from .leaderboard import router as leaderboard_router
from .streaks import router as streaks_router
from .users import router as users_router
from .verses import router as verses_router

__all__ = [
    "users_router",
    "verses_router",
    "daily_sets_router",
    "streaks_router",
    "leaderboard_router",
    "communities_router",
]
