# src/daily_shloka/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    communities_router,
    daily_sets_router,
    leaderboard_router,
    streaks_router,
    users_router,
    verses_router,
)

__all__ = [
    "users_router",
    "verses_router",
    "daily_sets_router",
    "streaks_router",
    "leaderboard_router",
    "communities_router",
]
