"""Daily verse reading, streak and leaderboard backend."""

__version__ = "0.1.0"
