# src/daily_shloka/services/__init__.py
"""Business logic services for the Daily Shloka application."""

from .errors import (
    CatalogEmptyError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    OutOfSequenceError,
    ReadingError,
    ValidationError,
)

__all__ = [
    "ReadingError",
    "NotFoundError",
    "ForbiddenError",
    "OutOfSequenceError",
    "ConflictError",
    "ValidationError",
    "CatalogEmptyError",
]
