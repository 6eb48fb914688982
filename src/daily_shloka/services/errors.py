"""Domain exceptions raised by the reading, streak and social services.

All of these are client-correctable validation failures. The API layer maps
them onto HTTP status codes; nothing here is retried automatically.
"""


class ReadingError(RuntimeError):
    """Base exception for domain failures.

    This is the base class for all service-level exceptions.
    """


class NotFoundError(ReadingError):
    """Raised when a referenced user, set, verse or community does not exist."""


class ForbiddenError(ReadingError):
    """Raised when a user touches a resource owned by someone else."""


class OutOfSequenceError(ReadingError):
    """Raised when a verse is marked read before the verses preceding it."""


class ConflictError(ReadingError):
    """Raised when an operation would duplicate existing state."""


class ValidationError(ReadingError):
    """Raised when arguments are malformed."""


class CatalogEmptyError(ReadingError):
    """Raised when a daily set is requested before any verses are seeded."""
