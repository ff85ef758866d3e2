"""
Standardized Error Handling for Cellarbook

Provides consistent error handling patterns across all modules.

Failures fall into two categories. Validation errors block a submission
locally before any network call. Backend errors cover every read or write
failure against Supabase and carry one generic message per operation; the
underlying cause is logged and chained but never shown to the user.
"""

import logging
from typing import Iterable, List, NoReturn, Optional

logger = logging.getLogger(__name__)


class CellarError(Exception):
    """Base exception for Cellarbook."""
    pass


class FormValidationError(CellarError):
    """Required field missing or value out of range; nothing was sent."""

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.fields: List[str] = list(fields or [])


class BackendError(CellarError):
    """A Supabase read or write failed."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.operation = operation


class PermissionDeniedError(CellarError):
    """The signed-in user lacks the role required for this action."""
    pass


class DeleteRefusedError(CellarError):
    """A row still has dependants, or its dependants could not be checked."""
    pass


def user_message(operation: str) -> str:
    """Generic user-facing message for a failed operation."""
    return f"Failed to {operation}"


def handle_backend_error(error: Exception, operation: str) -> NoReturn:
    """
    Standardized backend error handling.

    Args:
        error: Exception raised by the Supabase client
        operation: Description of operation, e.g. "add wine"

    Raises:
        BackendError: always, chained to the original error
    """
    if isinstance(error, BackendError):
        raise error

    error_type = type(error).__name__
    logger.error(f"Backend error during {operation}: {error_type} - {error}")
    raise BackendError(user_message(operation), operation=operation) from error


class backend_call:
    """
    Context manager converting any failure inside the block into BackendError.

    Usage:
        with backend_call("load your ratings"):
            res = sb.table("wine_ratings").select("*").execute()
    """

    def __init__(self, operation: str):
        self.operation = operation

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            return False
        if not issubclass(exc_type, Exception) or issubclass(exc_type, CellarError):
            return False
        handle_backend_error(exc_val, self.operation)


__all__ = [
    'CellarError',
    'FormValidationError',
    'BackendError',
    'PermissionDeniedError',
    'DeleteRefusedError',
    'user_message',
    'handle_backend_error',
    'backend_call',
]
