"""Typed failures raised by the cookbook services.

Client-facing kinds (validation, auth, permission, not found) are
deterministic rejections and are never retried. StorageError wraps
unexpected database failures; the surrounding transaction is always rolled
back before it reaches the caller.
"""

import functools
import logging

from django.db import DatabaseError

logger = logging.getLogger(__name__)


class CookbookError(Exception):
    """Base exception for cookbook service errors."""

    code = "error"

    def __init__(self, message: str):
        """Initialize the error.

        Args:
            message: Human readable reason for the rejection
        """
        self.message = message
        super().__init__(message)


class ValidationError(CookbookError):
    """Malformed or out-of-range input, or an ineligible relation target."""

    code = "validation"


class AuthError(CookbookError):
    """Unknown, inactive or wrongly-credentialed caller."""

    code = "auth"


class PermissionDeniedError(CookbookError):
    """Authenticated caller does not own the target row."""

    code = "permission"


class NotFoundError(CookbookError):
    """Referenced recipe, review or user does not exist."""

    code = "not_found"

    def __init__(self, resource: str, resource_id):
        """Initialize not found error.

        Args:
            resource: Kind of row that was looked up ("recipe", "review", "user")
            resource_id: Identifier that was not found
        """
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource.capitalize()} with ID {resource_id} not found")


class ConflictError(CookbookError):
    """Duplicate relation edge. Toggles absorb this instead of raising it."""

    code = "conflict"


class StorageError(CookbookError):
    """Unexpected failure from the underlying store."""

    code = "storage"

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize storage error.

        Args:
            message: Description of the failed operation
            cause: Original database exception
        """
        self.cause = cause
        super().__init__(message)


def storage_errors(func):
    """Log and re-raise database failures escaping ``func`` as StorageError.

    Apply outside ``transaction.atomic`` so the rollback has already happened
    by the time the error is translated.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception("Storage failure in %s", func.__qualname__)
            raise StorageError(f"{func.__name__} failed: {exc}", cause=exc) from exc
    return wrapper
