"""
Error taxonomy for the cat registry.

Every failure path raises one of five kinds. The HTTP status is attached
here so the error handlers stay the single place that writes error bodies.
"""
import functools
import logging
from enum import Enum

from fastapi import status
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Classification carried by every registry error."""
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"


class CatRegistryError(Exception):
    """Base exception for all registry errors."""

    kind: ErrorKind = ErrorKind.STORE_FAILURE
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        """Convert to the error envelope returned to clients."""
        return {
            "error": {
                "kind": self.kind.value,
                "message": self.message,
            }
        }


class Unauthenticated(CatRegistryError):
    """No principal present where one is required."""
    kind = ErrorKind.UNAUTHENTICATED
    http_status = status.HTTP_401_UNAUTHORIZED


class Forbidden(CatRegistryError):
    """Principal present but lacks the required role."""
    kind = ErrorKind.FORBIDDEN
    http_status = status.HTTP_403_FORBIDDEN


class ValidationFailed(CatRegistryError):
    """Input fields fail declared constraints."""
    kind = ErrorKind.VALIDATION_FAILED
    http_status = status.HTTP_400_BAD_REQUEST


class NotFound(CatRegistryError):
    """No record matches the id (and ownership, when scoped)."""
    kind = ErrorKind.NOT_FOUND
    http_status = status.HTTP_404_NOT_FOUND


class StoreFailure(CatRegistryError):
    """Persistence operation failed unexpectedly."""
    kind = ErrorKind.STORE_FAILURE
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


def format_validation_errors(errors: list[dict]) -> str:
    """
    Aggregate pydantic-style error dicts into one message.

    Each entry becomes "<msg>: <field>", joined with ", ".
    """
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
        field = ".".join(loc) or "request"
        parts.append(f"{error.get('msg', 'Invalid value')}: {field}")
    return ", ".join(parts)


def translate_store_errors(func):
    """
    Re-raise driver errors from an async service method as StoreFailure.

    Errors the method handles itself (e.g. DuplicateKeyError) never reach
    this wrapper. Nothing is retried.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except PyMongoError as e:
            logger.error(f"Store failure in {func.__qualname__}: {e}")
            raise StoreFailure(f"Database operation failed: {func.__name__}") from e
    return wrapper
