"""
Error taxonomy shared by services and controllers.

Every error carries the HTTP status and machine-readable code it maps to;
the handlers registered in ``grouphub.main`` turn them into ``ErrorResponse``
bodies.
"""
from typing import Optional

from fastapi import status


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(ServiceError):
    """A required field is missing or a value is malformed."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class AuthError(ServiceError):
    """No usable caller identity on the request."""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_REQUIRED"


class ForbiddenError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(ServiceError):
    """The write collides with existing state, e.g. a duplicate membership."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "CONFLICT"


class StoreError(ServiceError):
    """The database failed for a reason the caller cannot fix."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORE_ERROR"
