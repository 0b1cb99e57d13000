# app/core/errors.py
"""
Application error taxonomy.

Every class is an HTTPException so services raise them exactly like they
would raise HTTPException, and the handlers in app.main render them into the
`{success, message, error?}` envelope.
"""
from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, error: str | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
        )
        self.error = error

    @property
    def message(self) -> str:
        return str(self.detail)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AppError):
    """Duplicate entity (e.g. email already registered)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class AuthError(AppError):
    """Missing token or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class InvalidTokenError(AuthError):
    """Token present but malformed, expired or wrongly signed."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"


class NotFoundError(AppError):
    """Entity absent or not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ExternalServiceError(AppError):
    """A collaborator (payment gateway) refused the request."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "External service failed"


class UnexpectedError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
