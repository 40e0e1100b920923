"""
Domain exceptions for the storefront backend.

Each exception carries the HTTP status code it maps to, so the API layer can
render every failure with one handler.
"""
from fastapi import status


class StorefrontError(Exception):
    """Base exception for the storefront backend."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Request is missing required fields or carries invalid values."""
    status_code = 422
    default_message = "Missing required fields"


class ConflictError(StorefrontError):
    """Entity already exists."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class UnauthorizedError(StorefrontError):
    """Bad credentials or no authenticated session."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class NotFoundError(StorefrontError):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class PersistenceError(StorefrontError):
    """Database or session store is unavailable."""
    default_message = "Server error"


class SessionPersistenceError(PersistenceError):
    """Session could not be written after a successful login."""
    default_message = "Could not save session"


class LogoutError(PersistenceError):
    """Session could not be destroyed."""
    default_message = "Could not log out"


class SessionStoreError(Exception):
    """Raised by session store backends when the underlying store fails."""
    pass
