"""
Error taxonomy shared by every layer.

AppError subclasses are the only errors the HTTP boundary turns into a
non-500 response; their message is what the client sees. Everything else
(store faults included) ends up as a generic 500.
"""

from typing import Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors that map 1:1 onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "username already exists"


class UnauthorizedError(AppError):
    # Same message for unknown user and wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "invalid credentials"


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "validation failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[list[dict]] = None):
        super().__init__(message)
        self.errors = errors or []


class DuplicateUsernameError(Exception):
    """Raised by the repository when another caller already owns the username."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username already claimed: {username}")


class StoreError(Exception):
    """The key-value store failed mid-operation."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class StoreUnavailableError(StoreError):
    """The key-value store could not be reached (connection lost, timeout)."""
