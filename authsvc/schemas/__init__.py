from authsvc.schemas.user import (
    AuthResponse,
    ErrorResponse,
    FieldError,
    LoginRequest,
    RegisterRequest,
    ValidationErrorResponse,
)

__all__ = [
    "RegisterRequest", "LoginRequest", "AuthResponse",
    "ErrorResponse", "FieldError", "ValidationErrorResponse",
]
