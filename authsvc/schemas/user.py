"""
Pydantic schemas for auth request/response validation.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=8, max_length=100)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: Any) -> Any:
        # Usernames are trimmed but otherwise case-sensitive
        return _strip(value)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: Any) -> Any:
        return _strip(value)


class AuthResponse(BaseModel):
    message: str
    username: str


class ErrorResponse(BaseModel):
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    errors: list[FieldError] = []
