"""
Authentication endpoints: register and login.
"""

from fastapi import APIRouter, Depends, status

from authsvc.api.dependencies import get_auth_service
from authsvc.schemas.user import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    ValidationErrorResponse,
)
from authsvc.services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user account."""
    result = await auth_service.register(data.username, data.password)
    return AuthResponse(message="user registered", username=result.username)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    },
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Check a username and password."""
    result = await auth_service.login(data.username, data.password)
    return AuthResponse(message="login successful", username=result.username)
