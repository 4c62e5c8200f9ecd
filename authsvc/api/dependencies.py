"""
FastAPI dependencies.

The service graph is built once by create_app() and parked on app.state;
routes pull it from there so tests can swap pieces via dependency_overrides.
"""

from fastapi import Request

from authsvc.infrastructure.redis_client import UserStore
from authsvc.services.auth_service import AuthService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store
