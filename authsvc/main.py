"""
Auth API - Main Application Entry Point

A small authentication service:
- User registration with atomic username claims in Redis
- Login with bcrypt verification and enumeration-resistant errors
- Structured logging with request correlation
- Prometheus metrics
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from authsvc.api.exception_handlers import setup_exception_handlers
from authsvc.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from authsvc.api.router import api_router
from authsvc.core.config import Settings, get_settings
from authsvc.core.logging import get_logger, setup_logging
from authsvc.infrastructure.redis_client import UserStore
from authsvc.repositories.user_repository import RedisUserRepository
from authsvc.services.auth_service import AuthService
from authsvc.services.interfaces.password_hasher import PasswordHasher
from authsvc.services.password_service import BcryptPasswordHasher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: connect Redis on startup, release it on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings)
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Fail fast: without Redis there is nothing to authenticate against
    store: UserStore = app.state.user_store
    await store.connect()
    logger.info("redis_ready")

    try:
        yield
    finally:
        await store.shutdown()
        logger.info("application_shutdown")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[UserStore] = None,
    hasher: Optional[PasswordHasher] = None,
) -> FastAPI:
    """
    Build the application and its service graph.

    Every collaborator can be passed in; anything omitted is built from
    settings. Nothing connects until the lifespan starts.
    """
    settings = settings or get_settings()
    store = store or UserStore(settings)
    hasher = hasher or BcryptPasswordHasher(rounds=settings.BCRYPT_ROUNDS)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="User registration and login backed by Redis",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.user_store = store
    app.state.auth_service = AuthService(RedisUserRepository(store), hasher)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    setup_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()
