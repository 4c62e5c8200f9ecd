"""
Centralized exception handlers for the FastAPI application.

Every error leaves the service as `{"message": ...}`:

    AppError subclasses     -> their own status and message (400, 401, 409)
    request body problems   -> 400 "validation failed" plus per-field errors
    StoreError              -> 500, details logged server-side only
    anything else           -> 500, logged with traceback

Submitted values, stack traces and store keys never reach the client.

Usage:
    app = FastAPI()
    setup_exception_handlers(app)
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from authsvc.core.errors import AppError, StoreError, ValidationError
from authsvc.core.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        # Drop the leading "body" segment; never echo error["input"]
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "invalid value"),
        })
    return errors


def _internal_error_response() -> JSONResponse:
    response = JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )
    # Unhandled errors skip RequestLoggingMiddleware on the way out, so echo
    # the id it bound here
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        error = ValidationError(errors=_field_errors(exc))
        logger.info("request_validation_failed", errors=error.errors)
        return JSONResponse(
            status_code=error.status_code,
            content={"message": error.message, "errors": error.errors},
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "store_failure",
            operation=exc.operation,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return _internal_error_response()

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", error_type=type(exc).__name__)
        return _internal_error_response()
