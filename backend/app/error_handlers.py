"""
Custom exception handlers for FastAPI.

Security:
- Request IDs are logged server-side for tracing but NOT exposed to clients
- Generic error messages for 500 errors to prevent information disclosure
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from skillshare.exceptions import ConflictError, SkillShareError
from skillshare.logging import get_logger

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    """
    Get the current request ID from context.

    Used for server-side logging only - NOT exposed to clients.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("request_id", "-")


def _response_payload(detail: str, status_code: int) -> dict:
    """Create error response payload. Never includes the request id."""
    return {
        "detail": detail,
        "status_code": status_code,
    }


def _error_response(detail: str, status_code: int, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=_response_payload(detail, status_code),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SkillShareError)
    async def skillshare_exception_handler(request: Request, exc: SkillShareError):
        logger.warning(
            "domain_error",
            error_type=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return _error_response(exc.message, exc.status_code, headers)

    @app.exception_handler(StaleDataError)
    async def stale_data_handler(request: Request, exc: StaleDataError):
        # A single-row update lost a version race; the client may simply retry
        logger.warning("stale_write", error=str(exc), request_id=_get_request_id())
        return _error_response(ConflictError.default_message, ConflictError.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return _error_response(str(exc.detail), exc.status_code, getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning("validation_error", errors=errors, request_id=_get_request_id())
        return JSONResponse(
            status_code=422,
            content={
                **_response_payload("Validation error", 422),
                "errors": errors,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return _error_response("Internal server error", 500)
