"""
Exception handlers
Every failure leaves the service as {success: false, message, errors?}.
Store errors are translated here by SQLSTATE so callers never see driver text.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api.config import settings
from blog_api.core.exceptions import (
    AppError,
    ConflictError,
    ServiceUnavailableError,
    ValidationError,
)
from blog_api.schemas.envelope import error_envelope
from blog_api.schemas.messages import describe_error

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
INVALID_TEXT_REPRESENTATION = "22P02"
STRING_DATA_RIGHT_TRUNCATION = "22001"
QUERY_CANCELED = "57014"

UNIQUE_CONSTRAINT_MESSAGES = {
    "users_email_key": "User with this email already exists",
    "users_username_key": "Username already taken",
    "posts_slug_key": "A post with this slug already exists",
}


def _constraint_name(orig) -> Optional[str]:
    diag = getattr(orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def translate_store_error(exc: DBAPIError) -> Optional[AppError]:
    """Map a driver error to the client-facing taxonomy; None means unclassified"""
    orig = exc.orig
    code = getattr(orig, "pgcode", None)

    if code == UNIQUE_VIOLATION:
        message = UNIQUE_CONSTRAINT_MESSAGES.get(_constraint_name(orig), "Resource already exists")
        return ConflictError(message)
    if code == FOREIGN_KEY_VIOLATION:
        return ValidationError(["Referenced resource does not exist"])
    if code == NOT_NULL_VIOLATION:
        return ValidationError(["Missing required field"])
    if code in (INVALID_TEXT_REPRESENTATION, STRING_DATA_RIGHT_TRUNCATION):
        return ValidationError(["Invalid field value"])
    if code == QUERY_CANCELED:
        return ServiceUnavailableError("Database request timed out")
    if code is None and isinstance(exc, OperationalError):
        return ServiceUnavailableError("Database unavailable")
    return None


def _render(exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.message, exc.errors),
        headers=exc.headers,
    )


def _server_error(exc: Exception) -> JSONResponse:
    content = error_envelope("Server error")
    if settings.is_development:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _render(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed body or query: report every pydantic error in client wording"""
    errors = [describe_error(error["loc"][1:], error["type"], error["msg"]) for error in exc.errors()]
    return _render(ValidationError(errors))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def store_error_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    translated = translate_store_error(exc)
    if translated is None:
        logger.error(f"Unhandled database error on {request.method} {request.url.path}", exc_info=exc)
        return _server_error(exc)
    logger.warning(f"Database error translated to {translated.status_code}: {translated.message}")
    return _render(translated)


async def pool_timeout_handler(request: Request, exc: PoolTimeoutError) -> JSONResponse:
    logger.warning(f"Connection pool exhausted on {request.method} {request.url.path}")
    return _render(ServiceUnavailableError("Database request timed out"))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _server_error(exc)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application"""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(DBAPIError, store_error_handler)
    app.add_exception_handler(PoolTimeoutError, pool_timeout_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
