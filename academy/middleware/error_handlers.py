"""Exception handlers producing one JSON error envelope for the whole API.

    {"error": {"category": ..., "code": ..., "detail": ...,
               "suggestions": [...], "metadata": {...}}}

``suggestions`` and ``metadata`` appear only when set. Storage failures in the
analytics routes come out here like any other error; nothing is swallowed.
"""

import logging
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from psycopg import errors as pg_errors
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from academy.auth.exceptions import AuthenticationError
from academy.exceptions import ResourceNotFoundError, ValidationError


logger = logging.getLogger(__name__)


class ErrorCategory(StrEnum):
    VALIDATION = "VALIDATION_ERROR"
    AUTHENTICATION = "AUTHENTICATION_ERROR"
    DATABASE = "DATABASE_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INTERNAL = "INTERNAL_ERROR"


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    DB_CONNECTION_FAILED = "DB_CONNECTION_FAILED"
    DB_CONSTRAINT_VIOLATION = "DB_CONSTRAINT_VIOLATION"
    DB_UNIQUE_VIOLATION = "DB_UNIQUE_VIOLATION"
    DB_FOREIGN_KEY_VIOLATION = "DB_FOREIGN_KEY_VIOLATION"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL_ERROR"


def format_error_response(
    category: ErrorCategory,
    code: ErrorCode,
    detail: str,
    status_code: int,
    suggestions: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build the error envelope."""
    error: dict[str, Any] = {"category": category, "code": code, "detail": detail}
    if suggestions:
        error["suggestions"] = suggestions
    if metadata:
        error["metadata"] = metadata
    return JSONResponse(status_code=status_code, content={"error": error})


async def handle_not_found_errors(_request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    return format_error_response(
        ErrorCategory.RESOURCE_NOT_FOUND,
        ErrorCode.NOT_FOUND,
        str(exc),
        status.HTTP_404_NOT_FOUND,
        metadata={"resource_type": exc.resource_type, "resource_id": str(exc.resource_id)},
    )


async def handle_validation_errors(request: Request, exc: Exception) -> JSONResponse:
    """Schema failures become 422 with per-field errors; domain validation becomes 400."""
    logger.info(f"Validation error on {request.method} {request.url.path}: {exc}")

    if isinstance(exc, (RequestValidationError, PydanticValidationError)):
        fields = [
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        return format_error_response(
            ErrorCategory.VALIDATION,
            ErrorCode.INVALID_INPUT,
            "Invalid input data",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            metadata={"errors": fields},
        )

    issues = exc.issues if isinstance(exc, ValidationError) else []
    return format_error_response(
        ErrorCategory.VALIDATION,
        ErrorCode.INVALID_INPUT,
        str(exc),
        status.HTTP_400_BAD_REQUEST,
        metadata={"issues": issues} if issues else None,
    )


async def handle_authentication_errors(request: Request, exc: HTTPException) -> JSONResponse:
    """Missing, invalid, expired or revoked credentials."""
    client_host = request.client.host if request.client else "unknown"
    logger.warning(f"Authentication failed for {request.method} {request.url.path} from {client_host}: {exc.detail}")
    return format_error_response(
        ErrorCategory.AUTHENTICATION,
        ErrorCode.AUTH_REQUIRED,
        str(exc.detail),
        status.HTTP_401_UNAUTHORIZED,
        suggestions=["Log in again to get a new token"],
    )


def _classify_database_error(exc: SQLAlchemyError) -> tuple[ErrorCode, str, int]:
    orig = getattr(exc, "orig", None)

    if isinstance(orig, pg_errors.UniqueViolation) or (
        isinstance(exc, IntegrityError) and "unique" in str(exc).lower()
    ):
        return ErrorCode.DB_UNIQUE_VIOLATION, "This resource already exists", status.HTTP_409_CONFLICT
    if isinstance(orig, pg_errors.ForeignKeyViolation):
        return ErrorCode.DB_FOREIGN_KEY_VIOLATION, "Referenced resource does not exist", status.HTTP_400_BAD_REQUEST
    if isinstance(orig, (pg_errors.NotNullViolation, pg_errors.CheckViolation)) or isinstance(exc, IntegrityError):
        return ErrorCode.DB_CONSTRAINT_VIOLATION, "Required data is missing or invalid", status.HTTP_400_BAD_REQUEST
    if isinstance(exc, OperationalError):
        return ErrorCode.DB_CONNECTION_FAILED, "Database connection error", status.HTTP_503_SERVICE_UNAVAILABLE
    return ErrorCode.INTERNAL, "A database error occurred", status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_database_errors(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Log the failure with its traceback and answer with a generic body."""
    logger.exception(
        f"Database error on {request.method} {request.url.path}: {type(exc).__name__}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    code, detail, status_code = _classify_database_error(exc)
    suggestions = ["Please try again later"] if status_code >= 500 else None
    return format_error_response(ErrorCategory.DATABASE, code, detail, status_code, suggestions=suggestions)


def log_error_context(request: Request, exc: Exception, error_id: UUID) -> None:
    """Log request context for an unhandled error."""
    context = {
        "error_id": str(error_id),
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client_host": request.client.host if request.client else "unknown",
        "user_id": getattr(request.state, "user_id", None),
        "error_type": type(exc).__name__,
    }
    logger.error("Request failed", extra=context, exc_info=exc)


async def handle_unexpected_errors(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log with an error id the client can quote, expose nothing else."""
    error_id = uuid4()
    log_error_context(request, exc, error_id)
    return format_error_response(
        ErrorCategory.INTERNAL,
        ErrorCode.INTERNAL,
        "An unexpected error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        suggestions=["Please try again later", "If the problem persists, contact support with the error ID"],
        metadata={"error_id": str(error_id)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler above to ``app``."""
    app.add_exception_handler(ResourceNotFoundError, handle_not_found_errors)
    for exc_type in (RequestValidationError, PydanticValidationError, ValidationError):
        app.add_exception_handler(exc_type, handle_validation_errors)
    # Covers every subclass: invalid credentials, missing/invalid/expired/revoked tokens
    app.add_exception_handler(AuthenticationError, handle_authentication_errors)
    app.add_exception_handler(SQLAlchemyError, handle_database_errors)
    app.add_exception_handler(Exception, handle_unexpected_errors)
