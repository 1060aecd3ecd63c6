"""Error Handlers: global exception handlers for the Users API.

Invariants:
    - UsersApiError → status from the error, body from to_response()
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → never leaks internal details
    - Every error body carries timestamp, status, error (reason phrase), message

Design Decisions:
    - Three-layer handler: domain (UsersApiError), validation (Pydantic), catch-all (Exception)
    - Malformed dates get the ISO-format hint as the top-level message
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from users_api.core.errors import UsersApiError

logger = logging.getLogger(__name__)

ISO_DATE_HINT = "Please use ISO date format (YYYY-MM-DD)."


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_users_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_users_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UsersApiError)
    async def users_api_error_handler(request: Request, exc: UsersApiError):
        """Handle all Users API domain errors."""
        logger.warning(
            f"UsersApiError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "email": exc.context.email,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An unexpected error occurred", "INTERNAL_ERROR",
            ),
        )


def _error_body(http_status: int, message: str, code: str) -> dict:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": http_status,
        "error": HTTPStatus(http_status).phrase,
        "message": message,
        "code": code,
    }


def _is_date_format_error(error: dict) -> bool:
    return error["type"].startswith("date_") and error["type"] not in (
        "date_past", "date_future",
    )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    errors = exc.errors()
    message = (
        ISO_DATE_HINT if any(_is_date_format_error(e) for e in errors)
        else "Invalid request data"
    )
    body = _error_body(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR")
    body["details"] = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
    return body
