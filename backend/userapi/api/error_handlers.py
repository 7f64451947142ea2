"""Error Handlers - global exception handlers mapping failures to JSON bodies.

Invariants:
    - UserApiError -> status/body from core.errors.error_to_response
    - RequestValidationError -> VALIDATION_ERROR listing every offending field
    - Exception (catch-all) -> INTERNAL_SERVER_ERROR, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (UserApiError), validation (pydantic), catch-all
    - Pydantic errors are converted into core.errors.ValidationError so every
      response goes through the same mapping function
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from userapi.core.errors import (
    FieldError, InternalServerError, UserApiError, ValidationError,
    error_to_response,
)

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = ("body", "path", "query")


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _error_response(error: UserApiError) -> JSONResponse:
    status_code, body = error_to_response(error)
    return JSONResponse(status_code=status_code, content=body)


def _register_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UserApiError)
    async def api_error_handler(request: Request, exc: UserApiError):
        """Handle all classified domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"{exc.code}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return _error_response(exc)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle pydantic validation errors for body, path and query."""
        error = to_validation_error(exc.errors())
        logger.warning(
            f"Validation error on {request.url.path}: {error.message}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return _error_response(error)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_SERVER_ERROR", "path": request.url.path},
        )
        return _error_response(InternalServerError())


def to_validation_error(errors) -> ValidationError:
    """Build one ValidationError carrying every pydantic error."""
    return ValidationError([
        FieldError(field=_field_name(e), message=e["msg"]) for e in errors
    ])


def _field_name(error: dict) -> str:
    if error.get("type") == "json_invalid":
        return "body"
    parts = [str(p) for p in error.get("loc", ())]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "body"
