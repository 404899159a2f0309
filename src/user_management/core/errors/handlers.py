"""Exception handlers translating errors into HTTP responses.

API routes (under ``/api``) receive a JSON body of the form
``{"message": ..., "detail": ...}``; ``detail`` carries the traceback only in
development. Browser routes receive the rendered ``error.html`` page with
the same status code.
"""

import traceback
from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from user_management.config import Settings, get_settings
from user_management.core.constants import API_PREFIX
from user_management.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class FieldError(BaseModel):
    """Represents a single field validation error."""

    field: str
    message: str
    type: str | None = None


class ErrorResponse(BaseModel):
    """Error response schema.

    Attributes:
        message: Safe, human-readable summary
        detail: Stack trace, only populated in development
        error_code: Machine-readable error code
        errors: List of field-level errors (for validation errors)
        trace_id: Request trace ID for debugging
    """

    message: str
    detail: str | None = None
    error_code: str | None = None
    errors: list[FieldError] | None = None
    trace_id: str | None = None

    model_config = {"extra": "allow"}


def _get_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def _get_trace_id(request: Request) -> str | None:
    """Extract trace ID from request state if available."""
    return getattr(request.state, "trace_id", None)


def _get_detail(request: Request, exc: Exception) -> str | None:
    """Format the stack trace when running in development."""
    if not _get_settings(request).is_development:
        return None
    return "".join(traceback.format_exception(exc))


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith(API_PREFIX)


def _error_response(
    request: Request,
    status_code: int,
    body: dict[str, Any],
) -> Response:
    templates = getattr(request.app.state, "templates", None)
    if templates is not None and not _is_api_request(request):
        return templates.TemplateResponse(
            request,
            "error.html",
            {"status_code": status_code, "error": body},
            status_code=status_code,
        )
    return JSONResponse(status_code=status_code, content=body)


async def app_exception_handler(request: Request, exc: AppException) -> Response:
    """Handle application-specific exceptions.

    Converts AppException subclasses to error responses with their own
    status code and message.
    """
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=str(request.url.path),
        details=exc.details,
    )

    content: dict[str, Any] = ErrorResponse(
        message=exc.message,
        detail=_get_detail(request, exc),
        error_code=exc.error_code,
        trace_id=_get_trace_id(request),
    ).model_dump(exclude_none=True)

    # Add any additional details from the exception
    for key, value in exc.details.items():
        if key not in content:
            content[key] = value

    return _error_response(request, exc.status_code, content)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Handle request validation errors.

    Converts FastAPI/Pydantic validation errors to a 400 response with
    field-level error information.
    """
    errors: list[FieldError] = []

    for error in exc.errors():
        # Build field path from location
        loc = error.get("loc", ())
        # Skip "body"/"query"/"path" prefix in field path
        field_parts = [str(part) for part in loc if part not in ("body", "query", "path")]
        field = ".".join(field_parts) if field_parts else "unknown"

        errors.append(
            FieldError(
                field=field,
                message=error.get("msg", "Invalid value"),
                type=error.get("type"),
            )
        )

    logger.warning(
        "validation_error",
        path=str(request.url.path),
        error_count=len(errors),
    )

    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(
            message="Request validation failed",
            error_code="validation_error",
            errors=errors,
            trace_id=_get_trace_id(request),
        ).model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected exceptions.

    Catches all unhandled exceptions and returns a generic 500 error.
    The actual error is logged; its stack trace is only exposed in
    development.
    """
    logger.exception(
        "unhandled_exception",
        method=request.method,
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )

    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            message=UNEXPECTED_ERROR_MESSAGE,
            detail=_get_detail(request, exc),
            error_code="internal_error",
            trace_id=_get_trace_id(request),
        ).model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Call this function during app initialization:

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
