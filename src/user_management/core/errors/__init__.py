"""Error handling module."""

from user_management.core.errors.exceptions import (
    AppException,
    BadRequestError,
    NotFoundError,
)
from user_management.core.errors.handlers import (
    ErrorResponse,
    FieldError,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "BadRequestError",
    # Handlers
    "ErrorResponse",
    "FieldError",
    "NotFoundError",
    "register_exception_handlers",
]
