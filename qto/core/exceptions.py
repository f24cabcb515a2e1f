"""
Global exception handling for the application.
Every error leaves the API in the same result shape as a successful action:
a human-readable message plus a "success"/"error" discriminator.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ValidationError(AppError):
    """A required field is missing or malformed."""
    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class ConflictError(AppError):
    """Uniqueness violation."""
    def __init__(self, message: str = "Resource already exists", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class AuthenticationError(AppError):
    """No session, or the session could not be verified."""
    def __init__(self, message: str = "User not authenticated. Please login.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class InvalidSessionError(AuthenticationError):
    """Session token is forged, malformed or expired."""
    def __init__(self, reason: str = "invalid"):
        self.reason = reason
        super().__init__("Session is invalid or has expired. Please login again.")


class AuthorizationError(AppError):
    """Access policy denied the action. The message never names the resource owner."""
    def __init__(self, message: str = "You do not have permission to perform this action.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class ParseError(AppError):
    """Uploaded document could not be read."""
    def __init__(self, message: str = "Failed to read the uploaded file.", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class StorageError(AppError):
    """Underlying store failure. Diagnostic detail goes to the log, not the message."""
    def __init__(self, message: str = "Database error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


def _error_body(request: Request, code: str, message: str, errors: Optional[Dict[str, Any]] = None) -> dict:
    return {
        "message": message,
        "type": "error",
        "code": code,
        "errors": errors or {},
        "path": request.url.path,
    }


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request-body validation failures in the common error shape."""
    errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors[field or "body"] = error.get("msg", "Invalid value")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(request, "ValidationError", "Submitted data is invalid.", errors),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.__class__.__name__, exc.message, exc.details),
        )

    logger.exception("Unexpected error occurred", path=request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            request,
            "InternalServerError",
            "An unexpected error occurred. Please try again later.",
        ),
    )
