# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response is a JSON body with a human-readable "message" and a
# machine-readable "code". Internal details never reach the client.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ShowcaseException(Exception):
    """
    Base exception for the Showcase API.

    All custom exceptions inherit from this class and carry the HTTP
    status they map to.
    """

    def __init__(
        self,
        message: str,
        code: str = "SHOWCASE_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class ValidationFailedError(ShowcaseException):
    """Raised when a required field is missing or blank."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"field": field} if field else None,
        )


class UnauthenticatedError(ShowcaseException):
    """Raised when the bearer token is missing or cannot be verified."""

    def __init__(self, message: str = "Invalid auth token"):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
            status_code=401,
        )


class ForbiddenError(ShowcaseException):
    """
    Raised when a scoped mutation matched no rows.

    Covers both "not yours" and "does not exist"; the two are not told apart.
    """

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
        )


# =============================================================================
# Lookup Exceptions
# =============================================================================

class ProjectNotFoundError(ShowcaseException):
    """Raised when a project ID doesn't exist."""

    def __init__(self, project_id: int):
        super().__init__(
            message="Project not found",
            code="PROJECT_NOT_FOUND",
            status_code=404,
            details={"project_id": project_id},
        )


class UserNotFoundError(ShowcaseException):
    """Raised when the caller has no local profile row yet."""

    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id},
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class FileTooLargeError(ShowcaseException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            details={"size_mb": round(size_mb, 2), "max_mb": max_mb},
        )


class StorageUploadError(ShowcaseException):
    """Raised when file upload to storage fails."""

    def __init__(self, message: str = "Upload failed"):
        super().__init__(
            message=message,
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
        )


# =============================================================================
# Internal Exceptions
# =============================================================================

class DatabaseError(ShowcaseException):
    """Raised when a query fails. The message names the operation only."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="DATABASE_ERROR",
            status_code=500,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def showcase_exception_handler(
    request: Request,
    exc: ShowcaseException
) -> JSONResponse:
    """Convert ShowcaseException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request parsing errors (bad JSON, non-integer path ids).

    Reported as 400 with the first offending location.
    """
    errors = exc.errors()
    location = None
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
    return JSONResponse(
        status_code=400,
        content={
            "message": f"Invalid request: {location}" if location else "Invalid request",
            "code": "VALIDATION_ERROR",
        }
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions without exposing internals."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
