# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every failure the update endpoint can produce maps to one exception class
# with a fixed HTTP status. Clients only ever see {"error": "<message>"};
# the code is kept for logs.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PropertyAdminException(Exception):
    """
    Base exception for the Property Admin API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "PROPERTY_ADMIN_ERROR",
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
        return {"error": self.message}


# =============================================================================
# Auth Exceptions
# =============================================================================

class MissingTokenError(PropertyAdminException):
    """Raised when the Authorization header has no Bearer token."""

    def __init__(self):
        super().__init__(
            message="Unauthorized - missing token",
            code="AUTH_MISSING",
            status_code=401,
        )


class InvalidTokenError(PropertyAdminException):
    """Raised when Supabase Auth rejects the token or returns no user."""

    def __init__(self, reason: str | None = None):
        super().__init__(
            message="Invalid token",
            code="AUTH_INVALID",
            status_code=401,
            details={"reason": reason} if reason else None,
        )


class NotAdminError(PropertyAdminException):
    """Raised when the verified email is not in ADMIN_EMAILS."""

    def __init__(self, email: str):
        super().__init__(
            message="Forbidden - not an admin",
            code="AUTH_FORBIDDEN",
            status_code=403,
            details={"email": email},
        )


# =============================================================================
# Request Exceptions
# =============================================================================

class BadRequestError(PropertyAdminException):
    """Raised when the body lacks an action or a property object."""

    def __init__(self):
        super().__init__(
            message="Bad request",
            code="REQUEST_MALFORMED",
            status_code=400,
        )


class UnknownActionError(PropertyAdminException):
    """Raised for any action other than add, edit or delete."""

    def __init__(self, action: Any):
        super().__init__(
            message="Unknown action",
            code="UNKNOWN_ACTION",
            status_code=400,
            details={"action": action},
        )


# =============================================================================
# Server Exceptions
# =============================================================================

class ServerMisconfigurationError(PropertyAdminException):
    """Raised when a required Supabase secret is not configured."""

    def __init__(self, missing: list[str] | None = None):
        super().__init__(
            message="Server misconfiguration",
            code="CONFIG_MISSING",
            status_code=500,
            details={"missing": missing} if missing else None,
        )


class StorageReadError(PropertyAdminException):
    """Raised when the collection document cannot be downloaded."""

    def __init__(self, filename: str, error: str):
        super().__init__(
            message=f"Failed to read {filename}: {error}",
            code="STORAGE_READ_FAILED",
            status_code=500,
            details={"filename": filename, "error": error},
        )


class StorageUploadError(PropertyAdminException):
    """Raised when the collection document cannot be uploaded."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Upload failed: {error}",
            code="STORAGE_WRITE_FAILED",
            status_code=500,
            details={"error": error},
        )


class UnexpectedError(PropertyAdminException):
    """Wraps any other exception raised while handling a request."""

    def __init__(self, error: BaseException):
        super().__init__(
            message=error_message(error),
            code="INTERNAL_ERROR",
            status_code=500,
        )


def error_message(error: BaseException) -> str:
    """Message of an exception, or its type name when it has none."""
    return str(error) or type(error).__name__


# =============================================================================
# Exception Handlers
# =============================================================================

async def property_admin_exception_handler(
    request: Request,
    exc: PropertyAdminException
) -> JSONResponse:
    """
    Convert PropertyAdminException to JSON response.

    Returns {"error": message} with the exception's status code.
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
