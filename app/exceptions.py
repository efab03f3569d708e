# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every error carries a kind (validation, decode, downstream). The HTTP
# status and the log level are derived from the kind, so route handlers
# just raise and let the registered handlers build the response.
# =============================================================================

import logging
from enum import Enum
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """
    Categories of request failure.

    - validation: the client sent something unusable (400-range)
    - decode: an encoded form field could not be parsed
    - downstream: Supabase storage or database call failed
    """
    VALIDATION = "validation"
    DECODE = "decode"
    DOWNSTREAM = "downstream"


# Default status per kind; subclasses may override (e.g. 413)
_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.DECODE: 500,
    ErrorKind.DOWNSTREAM: 500,
}


class PlayspaceException(Exception):
    """
    Base exception for the Playspaces API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.DOWNSTREAM,
        code: str = "PLAYSPACE_ERROR",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.code = code
        self.status_code = status_code or _STATUS_BY_KIND[kind]
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingFieldError(PlayspaceException):
    """Raised when a required playspace field is absent or empty."""

    def __init__(self, field: str):
        super().__init__(
            message=f"{field.capitalize()} is required",
            kind=ErrorKind.VALIDATION,
            code="MISSING_FIELD",
            details={"field": field},
        )


class InvalidFieldError(PlayspaceException):
    """Raised when a field is present but has an unusable value."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=message,
            kind=ErrorKind.VALIDATION,
            code="INVALID_FIELD",
            details={"field": field},
        )


class InvalidFileTypeError(PlayspaceException):
    """Raised when an uploaded image has a disallowed content type."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            message="Invalid file type. Only JPEG, PNG and JPG are allowed.",
            kind=ErrorKind.VALIDATION,
            code="INVALID_FILE_TYPE",
            details={"content_type": content_type, "allowed_types": allowed},
        )


class FileTooLargeError(PlayspaceException):
    """Raised when an uploaded image exceeds the size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            kind=ErrorKind.VALIDATION,
            code="FILE_TOO_LARGE",
            status_code=413,
            details={"size_mb": round(size_mb, 2), "max_mb": max_mb},
        )


# =============================================================================
# Decode Exceptions
# =============================================================================

class FieldDecodeError(PlayspaceException):
    """Raised when a JSON-encoded form field cannot be decoded."""

    def __init__(self, field: str, error: str):
        super().__init__(
            message=f"Could not decode {field}: {error}",
            kind=ErrorKind.DECODE,
            code="DECODE_ERROR",
            details={"field": field},
        )


# =============================================================================
# Downstream Exceptions
# =============================================================================

class StorageUploadError(PlayspaceException):
    """Raised when an image upload to Supabase Storage fails."""

    def __init__(self, error: str, path: str | None = None):
        super().__init__(
            message=error,
            kind=ErrorKind.DOWNSTREAM,
            code="STORAGE_UPLOAD_ERROR",
            details={"path": path} if path else None,
        )


class DatabaseError(PlayspaceException):
    """Raised when a playspaces table operation fails."""

    def __init__(self, error: str, operation: str):
        super().__init__(
            message=error,
            kind=ErrorKind.DOWNSTREAM,
            code="DATABASE_ERROR",
            details={"operation": operation},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def playspace_exception_handler(
    request: Request,
    exc: PlayspaceException
) -> JSONResponse:
    """
    Convert PlayspaceException to JSON response.

    Logging follows the error kind: client mistakes at INFO, undecodable
    fields at WARNING, downstream failures at ERROR with traceback.
    """
    route = f"{request.method} {request.url.path}"
    if exc.kind is ErrorKind.VALIDATION:
        logger.info(f"{route} rejected: {exc.message}")
    elif exc.kind is ErrorKind.DECODE:
        logger.warning(f"{route} decode failure: {exc.message}")
    else:
        logger.error(f"{route} failed: {exc.message}", exc_info=exc)

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Last-resort handler: log with traceback and surface the message as a 500."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc),
            "code": "INTERNAL_ERROR",
        }
    )
