# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response has the shape {"error": {"message": ..., "code": ...}}
# so clients can always find a human-readable message.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class StorefrontException(Exception):
    """
    Base exception for the Storefront API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "STOREFRONT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Validation Exceptions
# =============================================================================

class FieldValidationError(StorefrontException):
    """Raised when a required field is missing or not a string."""

    def __init__(self, field_name: str):
        super().__init__(
            message=f"{field_name} is required and must be a string",
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion=f"Provide a non-empty value for {field_name}",
            details={"field": field_name},
        )
        self.field_name = field_name


class InvalidRequestBodyError(StorefrontException):
    """Raised when the request body is not a JSON object."""

    def __init__(self, reason: str = "Request body must be a JSON object"):
        super().__init__(
            message=reason,
            code="INVALID_BODY",
            status_code=400,
            suggestion="Send a JSON object with Content-Type: application/json",
        )


# =============================================================================
# Upstream Exceptions
# =============================================================================

class UpstreamServiceError(StorefrontException):
    """Raised when the user service rejects or fails a request."""

    def __init__(
        self,
        operation: str,
        error: str,
        upstream_status: int | None = None,
    ):
        details: dict[str, Any] = {"operation": operation}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(
            message=error,
            code="UPSTREAM_ERROR",
            status_code=500,
            suggestion="Check the submitted details and try again later",
            details=details,
        )
        self.operation = operation
        self.upstream_status = upstream_status


# =============================================================================
# Exception Handlers
# =============================================================================

async def storefront_exception_handler(
    request: Request,
    exc: StorefrontException
) -> JSONResponse:
    """
    Convert StorefrontException to JSON response.

    Returns {"error": {...}} with:
    - message: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.to_dict()}
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle FastAPI request validation errors (e.g. malformed JSON).
    """
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "message": "Request could not be parsed",
                "code": "INVALID_BODY",
                "details": {"errors": str(exc)},
            }
        }
    )
