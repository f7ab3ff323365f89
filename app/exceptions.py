# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the dashboard service.
# Every error carries a human-readable message, a machine-readable code and,
# where possible, a suggestion on how to fix it.
#
# Dashboard fetch errors (configuration, session, endpoint, format) are
# caught at the fetch boundary and shown as section error text. Auth errors
# propagate to the API exception handler.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class DashboardException(Exception):
    """
    Base exception for the dashboard service.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "DASHBOARD_ERROR",
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
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Fetch Exceptions
# =============================================================================

class ConfigurationError(DashboardException):
    """Raised when a required setting (e.g. SUPABASE_URL) is missing."""

    def __init__(self, setting: str):
        super().__init__(
            message=f"{setting} missing",
            code="CONFIGURATION_ERROR",
            status_code=500,
            suggestion=f"Set {setting} in your environment or .env file",
            details={"setting": setting}
        )


class SessionRetrievalError(DashboardException):
    """
    Raised when the current session could not be retrieved.

    This is different from "not logged in", which is a normal empty state.
    """

    def __init__(self, error: str):
        super().__init__(
            message=error,
            code="SESSION_ERROR",
            status_code=401,
            suggestion="Sign in again to refresh your session",
            details={"error": error}
        )


class DataEndpointError(DashboardException):
    """Raised when the data endpoint responds with a non-success status or is unreachable."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None):
        details: dict[str, Any] = {}
        if status is not None:
            details["status"] = status
        super().__init__(
            message=message,
            code="DATA_ENDPOINT_ERROR",
            status_code=502,
            suggestion="Try again later or contact support if the issue persists",
            details=details
        )
        self.status = status
        self.body = body

    @classmethod
    def from_response(cls, status: int, body: str) -> "DataEndpointError":
        """Build the error for an HTTP failure, keeping the raw body in the message."""
        return cls(f"HTTP {status}: {body}", status=status, body=body)


class ResponseFormatError(DashboardException):
    """Raised when the data endpoint body is not JSON or has an unexpected shape."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="RESPONSE_FORMAT_ERROR",
            status_code=502,
            suggestion="Check that the data function returns an array or {\"data\": [...]}",
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthValidationError(DashboardException):
    """Raised when auth input fails validation before reaching the provider."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            code="AUTH_VALIDATION_ERROR",
            status_code=400,
            details={"field": field} if field else None
        )


class AuthProviderError(DashboardException):
    """Raised when the auth provider rejects an operation."""

    def __init__(self, message: str, operation: str):
        super().__init__(
            message=message,
            code="AUTH_PROVIDER_ERROR",
            status_code=401,
            details={"operation": operation}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def dashboard_exception_handler(
    request: Request,
    exc: DashboardException
) -> JSONResponse:
    """
    Convert DashboardException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
