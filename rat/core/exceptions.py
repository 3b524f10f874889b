"""
Exception Hierarchy

Defines all exceptions used by the RAT server.
Exceptions are organized by domain and include context for debugging.

Design decisions:
- All exceptions inherit from RatError for easy catching
- Exceptions carry structured context, not just messages
- Error codes enable programmatic handling at the transport boundary
"""

from typing import Any


class RatError(Exception):
    """
    Base exception for all RAT errors.

    Provides structured error information including:
    - Human-readable message
    - Machine-readable error code
    - Additional context for debugging
    """

    error_code: str = "RAT_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.error_code
        self.context = context or {}
        self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for error reports."""
        return {
            "error": self.code,
            "message": self.message,
            "context": self.context,
        }


# ============================================================
# Configuration Errors
# ============================================================

class ConfigurationError(RatError):
    """Error in configuration or settings."""

    error_code = "CONFIGURATION_ERROR"


class MissingCredentialError(ConfigurationError):
    """Required credential not found."""

    error_code = "MISSING_CREDENTIAL"


# ============================================================
# Request Errors
# ============================================================

class ValidationError(RatError):
    """Caller input failed validation. Raised before any backend call."""

    error_code = "INVALID_PARAMS"


class ToolNotFoundError(RatError):
    """Requested tool does not exist."""

    error_code = "METHOD_NOT_FOUND"


# ============================================================
# Backend Errors
# ============================================================

class BackendError(RatError):
    """A model backend failed at the transport or vendor level."""

    error_code = "BACKEND_ERROR"


class BackendConnectionError(BackendError):
    """Failed to connect to the backend."""

    error_code = "BACKEND_CONNECTION_ERROR"


class BackendRateLimitError(BackendError):
    """Rate limit exceeded for the backend."""

    error_code = "BACKEND_RATE_LIMIT"

    def __init__(
        self,
        message: str,
        *,
        retry_after: float | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class BackendTimeoutError(BackendError):
    """Backend request timed out."""

    error_code = "BACKEND_TIMEOUT"


class BackendResponseError(BackendError):
    """Invalid or unexpected response from the backend."""

    error_code = "BACKEND_RESPONSE_ERROR"


class BackendNotConfiguredError(BackendError):
    """Backend was called without the credential it needs."""

    error_code = "BACKEND_NOT_CONFIGURED"


# ============================================================
# Execution Errors
# ============================================================

class ExecutionError(RatError):
    """Unexpected failure while handling a turn."""

    error_code = "INTERNAL_ERROR"
