"""Base exceptions for tenant-gate.

This module defines the root of the exception hierarchy. Every exception
carries an error code, structured details and maps to an HTTP status code
for request-boundary handlers.
"""

from typing import Any, Dict, Optional


class TenantGateError(Exception):
    """Base exception for all tenant-gate errors.

    All exceptions raised by the engine inherit from this base class and
    include structured error information for logging and API responses.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ValidationError(TenantGateError):
    """Raised when input fails a local validation rule."""
    pass


class StoreError(TenantGateError):
    """Raised when an external store (database, cache) operation fails."""
    pass


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for an exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as _lookup
    return _lookup(exception)


def create_error_response(exception: TenantGateError) -> Dict[str, Any]:
    """Create standardized error response from exception.

    Args:
        exception: The tenant-gate exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
