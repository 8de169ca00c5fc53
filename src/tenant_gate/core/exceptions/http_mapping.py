"""HTTP status code mapping for exceptions.

Lookups walk the exception's MRO so subclasses inherit the status of the
nearest mapped ancestor.
"""

from typing import Dict, Type

from .base import StoreError, TenantGateError, ValidationError
from .auth import AuthenticationError, InvalidSession, SessionExpired, TenantBindingMismatch
from .authorization import (
    AuthorizationError,
    DuplicateRoleSlug,
    EmptyPermissionSet,
    InvalidPermissionFormat,
    PermissionDenied,
    PermissionEscalation,
    RoleInUse,
    RoleNotFound,
    SystemRoleImmutable,
)
from .entitlements import (
    DependentModuleActive,
    EntitlementError,
    MissingDependency,
    ModuleNotEnabled,
    ModuleNotFound,
    ModuleRegistryError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 302 Found (redirect to the bound tenant or tenant selection)
    TenantBindingMismatch: 302,

    # 400 Bad Request
    ValidationError: 400,
    InvalidPermissionFormat: 400,
    SystemRoleImmutable: 400,
    EmptyPermissionSet: 400,
    RoleInUse: 400,
    EntitlementError: 400,

    # 401 Unauthorized
    AuthenticationError: 401,
    InvalidSession: 401,
    SessionExpired: 401,

    # 403 Forbidden
    AuthorizationError: 403,
    PermissionDenied: 403,
    PermissionEscalation: 403,
    ModuleNotEnabled: 403,

    # 404 Not Found
    RoleNotFound: 404,
    ModuleNotFound: 404,

    # 409 Conflict
    DuplicateRoleSlug: 409,
    MissingDependency: 409,
    DependentModuleActive: 409,

    # 500 Internal Server Error
    ModuleRegistryError: 500,
    StoreError: 500,
    TenantGateError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get the HTTP status code for an exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code, 500 for unmapped exceptions
    """
    for exc_type in type(exception).__mro__:
        if exc_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exc_type]
    return 500
