"""Exceptions module for tenant-gate.

This module provides the complete exception hierarchy, organized by
session binding, authorization and module entitlement concerns.
"""

from .base import (
    TenantGateError,
    ValidationError,
    StoreError,
    get_http_status_code,
    create_error_response,
)

from .auth import (
    AuthenticationError,
    InvalidSession,
    SessionExpired,
    TenantBindingMismatch,
    mask_token_hash,
)

from .authorization import (
    AuthorizationError,
    InvalidPermissionFormat,
    PermissionDenied,
    PermissionEscalation,
    RoleNotFound,
    SystemRoleImmutable,
    EmptyPermissionSet,
    DuplicateRoleSlug,
    RoleInUse,
)

from .entitlements import (
    EntitlementError,
    ModuleNotFound,
    MissingDependency,
    DependentModuleActive,
    ModuleNotEnabled,
    ModuleRegistryError,
    DuplicateModule,
    UnknownModuleDependency,
    ModuleDependencyCycle,
)

from .http_mapping import HTTP_STATUS_MAP

__all__ = [
    # Base
    "TenantGateError",
    "ValidationError",
    "StoreError",
    "get_http_status_code",
    "create_error_response",
    "HTTP_STATUS_MAP",

    # Session binding
    "AuthenticationError",
    "InvalidSession",
    "SessionExpired",
    "TenantBindingMismatch",
    "mask_token_hash",

    # Authorization
    "AuthorizationError",
    "InvalidPermissionFormat",
    "PermissionDenied",
    "PermissionEscalation",
    "RoleNotFound",
    "SystemRoleImmutable",
    "EmptyPermissionSet",
    "DuplicateRoleSlug",
    "RoleInUse",

    # Entitlements
    "EntitlementError",
    "ModuleNotFound",
    "MissingDependency",
    "DependentModuleActive",
    "ModuleNotEnabled",
    "ModuleRegistryError",
    "DuplicateModule",
    "UnknownModuleDependency",
    "ModuleDependencyCycle",
]
