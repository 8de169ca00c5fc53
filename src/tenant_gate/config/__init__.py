"""Configuration for tenant-gate: settings, constants and logging."""

from .constants import (
    AuditActions,
    AuthMethod,
    DEFAULT_SESSION_LIFETIMES,
    LockBackend,
    PLATFORM_PERMISSIONS,
    RoutePaths,
    SYSTEM_ROLE_PERMISSIONS,
    SystemRole,
    UNIVERSAL_PERMISSION,
)
from .logging_config import LoggingConfig, get_logger, setup_logging
from .settings import TenantGateSettings, get_settings

__all__ = [
    "AuditActions",
    "AuthMethod",
    "DEFAULT_SESSION_LIFETIMES",
    "LockBackend",
    "PLATFORM_PERMISSIONS",
    "RoutePaths",
    "SYSTEM_ROLE_PERMISSIONS",
    "SystemRole",
    "UNIVERSAL_PERMISSION",
    "LoggingConfig",
    "get_logger",
    "setup_logging",
    "TenantGateSettings",
    "get_settings",
]
