"""Constants and enums for tenant-gate.

This module defines the constants, enums, and default values used
throughout the engine. System role slugs and their default permission sets
correspond to the roles seeded for every new tenant.
"""

from enum import Enum
from typing import Dict, Final, FrozenSet, Mapping
from types import MappingProxyType


class SystemRole(str, Enum):
    """Built-in role slugs present in every tenant.

    Roles carrying one of these values are system roles; roles with no
    system role are tenant-defined custom roles.
    """

    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    OPERATOR = "operator"
    VIEWER = "viewer"

    @classmethod
    def from_slug(cls, slug: str) -> "SystemRole | None":
        """Return the system role for a slug, or None for custom slugs."""
        try:
            return cls(slug)
        except ValueError:
            return None


class AuthMethod(str, Enum):
    """Authentication methods a session can be issued for."""

    PASSWORD = "password"
    PIN = "pin"
    OAUTH = "oauth"


class LockBackend(str, Enum):
    """Per-tenant mutual exclusion backends."""

    MEMORY = "memory"
    POSTGRES = "postgres"


# Permission grammar
UNIVERSAL_PERMISSION: Final[str] = "*"
PERMISSION_SEPARATOR: Final[str] = ":"
MAX_PERMISSION_SEGMENTS: Final[int] = 3


SYSTEM_ROLE_PERMISSIONS: Mapping[SystemRole, FrozenSet[str]] = MappingProxyType({
    SystemRole.OWNER: frozenset({"*"}),
    SystemRole.ADMIN: frozenset({"core:*", "settings:*"}),
    SystemRole.MANAGER: frozenset({"core:users:read", "core:dashboard:read"}),
    SystemRole.OPERATOR: frozenset({"core:dashboard:read"}),
    SystemRole.VIEWER: frozenset({"core:dashboard:read"}),
})


# Capabilities the platform provides regardless of enabled modules
PLATFORM_PERMISSIONS: FrozenSet[str] = frozenset({
    "core:dashboard:read",
    "core:users:read",
    "core:audit:read",
    "core:settings:manage",
})


class SessionLifetime:
    """Default session lifetimes in seconds."""

    PASSWORD: Final[int] = 30 * 24 * 60 * 60   # 30 days
    PIN: Final[int] = 4 * 60 * 60              # 4 hours
    OAUTH: Final[int] = 30 * 24 * 60 * 60      # 30 days


DEFAULT_SESSION_LIFETIMES: Dict[AuthMethod, int] = {
    AuthMethod.PASSWORD: SessionLifetime.PASSWORD,
    AuthMethod.PIN: SessionLifetime.PIN,
    AuthMethod.OAUTH: SessionLifetime.OAUTH,
}


class RoutePaths:
    """Route templates used when redirecting a rejected request."""

    LOGIN: Final[str] = "/login"
    SELECT_TENANT: Final[str] = "/select-tenant"
    TENANT_HOME: Final[str] = "/{slug}"


class AuditActions:
    """Audit log action names."""

    MODULE_ENABLED: Final[str] = "module:enabled"
    MODULE_DISABLED: Final[str] = "module:disabled"
    ROLE_CREATED: Final[str] = "role:created"
    ROLE_UPDATED: Final[str] = "role:updated"
    ROLE_DELETED: Final[str] = "role:deleted"
    SESSION_TENANT_SWITCHED: Final[str] = "session:tenant_switched"


SESSION_COOKIE_NAME: Final[str] = "session_token"
TENANT_ROUTE_PARAM: Final[str] = "tenant"
