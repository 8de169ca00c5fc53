"""tenant-gate - tenant-scoped authorization and module entitlement engine.

Binds sessions to exactly one tenant, evaluates wildcard permissions and
manages which modules, capabilities and navigation each tenant's members
can reach.

Logging is not configured on import; call ``setup_logging()`` at startup.
"""

from .__version__ import __version__

from .config import (
    AuthMethod,
    SystemRole,
    TenantGateSettings,
    get_settings,
    setup_logging,
)

from .core.exceptions import (
    # Base
    TenantGateError,
    ValidationError,
    StoreError,
    get_http_status_code,
    create_error_response,

    # Session binding
    AuthenticationError,
    InvalidSession,
    SessionExpired,
    TenantBindingMismatch,

    # Authorization
    AuthorizationError,
    InvalidPermissionFormat,
    PermissionDenied,
    PermissionEscalation,

    # Entitlements
    EntitlementError,
    MissingDependency,
    DependentModuleActive,
    ModuleNotEnabled,
    ModuleNotFound,
    ModuleRegistryError,
)

from .core.value_objects import MembershipId, RoleId, TenantId, UserId

from .features.modules import (
    BUILTIN_MODULES,
    EntitlementResolver,
    ModuleDefinition,
    ModuleRegistry,
    NavigationComposer,
    NavItem,
    StaticModuleCatalog,
)
from .features.permissions import (
    Membership,
    PermissionCode,
    Role,
    RoleDefaultsMerger,
    RoleService,
    can_assign,
    matches,
    matches_all,
    matches_any,
    parse_permissions,
)
from .features.sessions import BoundSession, IssuedSession, Session, SessionBinder, SessionService

__all__ = [
    "__version__",

    # Configuration
    "AuthMethod",
    "SystemRole",
    "TenantGateSettings",
    "get_settings",
    "setup_logging",

    # Exceptions
    "TenantGateError",
    "ValidationError",
    "StoreError",
    "get_http_status_code",
    "create_error_response",
    "AuthenticationError",
    "InvalidSession",
    "SessionExpired",
    "TenantBindingMismatch",
    "AuthorizationError",
    "InvalidPermissionFormat",
    "PermissionDenied",
    "PermissionEscalation",
    "EntitlementError",
    "MissingDependency",
    "DependentModuleActive",
    "ModuleNotEnabled",
    "ModuleNotFound",
    "ModuleRegistryError",

    # Identifiers
    "MembershipId",
    "RoleId",
    "TenantId",
    "UserId",

    # Modules
    "BUILTIN_MODULES",
    "EntitlementResolver",
    "ModuleDefinition",
    "ModuleRegistry",
    "NavigationComposer",
    "NavItem",
    "StaticModuleCatalog",

    # Permissions
    "Membership",
    "PermissionCode",
    "Role",
    "RoleDefaultsMerger",
    "RoleService",
    "can_assign",
    "matches",
    "matches_all",
    "matches_any",
    "parse_permissions",

    # Sessions
    "BoundSession",
    "IssuedSession",
    "Session",
    "SessionBinder",
    "SessionService",
]
