"""FastAPI integration for tenant-gate."""

from .dependencies import (
    get_bound_session,
    get_navigation,
    get_session_token,
    get_tenant_gate,
    require_all_permissions,
    require_any_permission,
    require_module,
    require_permission,
    require_tenant_session,
)
from .exception_handlers import register_exception_handlers
from .factory import TenantGate, build_tenant_locks, create_tenant_gate, install_tenant_gate

__all__ = [
    "TenantGate",
    "build_tenant_locks",
    "create_tenant_gate",
    "install_tenant_gate",
    "get_bound_session",
    "get_navigation",
    "get_session_token",
    "get_tenant_gate",
    "require_all_permissions",
    "require_any_permission",
    "require_module",
    "require_permission",
    "require_tenant_session",
    "register_exception_handlers",
]
