"""FastAPI dependency injection helpers for tenant binding and authorization.

Usage:
    @router.get("/{tenant}/notes")
    async def list_notes(
        bound: BoundSession = Depends(require_permission("notes:notes:read")),
        _: None = Depends(require_module("notes")),
    ):
        ...

Rejections raise engine exceptions; ``register_exception_handlers`` turns
them into redirects or JSON errors.
"""

from typing import List, Optional

from fastapi import Depends, Request

from ...config.constants import TENANT_ROUTE_PARAM
from ...core.exceptions import PermissionDenied, TenantBindingMismatch
from ...features.modules.entities import NavItem
from ...features.permissions.entities import PermissionCode
from ...features.permissions.services import matches
from ...features.sessions.entities import BoundSession
from .factory import TenantGate


def get_tenant_gate(request: Request) -> TenantGate:
    """Get the engine installed on the application."""
    return request.app.state.tenant_gate


def get_session_token(request: Request, gate: TenantGate = Depends(get_tenant_gate)) -> Optional[str]:
    """Read the session token from its cookie."""
    return request.cookies.get(gate.settings.session_cookie_name)


async def get_bound_session(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    gate: TenantGate = Depends(get_tenant_gate),
) -> BoundSession:
    """Resolve the request's session, binding it to the route's tenant slug if present."""
    tenant_slug = request.path_params.get(TENANT_ROUTE_PARAM)
    if tenant_slug:
        return await gate.session_binder.resolve_for_route(token, tenant_slug)
    return await gate.session_binder.resolve(token)


async def require_tenant_session(
    bound: BoundSession = Depends(get_bound_session),
    gate: TenantGate = Depends(get_tenant_gate),
) -> BoundSession:
    """Require a session bound to a tenant."""
    if bound.tenant_id is None:
        raise TenantBindingMismatch(
            "A tenant must be selected",
            redirect_path=gate.settings.select_tenant_path,
            reason="no_tenant_selected",
        )
    return bound


def require_permission(permission: str):
    """Create a dependency that requires a specific permission.

    The permission is validated when the route is declared.
    """
    required = PermissionCode(permission).value

    async def _check_permission(bound: BoundSession = Depends(require_tenant_session)) -> BoundSession:
        if not matches(bound.permissions, required):
            raise PermissionDenied(required)
        return bound

    return _check_permission


def require_all_permissions(permissions: List[str]):
    """Create a dependency that requires every listed permission."""
    required = [PermissionCode(permission).value for permission in permissions]

    async def _check_permissions(bound: BoundSession = Depends(require_tenant_session)) -> BoundSession:
        for permission in required:
            if not matches(bound.permissions, permission):
                raise PermissionDenied(permission)
        return bound

    return _check_permissions


def require_any_permission(permissions: List[str]):
    """Create a dependency that requires at least one listed permission."""
    required = [PermissionCode(permission).value for permission in permissions]

    async def _check_permissions(bound: BoundSession = Depends(require_tenant_session)) -> BoundSession:
        if not any(matches(bound.permissions, permission) for permission in required):
            raise PermissionDenied(" | ".join(required))
        return bound

    return _check_permissions


def require_module(module_id: str):
    """Create a dependency that requires a module to be enabled for the session's tenant."""

    async def _check_module(
        bound: BoundSession = Depends(require_tenant_session),
        gate: TenantGate = Depends(get_tenant_gate),
    ) -> BoundSession:
        await gate.entitlements.require_module(bound.tenant_id, module_id)
        return bound

    return _check_module


async def get_navigation(
    bound: BoundSession = Depends(require_tenant_session),
    gate: TenantGate = Depends(get_tenant_gate),
) -> List[NavItem]:
    """The menu for the caller: platform navigation plus enabled modules, pruned by permission."""
    modules = await gate.entitlements.enabled_modules(bound.tenant_id)
    return gate.navigation.compose_for_tenant(modules, bound.permissions)
