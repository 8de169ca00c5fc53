"""Assembly of the engine's services for a FastAPI application."""

import logging
from dataclasses import dataclass
from typing import Optional

import asyncpg
from fastapi import FastAPI

from ...config.constants import LockBackend
from ...config.settings import TenantGateSettings, get_settings
from ...features.audit.entities import AuditLogger
from ...features.modules.builtin import PLATFORM_NAVIGATION
from ...features.modules.entities import EnablementRepository
from ...features.modules.services import EntitlementResolver, ModuleRegistry, NavigationComposer
from ...features.permissions.entities import MembershipRepository, RoleRepository
from ...features.permissions.services import RoleDefaultsMerger, RoleService
from ...features.sessions.entities import SessionStore
from ...features.sessions.services import SessionBinder, SessionService
from ...features.tenants.entities import TenantDirectory
from ..locking import InProcessTenantLocks, PostgresAdvisoryLocks, TenantLockProvider


logger = logging.getLogger(__name__)


@dataclass
class TenantGate:
    """The engine's services, built once at startup and shared by all requests."""

    settings: TenantGateSettings
    registry: ModuleRegistry
    session_binder: SessionBinder
    session_service: SessionService
    entitlements: EntitlementResolver
    navigation: NavigationComposer
    role_service: RoleService
    role_defaults: RoleDefaultsMerger


def create_tenant_gate(
    registry: ModuleRegistry,
    sessions: SessionStore,
    roles: RoleRepository,
    memberships: MembershipRepository,
    tenants: TenantDirectory,
    enablements: EnablementRepository,
    audit: Optional[AuditLogger] = None,
    locks: Optional[TenantLockProvider] = None,
    settings: Optional[TenantGateSettings] = None,
    pool: Optional[asyncpg.Pool] = None,
) -> TenantGate:
    """Wire the engine's services over the given stores.

    Without an explicit ``locks`` provider the lock backend is chosen by
    ``settings.lock_backend``; the postgres backend takes its connections
    from ``pool``.
    """
    settings = settings or get_settings()
    if locks is None:
        locks = build_tenant_locks(settings, pool)
    merger = RoleDefaultsMerger(roles, registry)

    return TenantGate(
        settings=settings,
        registry=registry,
        session_binder=SessionBinder(sessions, memberships, roles, tenants, settings=settings),
        session_service=SessionService(sessions, memberships, settings=settings, audit=audit),
        entitlements=EntitlementResolver(
            registry,
            enablements,
            merger,
            locks=locks,
            audit=audit,
        ),
        navigation=NavigationComposer(PLATFORM_NAVIGATION),
        role_service=RoleService(roles, memberships, audit=audit),
        role_defaults=merger,
    )


def build_tenant_locks(
    settings: TenantGateSettings,
    pool: Optional[asyncpg.Pool] = None,
) -> TenantLockProvider:
    """Build the lock provider named by ``settings.lock_backend``."""
    if settings.lock_backend == LockBackend.POSTGRES:
        if pool is None:
            raise ValueError("A database pool is required for the postgres lock backend")
        return PostgresAdvisoryLocks(pool)
    return InProcessTenantLocks()


def install_tenant_gate(app: FastAPI, gate: TenantGate, register_handlers: bool = True) -> None:
    """Attach ``gate`` to ``app.state`` and optionally register the exception handlers."""
    app.state.tenant_gate = gate
    if register_handlers:
        from .exception_handlers import register_exception_handlers
        register_exception_handlers(app)
    logger.info(f"Installed tenant gate with {len(gate.registry)} registered module(s)")
