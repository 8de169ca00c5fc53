"""Pytest configuration and fixtures for tenant-gate tests."""

import pytest
from datetime import datetime, timedelta, timezone

from tenant_gate.config.constants import SystemRole
from tenant_gate.config.settings import TenantGateSettings
from tenant_gate.core.value_objects import MembershipId, RoleId, TenantId, UserId
from tenant_gate.features.audit.repositories import InMemoryAuditLogger
from tenant_gate.features.modules.builtin import BUILTIN_MODULES
from tenant_gate.features.modules.entities import ModuleDefinition, NavItem
from tenant_gate.features.modules.repositories import InMemoryEnablementRepository
from tenant_gate.features.modules.services import EntitlementResolver, ModuleRegistry
from tenant_gate.features.permissions.entities import Membership, Role
from tenant_gate.features.permissions.repositories import (
    InMemoryMembershipRepository,
    InMemoryRoleRepository,
)
from tenant_gate.features.permissions.services import RoleDefaultsMerger
from tenant_gate.features.sessions.repositories import InMemorySessionStore
from tenant_gate.features.tenants.repositories import InMemoryTenantDirectory
from tenant_gate.infrastructure.locking import InProcessTenantLocks


FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_system_roles(tenant_id: TenantId):
    """One role per SystemRole for a tenant, with deterministic ids."""
    return {
        system_role: Role.system(RoleId(f"{tenant_id.value}-{system_role.value}"), tenant_id, system_role)
        for system_role in SystemRole
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    """Settings isolated from the environment and any .env file."""
    return TenantGateSettings(_env_file=None)


@pytest.fixture
def tenant_id():
    return TenantId("tenant-acme")


@pytest.fixture
def other_tenant_id():
    return TenantId("tenant-globex")


@pytest.fixture
def user_id():
    return UserId("user-alice")


@pytest.fixture
def system_roles(tenant_id):
    return make_system_roles(tenant_id)


@pytest.fixture
def other_system_roles(other_tenant_id):
    return make_system_roles(other_tenant_id)


@pytest.fixture
def role_repo(system_roles, other_system_roles):
    """Role repository seeded with the system roles of both tenants."""
    return InMemoryRoleRepository(list(system_roles.values()) + list(other_system_roles.values()))


@pytest.fixture
def membership_repo():
    return InMemoryMembershipRepository()


@pytest.fixture
def member_of(membership_repo):
    """Add an active membership: member_of(user_id, tenant_id, role)."""

    def _add(user_id: UserId, tenant_id: TenantId, role: Role, is_active: bool = True) -> Membership:
        membership = Membership(
            id=MembershipId(f"{user_id.value}@{tenant_id.value}"),
            user_id=user_id,
            tenant_id=tenant_id,
            role_id=role.id,
            is_active=is_active,
        )
        membership_repo.add(membership)
        return membership

    return _add


@pytest.fixture
def tenant_directory(tenant_id, other_tenant_id):
    return InMemoryTenantDirectory({tenant_id: "acme", other_tenant_id: "globex"})


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def audit_logger():
    return InMemoryAuditLogger()


@pytest.fixture
def layered_modules():
    """inventory <- pos <- reports, plus an independent loyalty module."""
    return [
        ModuleDefinition(
            id="inventory",
            name="Inventory",
            permissions={"inventory:items:read", "inventory:items:write"},
            role_defaults={
                "admin": {"inventory:*"},
                "viewer": {"inventory:items:read"},
            },
            navigation=(
                NavItem(label="Items", href="/inventory", permission="inventory:items:read"),
            ),
        ),
        ModuleDefinition(
            id="pos",
            name="Point of Sale",
            dependencies={"inventory"},
            permissions={"pos:sales:read", "pos:sales:write"},
            role_defaults={"operator": {"pos:sales:write", "pos:sales:read"}},
        ),
        ModuleDefinition(
            id="reports",
            name="Reports",
            dependencies={"pos"},
            permissions={"reports:view"},
        ),
        ModuleDefinition(
            id="loyalty",
            name="Loyalty",
            permissions={"loyalty:points:read"},
        ),
    ]


@pytest.fixture
def registry(layered_modules):
    return ModuleRegistry(list(BUILTIN_MODULES) + layered_modules)


@pytest.fixture
def enablement_repo():
    return InMemoryEnablementRepository()


@pytest.fixture
def merger(role_repo, registry):
    return RoleDefaultsMerger(role_repo, registry)


@pytest.fixture
def resolver(registry, enablement_repo, merger, audit_logger, clock):
    return EntitlementResolver(
        registry,
        enablement_repo,
        merger,
        locks=InProcessTenantLocks(),
        audit=audit_logger,
        clock=clock,
    )
