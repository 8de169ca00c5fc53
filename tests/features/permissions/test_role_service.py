"""Tests for role management validation."""

import pytest

from tenant_gate.config.constants import AuditActions, SystemRole
from tenant_gate.core.exceptions import (
    DuplicateRoleSlug,
    EmptyPermissionSet,
    InvalidPermissionFormat,
    PermissionEscalation,
    RoleInUse,
    RoleNotFound,
    SystemRoleImmutable,
    ValidationError,
)
from tenant_gate.core.value_objects import RoleId, TenantId, UserId
from tenant_gate.features.permissions.repositories import InMemoryRoleRepository
from tenant_gate.features.permissions.services import RoleService


class TestRoleService:
    """Test RoleService guards and persistence."""

    @pytest.fixture
    def service(self, role_repo, membership_repo, audit_logger):
        return RoleService(role_repo, membership_repo, audit=audit_logger)

    @pytest.mark.asyncio
    async def test_create_role(self, service, role_repo, tenant_id, audit_logger):
        """Test creating a custom role."""
        role = await service.create_role(
            tenant_id, "Cashier", "cashier", ["notes:notes:read", "costing:view"],
            actor_id=UserId("user-owner"),
        )

        assert role.slug == "cashier"
        assert role.permissions == frozenset({"notes:notes:read", "costing:view"})
        assert not role.is_system
        assert await role_repo.get_by_slug(tenant_id, "cashier") == role

        entries = audit_logger.for_tenant(tenant_id, AuditActions.ROLE_CREATED)
        assert len(entries) == 1
        assert entries[0].resource_id == role.id.value

    @pytest.mark.asyncio
    async def test_create_rejects_malformed_permissions(self, service, role_repo, tenant_id):
        """Test that nothing is saved when a permission is malformed."""
        with pytest.raises(InvalidPermissionFormat) as exc_info:
            await service.create_role(tenant_id, "Bad", "bad", ["notes:*", "Notes:Read"])

        assert exc_info.value.permissions == ["Notes:Read"]
        assert await role_repo.get_by_slug(tenant_id, "bad") is None

    @pytest.mark.asyncio
    async def test_create_rejects_trailing_newline(self, service, role_repo, tenant_id):
        """Test that a permission with a trailing line break is not saved."""
        with pytest.raises(InvalidPermissionFormat) as exc_info:
            await service.create_role(tenant_id, "Reader", "reader", ["core:users:read\n"])

        assert exc_info.value.permissions == ["core:users:read\n"]
        assert await role_repo.get_by_slug(tenant_id, "reader") is None

    @pytest.mark.asyncio
    async def test_create_rejects_empty_permissions(self, service, tenant_id):
        """Test that a role must grant something."""
        with pytest.raises(EmptyPermissionSet):
            await service.create_role(tenant_id, "Nobody", "nobody", [])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("slug", ["Cashier", "cash_ier", "", "a b", "cashier\n"])
    async def test_create_rejects_bad_slug(self, service, tenant_id, slug):
        """Test the slug format."""
        with pytest.raises(ValidationError):
            await service.create_role(tenant_id, "Cashier", slug, ["costing:view"])

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_slug(self, service, tenant_id):
        """Test slug uniqueness within the tenant, including system slugs."""
        with pytest.raises(DuplicateRoleSlug):
            await service.create_role(tenant_id, "Admin", "admin", ["costing:view"])

    @pytest.mark.asyncio
    async def test_same_slug_in_other_tenant(self, service, tenant_id, other_tenant_id):
        """Test that slugs are scoped per tenant."""
        first = await service.create_role(tenant_id, "Cashier", "cashier", ["costing:view"])
        second = await service.create_role(other_tenant_id, "Cashier", "cashier", ["costing:view"])
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_create_refuses_escalation(self, service, tenant_id):
        """Test that actors can only grant permissions they hold."""
        with pytest.raises(PermissionEscalation) as exc_info:
            await service.create_role(
                tenant_id, "Super", "super", ["core:users:read", "core:*"],
                actor_permissions=frozenset({"core:users:*"}),
            )
        assert exc_info.value.permissions == ["core:*"]

    @pytest.mark.asyncio
    async def test_create_allows_owner_anything(self, service, tenant_id):
        """Test that the universal grant may assign any permission."""
        role = await service.create_role(
            tenant_id, "Super", "super", ["core:*"], actor_permissions=frozenset({"*"})
        )
        assert role.permissions == frozenset({"core:*"})

    @pytest.mark.asyncio
    async def test_update_role_permissions(self, service, tenant_id, audit_logger):
        """Test replacing a custom role's permissions."""
        role = await service.create_role(tenant_id, "Cashier", "cashier", ["costing:view"])

        updated = await service.update_role(tenant_id, role.id, permissions=["costing:view", "notes:*"])

        assert updated.permissions == frozenset({"costing:view", "notes:*"})
        entries = audit_logger.for_tenant(tenant_id, AuditActions.ROLE_UPDATED)
        assert entries[0].changes["before"]["permissions"] == ["costing:view"]

    @pytest.mark.asyncio
    async def test_update_without_changes_is_noop(self, service, tenant_id, audit_logger):
        """Test that an empty update writes nothing."""
        role = await service.create_role(tenant_id, "Cashier", "cashier", ["costing:view"])
        assert await service.update_role(tenant_id, role.id) == role
        assert audit_logger.for_tenant(tenant_id, AuditActions.ROLE_UPDATED) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("system_role", list(SystemRole))
    async def test_system_roles_are_immutable(self, service, tenant_id, system_roles, system_role):
        """Test that no system role can be edited or deleted."""
        role = system_roles[system_role]
        with pytest.raises(SystemRoleImmutable):
            await service.update_role(tenant_id, role.id, permissions=["costing:view"])
        with pytest.raises(SystemRoleImmutable):
            await service.delete_role(tenant_id, role.id)

    @pytest.mark.asyncio
    async def test_role_of_other_tenant_not_found(self, service, tenant_id, other_system_roles):
        """Test that roles are looked up within the caller's tenant only."""
        foreign = other_system_roles[SystemRole.VIEWER]
        with pytest.raises(RoleNotFound):
            await service.get_role(tenant_id, foreign.id)
        with pytest.raises(RoleNotFound):
            await service.delete_role(tenant_id, RoleId("missing"))

    @pytest.mark.asyncio
    async def test_delete_role_in_use(self, service, tenant_id, user_id, member_of):
        """Test that assigned roles cannot be deleted."""
        role = await service.create_role(tenant_id, "Cashier", "cashier", ["costing:view"])
        member_of(user_id, tenant_id, role)

        with pytest.raises(RoleInUse) as exc_info:
            await service.delete_role(tenant_id, role.id)
        assert exc_info.value.details["assignments"] == 1

    @pytest.mark.asyncio
    async def test_delete_role(self, service, role_repo, tenant_id, audit_logger):
        """Test deleting an unassigned custom role."""
        role = await service.create_role(tenant_id, "Cashier", "cashier", ["costing:view"])

        await service.delete_role(tenant_id, role.id)

        assert await role_repo.get(role.id) is None
        assert len(audit_logger.for_tenant(tenant_id, AuditActions.ROLE_DELETED)) == 1

    @pytest.mark.asyncio
    async def test_seed_system_roles(self, membership_repo):
        """Test seeding a new tenant with every system role, once."""
        service = RoleService(InMemoryRoleRepository(), membership_repo)
        tenant = TenantId("tenant-new")

        created = await service.seed_system_roles(tenant)
        again = await service.seed_system_roles(tenant)

        assert {role.slug for role in created} == {r.value for r in SystemRole}
        assert again == []
        owner = next(role for role in created if role.is_owner)
        assert owner.permissions == frozenset({"*"})
