"""Role service for business logic orchestration.

Coordinates role creation, editing and deletion for a tenant. This is the
data-entry boundary for permissions: every permission string is validated
here before it can reach storage or the matcher.
"""

import logging
import re
from dataclasses import replace
from typing import AbstractSet, Iterable, List, Optional

from ....config.constants import AuditActions, SystemRole
from ....core.exceptions import (
    DuplicateRoleSlug,
    EmptyPermissionSet,
    PermissionEscalation,
    RoleInUse,
    RoleNotFound,
    SystemRoleImmutable,
    ValidationError,
)
from ....core.value_objects import RoleId, TenantId, UserId
from ...audit.entities import AuditLogEntry, AuditLogger
from ..entities import MembershipRepository, Role, RoleRepository, parse_permissions
from .matcher import unassignable


logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[a-z0-9-]+")
MAX_ROLE_NAME_LENGTH = 50
MAX_ROLE_SLUG_LENGTH = 50


class RoleService:
    """Service orchestrating tenant role management with validation."""

    def __init__(
        self,
        role_repo: RoleRepository,
        membership_repo: MembershipRepository,
        audit: Optional[AuditLogger] = None,
    ):
        self.role_repo = role_repo
        self.membership_repo = membership_repo
        self.audit = audit

    # Queries

    async def get_role(self, tenant_id: TenantId, role_id: RoleId) -> Role:
        """Get a tenant's role, raising RoleNotFound for other tenants' roles."""
        role = await self.role_repo.get(role_id)
        if role is None or role.tenant_id != tenant_id:
            raise RoleNotFound(role_id.value, tenant_id.value)
        return role

    async def list_roles(self, tenant_id: TenantId) -> List[Role]:
        return await self.role_repo.list_for_tenant(tenant_id)

    # Commands

    async def seed_system_roles(self, tenant_id: TenantId) -> List[Role]:
        """Create the built-in roles for a newly created tenant."""
        existing = {role.slug for role in await self.role_repo.list_for_tenant(tenant_id)}
        created = []
        for system_role in SystemRole:
            if system_role.value in existing:
                continue
            role = Role.system(RoleId.generate(), tenant_id, system_role)
            created.append(await self.role_repo.save(role))

        if created:
            logger.info(f"Seeded {len(created)} system role(s) for tenant {tenant_id}")
        return created

    async def create_role(
        self,
        tenant_id: TenantId,
        name: str,
        slug: str,
        permissions: Iterable[str],
        description: Optional[str] = None,
        actor_permissions: Optional[AbstractSet[str]] = None,
        actor_id: Optional[UserId] = None,
    ) -> Role:
        """Create a custom role.

        Raises:
            InvalidPermissionFormat: if any permission is malformed
            EmptyPermissionSet: if no permissions are given
            PermissionEscalation: if the actor grants what they do not hold
            DuplicateRoleSlug: if the slug is taken in the tenant
        """
        name = self._validate_name(name)
        slug = self._validate_slug(slug)
        validated = self._validate_permissions(slug, permissions, actor_permissions)

        if await self.role_repo.get_by_slug(tenant_id, slug) is not None:
            raise DuplicateRoleSlug(slug, tenant_id.value)

        role = Role(
            id=RoleId.generate(),
            tenant_id=tenant_id,
            name=name,
            slug=slug,
            permissions=validated,
            description=description,
        )
        saved = await self.role_repo.save(role)
        logger.info(f"Created role '{slug}' for tenant {tenant_id}")

        await self._audit(
            tenant_id, actor_id, AuditActions.ROLE_CREATED, saved.id,
            {"after": {"name": name, "permissions": sorted(validated)}},
        )
        return saved

    async def update_role(
        self,
        tenant_id: TenantId,
        role_id: RoleId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        permissions: Optional[Iterable[str]] = None,
        actor_permissions: Optional[AbstractSet[str]] = None,
        actor_id: Optional[UserId] = None,
    ) -> Role:
        """Update a custom role. System roles cannot be edited."""
        existing = await self.get_role(tenant_id, role_id)
        if not existing.is_editable:
            raise SystemRoleImmutable(existing.slug)

        updated = existing
        changes = {}
        if name is not None:
            updated = replace(updated, name=self._validate_name(name))
            changes["name"] = updated.name
        if description is not None:
            updated = replace(updated, description=description)
            changes["description"] = description
        if permissions is not None:
            validated = self._validate_permissions(existing.slug, permissions, actor_permissions)
            updated = updated.with_permissions(validated)
            changes["permissions"] = sorted(validated)

        if not changes:
            return existing

        saved = await self.role_repo.save(updated)
        logger.info(f"Updated role '{existing.slug}' for tenant {tenant_id}: {sorted(changes)}")

        await self._audit(
            tenant_id, actor_id, AuditActions.ROLE_UPDATED, role_id,
            {"before": {"permissions": sorted(existing.permissions)}, "after": changes},
        )
        return saved

    async def delete_role(
        self,
        tenant_id: TenantId,
        role_id: RoleId,
        actor_id: Optional[UserId] = None,
    ) -> None:
        """Delete a custom role that no member is assigned to."""
        role = await self.get_role(tenant_id, role_id)
        if not role.is_editable:
            raise SystemRoleImmutable(role.slug)

        assignments = await self.membership_repo.count_for_role(role_id)
        if assignments:
            raise RoleInUse(role.slug, assignments)

        await self.role_repo.delete(role_id)
        logger.info(f"Deleted role '{role.slug}' for tenant {tenant_id}")

        await self._audit(
            tenant_id, actor_id, AuditActions.ROLE_DELETED, role_id,
            {"before": {"name": role.name}},
        )

    # Validation helpers

    def _validate_name(self, name: str) -> str:
        name = (name or "").strip()
        if not name or len(name) > MAX_ROLE_NAME_LENGTH:
            raise ValidationError(
                f"Role name must be 1-{MAX_ROLE_NAME_LENGTH} characters",
                details={"name": name},
            )
        return name

    def _validate_slug(self, slug: str) -> str:
        if not slug or len(slug) > MAX_ROLE_SLUG_LENGTH or not _SLUG_RE.fullmatch(slug):
            raise ValidationError(
                "Role slug must be lowercase alphanumeric with hyphens",
                details={"slug": slug},
            )
        return slug

    def _validate_permissions(
        self,
        slug: str,
        permissions: Iterable[str],
        actor_permissions: Optional[AbstractSet[str]],
    ):
        validated = parse_permissions(permissions)
        if not validated:
            raise EmptyPermissionSet(slug)

        if actor_permissions is not None:
            refused = unassignable(actor_permissions, validated)
            if refused:
                raise PermissionEscalation(refused)
        return validated

    async def _audit(self, tenant_id, actor_id, action, role_id, changes) -> None:
        if self.audit is None:
            return
        await self.audit.record(AuditLogEntry(
            tenant_id=tenant_id,
            user_id=actor_id,
            action=action,
            resource_type="role",
            resource_id=role_id.value,
            changes=changes,
        ))
