"""Propagation of module default grants into tenant roles."""

import logging
from typing import TYPE_CHECKING, FrozenSet, List, Mapping

from ....core.value_objects import TenantId
from ..entities import Role, RoleRepository

if TYPE_CHECKING:
    from ...modules.services.registry import ModuleRegistry


logger = logging.getLogger(__name__)


class RoleDefaultsMerger:
    """Merges a module's role-default grants into a tenant's roles.

    The merge is a set union: idempotent, order-independent and never
    removes a permission. Roles without a matching slug are left alone and
    the owner role is skipped because it already holds the universal grant.
    """

    def __init__(self, role_repo: RoleRepository, registry: "ModuleRegistry"):
        self.role_repo = role_repo
        self.registry = registry

    async def apply_module_defaults(self, tenant_id: TenantId, module_id: str) -> List[Role]:
        """Apply ``module_id``'s role defaults to ``tenant_id``'s roles.

        Returns:
            The roles whose permission sets changed
        """
        module = self.registry.get(module_id)
        return await self.merge(tenant_id, module.role_defaults)

    async def merge(self, tenant_id: TenantId, role_defaults: Mapping[str, FrozenSet[str]]) -> List[Role]:
        """Union ``role_defaults`` (slug -> grants) into the tenant's roles."""
        if not role_defaults:
            return []

        roles_by_slug = {role.slug: role for role in await self.role_repo.list_for_tenant(tenant_id)}
        updated: List[Role] = []

        for slug, grants in role_defaults.items():
            role = roles_by_slug.get(slug)
            if role is None:
                logger.debug(f"Tenant {tenant_id} has no role '{slug}', skipping module defaults")
                continue
            if role.is_owner:
                continue

            merged = role.with_added_permissions(grants)
            if merged.permissions == role.permissions:
                continue

            await self.role_repo.update_permissions(role.id, merged.permissions)
            roles_by_slug[slug] = merged
            updated.append(merged)
            logger.info(
                f"Merged {len(merged.permissions - role.permissions)} default permission(s) "
                f"into role '{slug}' for tenant {tenant_id}"
            )

        return updated
