"""Tenant module entitlements.

Decides which modules are active for a tenant and manages the
dependency-aware enable/disable lifecycle.
"""

import logging
from typing import Any, Callable, Dict, FrozenSet, List, Optional

from ....config.constants import AuditActions
from ....core.exceptions import DependentModuleActive, MissingDependency, ModuleNotEnabled
from ....core.value_objects import TenantId, UserId
from ....infrastructure.locking import InProcessTenantLocks, TenantLockProvider
from ....utils import utc_now
from ...audit.entities import AuditLogEntry, AuditLogger
from ...permissions.services import RoleDefaultsMerger
from ..entities import EnablementRepository, ModuleDefinition, TenantModuleEnablement
from .registry import ModuleRegistry


logger = logging.getLogger(__name__)


class EntitlementResolver:
    """Enables and disables modules per tenant and reports what is active.

    Dependencies are never enabled implicitly: enabling a module whose
    dependency is inactive fails, as does disabling a module an active
    module depends on. The check-then-act of both runs under the tenant's
    lock.
    """

    def __init__(
        self,
        registry: ModuleRegistry,
        enablements: EnablementRepository,
        merger: RoleDefaultsMerger,
        locks: Optional[TenantLockProvider] = None,
        audit: Optional[AuditLogger] = None,
        clock: Callable = utc_now,
    ):
        self.registry = registry
        self.enablements = enablements
        self.merger = merger
        self.locks = locks if locks is not None else InProcessTenantLocks()
        self.audit = audit
        self.clock = clock

    async def enable(
        self,
        tenant_id: TenantId,
        module_id: str,
        config: Optional[Dict[str, Any]] = None,
        actor_id: Optional[UserId] = None,
    ) -> TenantModuleEnablement:
        """Enable a module for a tenant.

        Returns the existing enablement unchanged if the module is already
        enabled.

        Raises:
            ModuleNotFound: if the module is not registered
            MissingDependency: if a dependency is not enabled for the tenant
        """
        module = self.registry.get(module_id)

        async with self.locks.lock(tenant_id):
            existing = await self.enablements.get(tenant_id, module_id)
            if existing is not None:
                logger.debug(f"Module '{module_id}' already enabled for tenant {tenant_id}")
                return existing

            enabled = await self._enabled_ids(tenant_id)
            for dependency in sorted(module.dependencies):
                if dependency not in enabled:
                    raise MissingDependency(module_id, dependency)

            # merge before recording so a failed enable stays retryable
            updated_roles = await self.merger.apply_module_defaults(tenant_id, module_id)
            enablement = TenantModuleEnablement(
                tenant_id=tenant_id,
                module_id=module_id,
                enabled_at=self.clock(),
                config=dict(config or {}),
            )
            await self.enablements.insert(enablement)

            logger.info(
                f"Enabled module '{module_id}' for tenant {tenant_id}, "
                f"updated {len(updated_roles)} role(s)"
            )
            await self._audit(
                tenant_id, actor_id, AuditActions.MODULE_ENABLED, module_id,
                {
                    "config": enablement.config,
                    "roles_updated": sorted(role.slug for role in updated_roles),
                },
            )
            return enablement

    async def disable(
        self,
        tenant_id: TenantId,
        module_id: str,
        actor_id: Optional[UserId] = None,
    ) -> bool:
        """Disable a module for a tenant.

        Role permissions merged when the module was enabled stay in place.

        Returns:
            True if an enablement was removed, False if the module was not enabled

        Raises:
            ModuleNotFound: if the module is not registered
            DependentModuleActive: if an enabled module depends on it
        """
        self.registry.get(module_id)

        async with self.locks.lock(tenant_id):
            enabled = await self._enabled_ids(tenant_id)
            if module_id not in enabled:
                logger.debug(f"Module '{module_id}' not enabled for tenant {tenant_id}")
                return False

            for dependent in self.registry.dependents_of(module_id):
                if dependent in enabled:
                    raise DependentModuleActive(module_id, dependent)

            removed = await self.enablements.delete(tenant_id, module_id)

            logger.info(f"Disabled module '{module_id}' for tenant {tenant_id}")
            await self._audit(tenant_id, actor_id, AuditActions.MODULE_DISABLED, module_id, None)
            return removed

    async def is_enabled(self, tenant_id: TenantId, module_id: str) -> bool:
        return await self.enablements.get(tenant_id, module_id) is not None

    async def require_module(self, tenant_id: TenantId, module_id: str) -> None:
        """Raise ModuleNotEnabled unless the module is active for the tenant."""
        if not await self.is_enabled(tenant_id, module_id):
            raise ModuleNotEnabled(module_id, tenant_id.value)

    async def enabled_modules(self, tenant_id: TenantId) -> List[ModuleDefinition]:
        """Definitions of the tenant's enabled modules, in registry order."""
        enabled = await self._enabled_ids(tenant_id)
        return [module for module in self.registry.ordered() if module.id in enabled]

    async def effective_capabilities(self, tenant_id: TenantId) -> FrozenSet[str]:
        """Union of enabled modules' permissions and the platform permissions."""
        capabilities = set(self.registry.platform_permissions)
        for module in await self.enabled_modules(tenant_id):
            capabilities |= module.permissions
        return frozenset(capabilities)

    async def _enabled_ids(self, tenant_id: TenantId) -> FrozenSet[str]:
        ids = set()
        for enablement in await self.enablements.list_for_tenant(tenant_id):
            if enablement.module_id not in self.registry:
                logger.warning(
                    f"Tenant {tenant_id} has enablement for unregistered module "
                    f"'{enablement.module_id}', ignoring"
                )
                continue
            ids.add(enablement.module_id)
        return frozenset(ids)

    async def _audit(self, tenant_id, actor_id, action, module_id, changes) -> None:
        if self.audit is None:
            return
        await self.audit.record(AuditLogEntry(
            tenant_id=tenant_id,
            user_id=actor_id,
            action=action,
            resource_type="module",
            resource_id=module_id,
            changes=changes,
        ))
