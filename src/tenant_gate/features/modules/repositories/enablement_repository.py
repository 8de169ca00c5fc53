"""Tenant module enablement repositories."""

import json
import logging
from typing import Dict, List, Optional, Tuple

import asyncpg

from ....core.exceptions import StoreError
from ....core.value_objects import TenantId
from ..entities import TenantModuleEnablement


logger = logging.getLogger(__name__)


class AsyncPGEnablementRepository:
    """AsyncPG implementation of EnablementRepository protocol."""

    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        self.pool = pool
        self.schema = schema

    def _build_enablement_from_row(self, row: asyncpg.Record) -> TenantModuleEnablement:
        config = row['config']
        if isinstance(config, str):
            config = json.loads(config)
        return TenantModuleEnablement(
            tenant_id=TenantId(str(row['tenant_id'])),
            module_id=row['module_id'],
            enabled_at=row['enabled_at'],
            config=config or {},
        )

    async def list_for_tenant(self, tenant_id: TenantId) -> List[TenantModuleEnablement]:
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT tenant_id, module_id, enabled_at, config
                    FROM {self.schema}.tenant_modules
                    WHERE tenant_id = $1
                    ORDER BY enabled_at
                    """,
                    tenant_id.value,
                )
            return [self._build_enablement_from_row(row) for row in rows]

        except Exception as e:
            logger.error(f"Failed to list enabled modules for tenant {tenant_id}: {e}")
            raise StoreError(f"Failed to list tenant modules: {e}") from e

    async def get(self, tenant_id: TenantId, module_id: str) -> Optional[TenantModuleEnablement]:
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT tenant_id, module_id, enabled_at, config
                    FROM {self.schema}.tenant_modules
                    WHERE tenant_id = $1 AND module_id = $2
                    """,
                    tenant_id.value, module_id,
                )
            return self._build_enablement_from_row(row) if row else None

        except Exception as e:
            logger.error(f"Failed to get module '{module_id}' for tenant {tenant_id}: {e}")
            raise StoreError(f"Failed to retrieve tenant module: {e}") from e

    async def insert(self, enablement: TenantModuleEnablement) -> None:
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO {self.schema}.tenant_modules (tenant_id, module_id, enabled_at, config)
                    VALUES ($1, $2, $3, $4::jsonb)
                    ON CONFLICT (tenant_id, module_id) DO NOTHING
                    """,
                    enablement.tenant_id.value,
                    enablement.module_id,
                    enablement.enabled_at,
                    json.dumps(enablement.config),
                )

        except Exception as e:
            logger.error(
                f"Failed to enable module '{enablement.module_id}' for tenant {enablement.tenant_id}: {e}"
            )
            raise StoreError(f"Failed to insert tenant module: {e}") from e

    async def delete(self, tenant_id: TenantId, module_id: str) -> bool:
        try:
            async with self.pool.acquire() as conn:
                status = await conn.execute(
                    f"DELETE FROM {self.schema}.tenant_modules WHERE tenant_id = $1 AND module_id = $2",
                    tenant_id.value, module_id,
                )
            # asyncpg returns the command tag, e.g. "DELETE 1"
            return status.split()[-1] != "0"

        except Exception as e:
            logger.error(f"Failed to disable module '{module_id}' for tenant {tenant_id}: {e}")
            raise StoreError(f"Failed to delete tenant module: {e}") from e


class InMemoryEnablementRepository:
    """Enablement storage keyed by (tenant, module)."""

    def __init__(self):
        self._enablements: Dict[Tuple[TenantId, str], TenantModuleEnablement] = {}

    async def list_for_tenant(self, tenant_id: TenantId) -> List[TenantModuleEnablement]:
        return [e for (tenant, _), e in self._enablements.items() if tenant == tenant_id]

    async def get(self, tenant_id: TenantId, module_id: str) -> Optional[TenantModuleEnablement]:
        return self._enablements.get((tenant_id, module_id))

    async def insert(self, enablement: TenantModuleEnablement) -> None:
        self._enablements.setdefault((enablement.tenant_id, enablement.module_id), enablement)

    async def delete(self, tenant_id: TenantId, module_id: str) -> bool:
        return self._enablements.pop((tenant_id, module_id), None) is not None
