"""Tenant directory implementations."""

import logging
from typing import Dict, Optional

import asyncpg

from ....core.exceptions import StoreError
from ....core.value_objects import TenantId


logger = logging.getLogger(__name__)


class AsyncPGTenantDirectory:
    """AsyncPG implementation of TenantDirectory protocol."""

    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        self.pool = pool
        self.schema = schema

    async def get_tenant_slug_by_id(self, tenant_id: TenantId) -> Optional[str]:
        try:
            async with self.pool.acquire() as conn:
                return await conn.fetchval(
                    f"SELECT slug FROM {self.schema}.tenants WHERE id = $1",
                    tenant_id.value,
                )

        except Exception as e:
            logger.error(f"Failed to get slug for tenant {tenant_id}: {e}")
            raise StoreError(f"Failed to retrieve tenant: {e}") from e

    async def get_tenant_id_by_slug(self, slug: str) -> Optional[TenantId]:
        try:
            async with self.pool.acquire() as conn:
                tenant_id = await conn.fetchval(
                    f"SELECT id FROM {self.schema}.tenants WHERE slug = $1",
                    slug,
                )
            return TenantId(str(tenant_id)) if tenant_id else None

        except Exception as e:
            logger.error(f"Failed to get tenant for slug '{slug}': {e}")
            raise StoreError(f"Failed to retrieve tenant: {e}") from e


class InMemoryTenantDirectory:
    """Tenant slugs held in a dict."""

    def __init__(self, slugs: Optional[Dict[TenantId, str]] = None):
        self._slugs: Dict[TenantId, str] = dict(slugs or {})

    def add(self, tenant_id: TenantId, slug: str) -> None:
        self._slugs[tenant_id] = slug

    async def get_tenant_slug_by_id(self, tenant_id: TenantId) -> Optional[str]:
        return self._slugs.get(tenant_id)

    async def get_tenant_id_by_slug(self, slug: str) -> Optional[TenantId]:
        for tenant_id, tenant_slug in self._slugs.items():
            if tenant_slug == slug:
                return tenant_id
        return None
