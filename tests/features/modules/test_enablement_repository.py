"""Tests for the asyncpg enablement repository and tenant directory."""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from tenant_gate.core.exceptions import StoreError
from tenant_gate.core.value_objects import TenantId
from tenant_gate.features.modules.entities import EnablementRepository, TenantModuleEnablement
from tenant_gate.features.modules.repositories import (
    AsyncPGEnablementRepository,
    InMemoryEnablementRepository,
)
from tenant_gate.features.tenants.repositories import AsyncPGTenantDirectory


ENABLED_AT = datetime(2026, 2, 1, tzinfo=timezone.utc)


@pytest.fixture
def conn():
    return AsyncMock()


@pytest.fixture
def pool(conn):
    pool = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn
    return pool


class TestAsyncPGEnablementRepository:
    """Test AsyncPGEnablementRepository."""

    def test_satisfies_protocol(self, pool):
        assert isinstance(AsyncPGEnablementRepository(pool), EnablementRepository)

    @pytest.mark.asyncio
    async def test_get_decodes_json_config(self, pool, conn, tenant_id):
        """Test that a text jsonb value is decoded."""
        conn.fetchrow.return_value = {
            "tenant_id": "tenant-acme",
            "module_id": "notes",
            "enabled_at": ENABLED_AT,
            "config": '{"limit": 5}',
        }

        enablement = await AsyncPGEnablementRepository(pool).get(tenant_id, "notes")

        assert enablement.config == {"limit": 5}
        assert enablement.tenant_id == tenant_id

    @pytest.mark.asyncio
    async def test_insert_is_idempotent_sql(self, pool, conn, tenant_id):
        """Test that inserts never fail on an existing enablement."""
        enablement = TenantModuleEnablement(
            tenant_id=tenant_id, module_id="notes", enabled_at=ENABLED_AT, config={"a": 1}
        )

        await AsyncPGEnablementRepository(pool).insert(enablement)

        args = conn.execute.await_args.args
        assert "ON CONFLICT (tenant_id, module_id) DO NOTHING" in args[0]
        assert json.loads(args[4]) == {"a": 1}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,expected", [("DELETE 1", True), ("DELETE 0", False)])
    async def test_delete_reads_command_tag(self, pool, conn, tenant_id, status, expected):
        conn.execute.return_value = status
        assert await AsyncPGEnablementRepository(pool).delete(tenant_id, "notes") is expected

    @pytest.mark.asyncio
    async def test_list_failure(self, pool, conn, tenant_id):
        conn.fetch.side_effect = RuntimeError("pool closed")
        with pytest.raises(StoreError):
            await AsyncPGEnablementRepository(pool).list_for_tenant(tenant_id)


class TestInMemoryEnablementRepository:
    """Test InMemoryEnablementRepository."""

    @pytest.mark.asyncio
    async def test_insert_keeps_first(self, tenant_id, other_tenant_id):
        repo = InMemoryEnablementRepository()
        first = TenantModuleEnablement(tenant_id=tenant_id, module_id="notes", enabled_at=ENABLED_AT)
        await repo.insert(first)
        await repo.insert(TenantModuleEnablement(tenant_id=tenant_id, module_id="notes", enabled_at=ENABLED_AT, config={"x": 1}))

        assert await repo.get(tenant_id, "notes") is first
        assert await repo.list_for_tenant(other_tenant_id) == []
        assert await repo.delete(tenant_id, "notes") is True
        assert await repo.delete(tenant_id, "notes") is False


class TestAsyncPGTenantDirectory:
    """Test AsyncPGTenantDirectory."""

    @pytest.mark.asyncio
    async def test_lookups(self, pool, conn, tenant_id):
        conn.fetchval.return_value = "acme"
        assert await AsyncPGTenantDirectory(pool).get_tenant_slug_by_id(tenant_id) == "acme"

        conn.fetchval.return_value = "tenant-acme"
        assert await AsyncPGTenantDirectory(pool).get_tenant_id_by_slug("acme") == TenantId("tenant-acme")

        conn.fetchval.return_value = None
        assert await AsyncPGTenantDirectory(pool).get_tenant_id_by_slug("ghost") is None

    @pytest.mark.asyncio
    async def test_failure(self, pool, conn, tenant_id):
        conn.fetchval.side_effect = RuntimeError("boom")
        with pytest.raises(StoreError):
            await AsyncPGTenantDirectory(pool).get_tenant_slug_by_id(tenant_id)
