"""Per-tenant mutual exclusion.

Module enable/disable is a check-then-act sequence; running it under a
tenant-scoped lock keeps concurrent requests for the same tenant from
interleaving. Different tenants never block each other.
"""

import asyncio
import logging
from abc import abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Dict, Protocol, runtime_checkable

import asyncpg

from ..core.exceptions import StoreError
from ..core.value_objects import TenantId


logger = logging.getLogger(__name__)


@runtime_checkable
class TenantLockProvider(Protocol):
    """Protocol for tenant-scoped locks."""

    @abstractmethod
    def lock(self, tenant_id: TenantId) -> AsyncContextManager[None]:
        """Return an async context manager holding the tenant's lock."""
        ...


class InProcessTenantLocks:
    """One ``asyncio.Lock`` per tenant, for single-process deployments.

    A tenant's lock is dropped once no task holds or awaits it.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    @asynccontextmanager
    async def lock(self, tenant_id: TenantId) -> AsyncIterator[None]:
        key = tenant_id.value
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]

    def is_locked(self, tenant_id: TenantId) -> bool:
        lock = self._locks.get(tenant_id.value)
        return lock is not None and lock.locked()

    def active_tenants(self) -> int:
        """Number of tenants whose lock is held or awaited."""
        return len(self._locks)


class PostgresAdvisoryLocks:
    """Session-level PostgreSQL advisory locks, for multi-process deployments.

    Each lock holds a dedicated pool connection until released.
    """

    def __init__(self, pool: asyncpg.Pool, namespace: str = "tenant-gate"):
        self.pool = pool
        self.namespace = namespace

    def _key(self, tenant_id: TenantId) -> str:
        return f"{self.namespace}:{tenant_id.value}"

    @asynccontextmanager
    async def lock(self, tenant_id: TenantId) -> AsyncIterator[None]:
        key = self._key(tenant_id)
        async with self.pool.acquire() as conn:
            try:
                await conn.execute("SELECT pg_advisory_lock(hashtext($1))", key)
            except Exception as e:
                logger.error(f"Failed to acquire advisory lock for tenant {tenant_id}: {e}")
                raise StoreError(f"Failed to acquire tenant lock: {e}") from e

            try:
                yield
            finally:
                await conn.execute("SELECT pg_advisory_unlock(hashtext($1))", key)
