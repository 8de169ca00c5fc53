"""Audit log writers backed by PostgreSQL or memory."""

import json
import logging
from typing import List, Optional

import asyncpg

from ....core.exceptions import StoreError
from ....core.value_objects import TenantId
from ..entities import AuditLogEntry


logger = logging.getLogger(__name__)


class AsyncPGAuditLogger:
    """AsyncPG implementation of AuditLogger protocol."""

    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        self.pool = pool
        self.schema = schema

    async def record(self, entry: AuditLogEntry) -> None:
        """Insert the entry into ``audit_logs``."""
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(
                    f"""
                    INSERT INTO {self.schema}.audit_logs
                        (tenant_id, user_id, action, resource_type, resource_id,
                         changes, ip_address, created_at)
                    VALUES ($1, $2, $3, $4, $5, $6::jsonb, $7, $8)
                    """,
                    entry.tenant_id.value,
                    entry.user_id.value if entry.user_id else None,
                    entry.action,
                    entry.resource_type,
                    entry.resource_id,
                    json.dumps(entry.changes) if entry.changes is not None else None,
                    entry.ip_address,
                    entry.created_at,
                )
            logger.debug(f"Recorded audit action '{entry.action}' for tenant {entry.tenant_id}")

        except Exception as e:
            logger.error(f"Failed to record audit action '{entry.action}': {e}")
            raise StoreError(f"Failed to record audit entry: {e}") from e


class InMemoryAuditLogger:
    """Collects audit entries in a list."""

    def __init__(self):
        self.entries: List[AuditLogEntry] = []

    async def record(self, entry: AuditLogEntry) -> None:
        self.entries.append(entry)

    def for_tenant(self, tenant_id: TenantId, action: Optional[str] = None) -> List[AuditLogEntry]:
        """Entries for a tenant, optionally filtered by action."""
        return [
            entry for entry in self.entries
            if entry.tenant_id == tenant_id and (action is None or entry.action == action)
        ]
