"""AsyncPG-based role and membership repository implementations.

Concrete implementations of the RoleRepository and MembershipRepository
protocols. Permissions are stored as a ``text[]`` column; system roles are
flagged with ``is_system`` and identified by slug.
"""

from typing import FrozenSet, List, Optional
import asyncpg
import logging

from ....config.constants import SystemRole
from ....core.exceptions import StoreError
from ....core.value_objects import MembershipId, RoleId, TenantId, UserId
from ..entities import Membership, Role


logger = logging.getLogger(__name__)


_ROLE_COLUMNS = "id, tenant_id, name, slug, description, permissions, is_system, created_at"


class AsyncPGRoleRepository:
    """AsyncPG implementation of RoleRepository protocol."""

    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        self.pool = pool
        self.schema = schema

    def _build_role_from_row(self, row: asyncpg.Record) -> Role:
        """Build Role entity from database row."""
        system_role = SystemRole.from_slug(row['slug']) if row['is_system'] else None
        return Role(
            id=RoleId(str(row['id'])),
            tenant_id=TenantId(str(row['tenant_id'])) if row['tenant_id'] else None,
            name=row['name'],
            slug=row['slug'],
            description=row['description'],
            permissions=frozenset(row['permissions'] or ()),
            system_role=system_role,
            created_at=row['created_at'],
        )

    async def get(self, role_id: RoleId) -> Optional[Role]:
        """Get role by ID."""
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {_ROLE_COLUMNS} FROM {self.schema}.roles WHERE id = $1",
                    role_id.value,
                )
            return self._build_role_from_row(row) if row else None

        except Exception as e:
            logger.error(f"Failed to get role {role_id}: {e}")
            raise StoreError(f"Failed to retrieve role: {e}") from e

    async def get_by_slug(self, tenant_id: TenantId, slug: str) -> Optional[Role]:
        """Get a tenant's role by slug."""
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT {_ROLE_COLUMNS} FROM {self.schema}.roles
                    WHERE tenant_id = $1 AND slug = $2
                    """,
                    tenant_id.value, slug,
                )
            return self._build_role_from_row(row) if row else None

        except Exception as e:
            logger.error(f"Failed to get role '{slug}' for tenant {tenant_id}: {e}")
            raise StoreError(f"Failed to retrieve role: {e}") from e

    async def list_for_tenant(self, tenant_id: TenantId) -> List[Role]:
        """List a tenant's roles, oldest first."""
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT {_ROLE_COLUMNS} FROM {self.schema}.roles
                    WHERE tenant_id = $1
                    ORDER BY created_at, slug
                    """,
                    tenant_id.value,
                )
            return [self._build_role_from_row(row) for row in rows]

        except Exception as e:
            logger.error(f"Failed to list roles for tenant {tenant_id}: {e}")
            raise StoreError(f"Failed to list roles: {e}") from e

    async def save(self, role: Role) -> Role:
        """Insert or update a role."""
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO {self.schema}.roles
                        (id, tenant_id, name, slug, description, permissions, is_system)
                    VALUES ($1, $2, $3, $4, $5, $6, $7)
                    ON CONFLICT (id) DO UPDATE SET
                        name = EXCLUDED.name,
                        description = EXCLUDED.description,
                        permissions = EXCLUDED.permissions
                    RETURNING {_ROLE_COLUMNS}
                    """,
                    role.id.value,
                    role.tenant_id.value if role.tenant_id else None,
                    role.name,
                    role.slug,
                    role.description,
                    sorted(role.permissions),
                    role.is_system,
                )
            return self._build_role_from_row(row)

        except Exception as e:
            logger.error(f"Failed to save role '{role.slug}': {e}")
            raise StoreError(f"Failed to save role: {e}") from e

    async def update_permissions(self, role_id: RoleId, permissions: FrozenSet[str]) -> None:
        """Replace a role's permission set."""
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(
                    f"UPDATE {self.schema}.roles SET permissions = $2 WHERE id = $1",
                    role_id.value, sorted(permissions),
                )

        except Exception as e:
            logger.error(f"Failed to update permissions for role {role_id}: {e}")
            raise StoreError(f"Failed to update role permissions: {e}") from e

    async def delete(self, role_id: RoleId) -> None:
        """Delete a role."""
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(f"DELETE FROM {self.schema}.roles WHERE id = $1", role_id.value)

        except Exception as e:
            logger.error(f"Failed to delete role {role_id}: {e}")
            raise StoreError(f"Failed to delete role: {e}") from e


class AsyncPGMembershipRepository:
    """AsyncPG implementation of MembershipRepository protocol."""

    def __init__(self, pool: asyncpg.Pool, schema: str = "public"):
        self.pool = pool
        self.schema = schema

    def _build_membership_from_row(self, row: asyncpg.Record) -> Membership:
        return Membership(
            id=MembershipId(str(row['id'])),
            user_id=UserId(str(row['user_id'])),
            tenant_id=TenantId(str(row['tenant_id'])),
            role_id=RoleId(str(row['role_id'])),
            is_active=row['is_active'],
            pin_hash=row['pin_hash'],
            joined_at=row['joined_at'],
        )

    async def get(self, user_id: UserId, tenant_id: TenantId) -> Optional[Membership]:
        """Get the membership linking a user to a tenant."""
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT id, user_id, tenant_id, role_id, is_active, pin_hash, joined_at
                    FROM {self.schema}.tenant_memberships
                    WHERE user_id = $1 AND tenant_id = $2
                    """,
                    user_id.value, tenant_id.value,
                )
            return self._build_membership_from_row(row) if row else None

        except Exception as e:
            logger.error(f"Failed to get membership of user {user_id} in tenant {tenant_id}: {e}")
            raise StoreError(f"Failed to retrieve membership: {e}") from e

    async def list_active_for_user(self, user_id: UserId) -> List[Membership]:
        """List a user's active memberships, oldest first."""
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT id, user_id, tenant_id, role_id, is_active, pin_hash, joined_at
                    FROM {self.schema}.tenant_memberships
                    WHERE user_id = $1 AND is_active = true
                    ORDER BY joined_at
                    """,
                    user_id.value,
                )
            return [self._build_membership_from_row(row) for row in rows]

        except Exception as e:
            logger.error(f"Failed to list memberships for user {user_id}: {e}")
            raise StoreError(f"Failed to list memberships: {e}") from e

    async def count_for_role(self, role_id: RoleId) -> int:
        """Count memberships assigned to a role."""
        try:
            async with self.pool.acquire() as conn:
                count = await conn.fetchval(
                    f"SELECT count(*) FROM {self.schema}.tenant_memberships WHERE role_id = $1",
                    role_id.value,
                )
            return int(count or 0)

        except Exception as e:
            logger.error(f"Failed to count memberships for role {role_id}: {e}")
            raise StoreError(f"Failed to count role assignments: {e}") from e
