"""In-memory role and membership repositories.

Implements the permission repository protocols in memory for development,
testing, and single-instance deployments.
"""

from dataclasses import replace
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from ....core.exceptions import StoreError
from ....core.value_objects import RoleId, TenantId, UserId
from ....utils import utc_now
from ..entities import Membership, Role


class InMemoryRoleRepository:
    """Role storage keyed by role id."""

    def __init__(self, roles: Iterable[Role] = ()):
        self._roles: Dict[RoleId, Role] = {}
        for role in roles:
            self._roles[role.id] = role

    async def get(self, role_id: RoleId) -> Optional[Role]:
        return self._roles.get(role_id)

    async def get_by_slug(self, tenant_id: TenantId, slug: str) -> Optional[Role]:
        for role in self._roles.values():
            if role.tenant_id == tenant_id and role.slug == slug:
                return role
        return None

    async def list_for_tenant(self, tenant_id: TenantId) -> List[Role]:
        return [role for role in self._roles.values() if role.tenant_id == tenant_id]

    async def save(self, role: Role) -> Role:
        """Insert or update a role, enforcing per-tenant slug uniqueness."""
        existing = await self.get_by_slug(role.tenant_id, role.slug) if role.tenant_id else None
        if existing is not None and existing.id != role.id:
            raise StoreError(f"Duplicate role slug '{role.slug}'")

        if role.created_at is None:
            previous = self._roles.get(role.id)
            role = replace(role, created_at=previous.created_at if previous else utc_now())
        self._roles[role.id] = role
        return role

    async def update_permissions(self, role_id: RoleId, permissions: FrozenSet[str]) -> None:
        role = self._roles.get(role_id)
        if role is not None:
            self._roles[role_id] = role.with_permissions(permissions)

    async def delete(self, role_id: RoleId) -> None:
        self._roles.pop(role_id, None)


class InMemoryMembershipRepository:
    """Membership storage keyed by (user, tenant)."""

    def __init__(self, memberships: Iterable[Membership] = ()):
        self._memberships: Dict[Tuple[UserId, TenantId], Membership] = {}
        for membership in memberships:
            self.add(membership)

    def add(self, membership: Membership) -> None:
        self._memberships[(membership.user_id, membership.tenant_id)] = membership

    async def get(self, user_id: UserId, tenant_id: TenantId) -> Optional[Membership]:
        return self._memberships.get((user_id, tenant_id))

    async def list_active_for_user(self, user_id: UserId) -> List[Membership]:
        return [
            membership for (member, _), membership in self._memberships.items()
            if member == user_id and membership.is_active
        ]

    async def count_for_role(self, role_id: RoleId) -> int:
        return sum(1 for membership in self._memberships.values() if membership.role_id == role_id)
