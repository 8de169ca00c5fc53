"""Protocol interfaces for permission feature dependency injection.

Defines contracts for role and membership data access. Implementations
live in ``repositories/``.
"""

from abc import abstractmethod
from typing import FrozenSet, List, Optional, Protocol, runtime_checkable

from ....core.value_objects import RoleId, TenantId, UserId
from .membership import Membership
from .role import Role


@runtime_checkable
class RoleRepository(Protocol):
    """Protocol for role data access operations."""

    @abstractmethod
    async def get(self, role_id: RoleId) -> Optional[Role]:
        """Get role by ID."""
        ...

    @abstractmethod
    async def get_by_slug(self, tenant_id: TenantId, slug: str) -> Optional[Role]:
        """Get a tenant's role by slug."""
        ...

    @abstractmethod
    async def list_for_tenant(self, tenant_id: TenantId) -> List[Role]:
        """List all roles owned by a tenant, oldest first."""
        ...

    @abstractmethod
    async def save(self, role: Role) -> Role:
        """Insert or update a role. Callers validate before saving."""
        ...

    @abstractmethod
    async def update_permissions(self, role_id: RoleId, permissions: FrozenSet[str]) -> None:
        """Replace a role's permission set."""
        ...

    @abstractmethod
    async def delete(self, role_id: RoleId) -> None:
        """Delete a role."""
        ...


@runtime_checkable
class MembershipRepository(Protocol):
    """Protocol for membership data access operations."""

    @abstractmethod
    async def get(self, user_id: UserId, tenant_id: TenantId) -> Optional[Membership]:
        """Get the membership linking a user to a tenant."""
        ...

    @abstractmethod
    async def list_active_for_user(self, user_id: UserId) -> List[Membership]:
        """List a user's active memberships across tenants."""
        ...

    @abstractmethod
    async def count_for_role(self, role_id: RoleId) -> int:
        """Count memberships assigned to a role."""
        ...
