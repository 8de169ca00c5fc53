"""Protocol interface for tenant lookups."""

from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable

from ....core.value_objects import TenantId


@runtime_checkable
class TenantDirectory(Protocol):
    """Protocol for resolving tenant identifiers and route slugs."""

    @abstractmethod
    async def get_tenant_slug_by_id(self, tenant_id: TenantId) -> Optional[str]:
        """Get a tenant's route slug, or None if the tenant does not exist."""
        ...

    @abstractmethod
    async def get_tenant_id_by_slug(self, slug: str) -> Optional[TenantId]:
        """Get the tenant a route slug refers to."""
        ...
