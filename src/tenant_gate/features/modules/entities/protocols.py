"""Protocol interfaces for the modules feature."""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from ....core.value_objects import TenantId
from .module_definition import ModuleDefinition, TenantModuleEnablement


@runtime_checkable
class ModuleCatalog(Protocol):
    """Protocol for the source of module definitions."""

    @abstractmethod
    def list_module_definitions(self) -> List[ModuleDefinition]:
        """Return every module definition to publish."""
        ...


@runtime_checkable
class EnablementRepository(Protocol):
    """Protocol for tenant module enablement records."""

    @abstractmethod
    async def list_for_tenant(self, tenant_id: TenantId) -> List[TenantModuleEnablement]:
        """List a tenant's enablements."""
        ...

    @abstractmethod
    async def get(self, tenant_id: TenantId, module_id: str) -> Optional[TenantModuleEnablement]:
        """Get one enablement, or None if the module is not enabled."""
        ...

    @abstractmethod
    async def insert(self, enablement: TenantModuleEnablement) -> None:
        """Persist a new enablement."""
        ...

    @abstractmethod
    async def delete(self, tenant_id: TenantId, module_id: str) -> bool:
        """Remove an enablement. Returns True if a record was removed."""
        ...
