"""Module entitlement and registry exceptions.

Entitlement errors carry the offending module ids so callers can explain
the required order of operations.
"""

from typing import Optional, Sequence

from .base import TenantGateError


class EntitlementError(TenantGateError):
    """Base exception for module enable/disable failures."""
    pass


class ModuleNotFound(EntitlementError):
    """Raised when a module id is not in the registry."""

    def __init__(self, module_id: str) -> None:
        super().__init__(f"Module '{module_id}' is not registered", details={"module_id": module_id})
        self.module_id = module_id


class MissingDependency(EntitlementError):
    """Raised when enabling a module whose dependency is not enabled."""

    def __init__(self, module_id: str, missing_dependency: str) -> None:
        super().__init__(
            f"Module '{module_id}' requires '{missing_dependency}' to be enabled first",
            details={"module_id": module_id, "missing_dependency": missing_dependency},
        )
        self.module_id = module_id
        self.missing_dependency = missing_dependency


class DependentModuleActive(EntitlementError):
    """Raised when disabling a module that an enabled module depends on."""

    def __init__(self, module_id: str, dependent_id: str) -> None:
        super().__init__(
            f"Cannot disable '{module_id}': '{dependent_id}' depends on it",
            details={"module_id": module_id, "dependent_id": dependent_id},
        )
        self.module_id = module_id
        self.dependent_id = dependent_id


class ModuleNotEnabled(EntitlementError):
    """Raised when a tenant-scoped feature requires a module the tenant lacks."""

    def __init__(self, module_id: str, tenant_id: Optional[str] = None) -> None:
        super().__init__(
            f"Module '{module_id}' is not enabled for this tenant",
            details={"module_id": module_id, "tenant_id": tenant_id},
        )
        self.module_id = module_id


class ModuleRegistryError(TenantGateError):
    """Base exception for module catalog problems detected at publication time."""
    pass


class DuplicateModule(ModuleRegistryError):
    """Raised when two catalog entries share a module id."""

    def __init__(self, module_id: str) -> None:
        super().__init__(f"Module '{module_id}' is defined more than once", details={"module_id": module_id})


class UnknownModuleDependency(ModuleRegistryError):
    """Raised when a module depends on a module that is not registered."""

    def __init__(self, module_id: str, dependency: str) -> None:
        super().__init__(
            f"Module '{module_id}' depends on '{dependency}' which is not registered",
            details={"module_id": module_id, "dependency": dependency},
        )


class ModuleDependencyCycle(ModuleRegistryError):
    """Raised when the module dependency graph contains a cycle."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = list(cycle)
        super().__init__(
            f"Module dependency cycle: {' -> '.join(self.cycle)}",
            details={"cycle": self.cycle},
        )
