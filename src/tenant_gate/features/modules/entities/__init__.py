"""Module entities and protocols."""

from .module_definition import ModuleDefinition, NavItem, TenantModuleEnablement
from .protocols import EnablementRepository, ModuleCatalog

__all__ = [
    "ModuleDefinition",
    "NavItem",
    "TenantModuleEnablement",
    "EnablementRepository",
    "ModuleCatalog",
]
