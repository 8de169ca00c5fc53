"""Modules feature for tenant-gate.

Module catalog, per-tenant entitlements and navigation composition.
"""

from .builtin import BUILTIN_MODULES, PLATFORM_NAVIGATION
from .entities import (
    EnablementRepository,
    ModuleCatalog,
    ModuleDefinition,
    NavItem,
    TenantModuleEnablement,
)
from .repositories import StaticModuleCatalog
from .services import EntitlementResolver, ModuleRegistry, NavigationComposer

__all__ = [
    "BUILTIN_MODULES",
    "PLATFORM_NAVIGATION",
    "EnablementRepository",
    "ModuleCatalog",
    "ModuleDefinition",
    "NavItem",
    "TenantModuleEnablement",
    "StaticModuleCatalog",
    "EntitlementResolver",
    "ModuleRegistry",
    "NavigationComposer",
]
