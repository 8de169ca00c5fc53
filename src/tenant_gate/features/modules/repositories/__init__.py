"""Module repositories: catalog sources and enablement stores."""

from .enablement_repository import AsyncPGEnablementRepository, InMemoryEnablementRepository
from .static_catalog import ModuleDefinitionSchema, NavItemSchema, StaticModuleCatalog

__all__ = [
    "AsyncPGEnablementRepository",
    "InMemoryEnablementRepository",
    "ModuleDefinitionSchema",
    "NavItemSchema",
    "StaticModuleCatalog",
]
