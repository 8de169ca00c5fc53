"""Features of tenant-gate.

Each feature package holds its entities (dataclasses and store protocols),
services and repository implementations.
"""

from .modules import EntitlementResolver, ModuleRegistry, NavigationComposer
from .permissions import RoleDefaultsMerger, RoleService, matches
from .sessions import SessionBinder, SessionService

__all__ = [
    "EntitlementResolver",
    "ModuleRegistry",
    "NavigationComposer",
    "RoleDefaultsMerger",
    "RoleService",
    "matches",
    "SessionBinder",
    "SessionService",
]
