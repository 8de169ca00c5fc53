"""Module services: registry, entitlements and navigation."""

from .entitlement_resolver import EntitlementResolver
from .navigation_composer import NavigationComposer
from .registry import ModuleRegistry

__all__ = ["EntitlementResolver", "NavigationComposer", "ModuleRegistry"]
