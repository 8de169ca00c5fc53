"""Module definition entities for tenant-gate modules feature.

A module is an optional, tenant-enableable feature package. Its definition
is static configuration published once at process start through the
ModuleRegistry; its enablement for a tenant is a persisted record.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Optional, Tuple

from ....core.value_objects import TenantId


@dataclass(frozen=True)
class NavItem:
    """Navigation entry contributed by a module.

    ``permission`` of None marks an organisational node: a leaf without a
    permission is public, a parent without one is shown only while one of
    its descendants is visible.
    """

    label: str
    href: str
    icon: Optional[str] = None
    permission: Optional[str] = None
    children: Tuple["NavItem", ...] = ()

    def __post_init__(self):
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def with_children(self, children) -> "NavItem":
        return NavItem(
            label=self.label,
            href=self.href,
            icon=self.icon,
            permission=self.permission,
            children=tuple(children),
        )

    def walk(self) -> Iterator["NavItem"]:
        """Yield this item and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class ModuleDefinition:
    """Static description of a module: capabilities, defaults and menu."""

    id: str
    name: str
    version: str = "1.0.0"
    description: Optional[str] = None
    dependencies: FrozenSet[str] = field(default_factory=frozenset)
    permissions: FrozenSet[str] = field(default_factory=frozenset)
    role_defaults: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    navigation: Tuple[NavItem, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "dependencies", frozenset(self.dependencies))
        object.__setattr__(self, "permissions", frozenset(self.permissions))
        object.__setattr__(self, "navigation", tuple(self.navigation))
        object.__setattr__(
            self,
            "role_defaults",
            MappingProxyType({slug: frozenset(grants) for slug, grants in self.role_defaults.items()}),
        )

    def nav_permissions(self) -> FrozenSet[str]:
        """Every permission referenced by the module's navigation tree."""
        return frozenset(
            item.permission
            for root in self.navigation
            for item in root.walk()
            if item.permission is not None
        )

    def __repr__(self) -> str:
        return f"ModuleDefinition({self.id}@{self.version}, deps={sorted(self.dependencies)})"


@dataclass(frozen=True)
class TenantModuleEnablement:
    """The record whose existence means a module is active for a tenant."""

    tenant_id: TenantId
    module_id: str
    enabled_at: datetime
    config: Dict[str, Any] = field(default_factory=dict)
