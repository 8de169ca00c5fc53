"""Module registry.

Immutable collection of module definitions, validated once at publication
time. Every consistency rule (unique ids, known dependencies, acyclic
dependency graph, well-formed permissions) is checked here so request-time
code never has to.
"""

import logging
from typing import AbstractSet, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from ....config.constants import PLATFORM_PERMISSIONS
from ....core.exceptions import (
    DuplicateModule,
    ModuleDependencyCycle,
    ModuleNotFound,
    UnknownModuleDependency,
)
from ...permissions.entities import parse_permissions
from ..entities import ModuleCatalog, ModuleDefinition


logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Validated, read-only view of the published module catalog."""

    def __init__(
        self,
        definitions: Iterable[ModuleDefinition],
        platform_permissions: Optional[AbstractSet[str]] = None,
    ):
        modules: Dict[str, ModuleDefinition] = {}
        for definition in definitions:
            if definition.id in modules:
                raise DuplicateModule(definition.id)
            modules[definition.id] = definition

        for definition in modules.values():
            _validate_permissions(definition)
            for dependency in sorted(definition.dependencies):
                if dependency not in modules:
                    raise UnknownModuleDependency(definition.id, dependency)

        self._modules = modules
        self._order: Tuple[str, ...] = _topological_order(modules)
        self._platform_permissions = parse_permissions(
            PLATFORM_PERMISSIONS if platform_permissions is None else platform_permissions
        )

        logger.info(f"Published module registry with {len(modules)} module(s): {list(self._order)}")

    @classmethod
    def from_catalog(
        cls,
        catalog: ModuleCatalog,
        platform_permissions: Optional[AbstractSet[str]] = None,
    ) -> "ModuleRegistry":
        """Build a registry from a ModuleCatalog implementation."""
        return cls(catalog.list_module_definitions(), platform_permissions)

    @classmethod
    def from_definitions(cls, *definitions: ModuleDefinition) -> "ModuleRegistry":
        return cls(definitions)

    def get(self, module_id: str) -> ModuleDefinition:
        """Get a module definition by id.

        Raises:
            ModuleNotFound: if the id is not registered
        """
        try:
            return self._modules[module_id]
        except KeyError:
            raise ModuleNotFound(module_id) from None

    def find(self, module_id: str) -> Optional[ModuleDefinition]:
        return self._modules.get(module_id)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    def __iter__(self) -> Iterator[ModuleDefinition]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self._modules)

    def ordered(self) -> List[ModuleDefinition]:
        """All modules, dependencies before dependents."""
        return [self._modules[module_id] for module_id in self._order]

    def ids(self) -> Tuple[str, ...]:
        return self._order

    def dependents_of(self, module_id: str) -> List[str]:
        """Ids of modules that directly depend on ``module_id``, in registry order."""
        return [
            other for other in self._order
            if module_id in self._modules[other].dependencies
        ]

    @property
    def platform_permissions(self) -> FrozenSet[str]:
        """Capabilities the platform provides to every tenant."""
        return self._platform_permissions


def _validate_permissions(definition: ModuleDefinition) -> None:
    """Raise InvalidPermissionFormat for any malformed permission in a definition."""
    parse_permissions(definition.permissions)
    for grants in definition.role_defaults.values():
        parse_permissions(grants)
    parse_permissions(definition.nav_permissions())


def _topological_order(modules: Dict[str, ModuleDefinition]) -> Tuple[str, ...]:
    """Order module ids so dependencies come first.

    Ties keep catalog order. Raises ModuleDependencyCycle carrying the cycle
    path, e.g. ``["a", "b", "a"]``.
    """
    done = set()
    path: List[str] = []
    result: List[str] = []

    def visit(module_id: str) -> None:
        if module_id in done:
            return
        if module_id in path:
            start = path.index(module_id)
            raise ModuleDependencyCycle(path[start:] + [module_id])

        path.append(module_id)
        for dependency in sorted(modules[module_id].dependencies):
            visit(dependency)
        path.pop()

        done.add(module_id)
        result.append(module_id)

    for module_id in modules:
        visit(module_id)
    return tuple(result)
