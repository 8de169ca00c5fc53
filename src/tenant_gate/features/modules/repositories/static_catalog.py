"""Static module catalog.

Serves module definitions declared in code or loaded from a JSON file. JSON
input is validated with pydantic before it becomes a ModuleDefinition.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ....core.exceptions import ModuleRegistryError
from ..entities import ModuleDefinition, NavItem


logger = logging.getLogger(__name__)


class NavItemSchema(BaseModel):
    """JSON shape of a navigation entry."""

    model_config = ConfigDict(extra="forbid")

    label: str
    href: str
    icon: Optional[str] = None
    permission: Optional[str] = None
    children: List["NavItemSchema"] = Field(default_factory=list)

    def to_entity(self) -> NavItem:
        return NavItem(
            label=self.label,
            href=self.href,
            icon=self.icon,
            permission=self.permission,
            children=tuple(child.to_entity() for child in self.children),
        )


class ModuleDefinitionSchema(BaseModel):
    """JSON shape of a module definition; accepts camelCase ``roleDefaults``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    version: str = "1.0.0"
    description: Optional[str] = None
    dependencies: List[str] = Field(default_factory=list)
    permissions: List[str] = Field(default_factory=list)
    role_defaults: Dict[str, List[str]] = Field(default_factory=dict, alias="roleDefaults")
    navigation: List[NavItemSchema] = Field(default_factory=list)

    def to_entity(self) -> ModuleDefinition:
        return ModuleDefinition(
            id=self.id,
            name=self.name,
            version=self.version,
            description=self.description,
            dependencies=frozenset(self.dependencies),
            permissions=frozenset(self.permissions),
            role_defaults={slug: frozenset(grants) for slug, grants in self.role_defaults.items()},
            navigation=tuple(item.to_entity() for item in self.navigation),
        )


_CATALOG_ADAPTER = TypeAdapter(List[ModuleDefinitionSchema])


class StaticModuleCatalog:
    """ModuleCatalog over a fixed list of definitions."""

    def __init__(self, definitions: Iterable[ModuleDefinition] = ()):
        self._definitions = list(definitions)

    def list_module_definitions(self) -> List[ModuleDefinition]:
        return list(self._definitions)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "StaticModuleCatalog":
        """Parse a JSON array of module definitions.

        Raises:
            ModuleRegistryError: if the document does not match the schema
        """
        try:
            schemas = _CATALOG_ADAPTER.validate_json(data)
        except PydanticValidationError as e:
            logger.error(f"Invalid module catalog document: {e.error_count()} error(s)")
            raise ModuleRegistryError(
                "Invalid module catalog document",
                details={"errors": e.errors(include_url=False)},
            ) from e
        return cls(schema.to_entity() for schema in schemas)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StaticModuleCatalog":
        path = Path(path)
        logger.info(f"Loading module catalog from {path}")
        return cls.from_json(path.read_bytes())

    @classmethod
    def builtin(cls) -> "StaticModuleCatalog":
        """Catalog of the modules shipped with the platform."""
        from ..builtin import BUILTIN_MODULES
        return cls(BUILTIN_MODULES)
