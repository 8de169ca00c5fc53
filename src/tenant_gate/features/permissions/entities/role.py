"""Role domain entity for tenant-gate permissions feature.

Represents a tenant role with a flat permission set. System roles are the
tagged variant (``system_role`` set); custom roles carry ``None``.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import FrozenSet, Iterable, Optional

from ....config.constants import SYSTEM_ROLE_PERMISSIONS, SystemRole
from ....core.value_objects import RoleId, TenantId


@dataclass(frozen=True)
class Role:
    """Domain entity representing a tenant role and the permissions it grants."""

    id: RoleId
    tenant_id: Optional[TenantId]
    name: str
    slug: str
    permissions: FrozenSet[str] = field(default_factory=frozenset)
    system_role: Optional[SystemRole] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not isinstance(self.permissions, frozenset):
            object.__setattr__(self, "permissions", frozenset(self.permissions))

    @property
    def is_system(self) -> bool:
        """Check if this is a built-in role."""
        return self.system_role is not None

    @property
    def is_owner(self) -> bool:
        """Check if this is the tenant owner role."""
        return self.system_role is SystemRole.OWNER

    @property
    def is_editable(self) -> bool:
        """Custom roles are editable through role management; system roles are not."""
        return self.system_role is None

    def with_permissions(self, permissions: Iterable[str]) -> "Role":
        """Return a copy holding ``permissions``."""
        return replace(self, permissions=frozenset(permissions))

    def with_added_permissions(self, grants: Iterable[str]) -> "Role":
        """Return a copy whose permissions are the union with ``grants``."""
        return replace(self, permissions=self.permissions | frozenset(grants))

    @classmethod
    def system(cls, role_id: RoleId, tenant_id: TenantId, system_role: SystemRole) -> "Role":
        """Build a system role with its default permission set."""
        return cls(
            id=role_id,
            tenant_id=tenant_id,
            name=system_role.value.capitalize(),
            slug=system_role.value,
            permissions=SYSTEM_ROLE_PERMISSIONS[system_role],
            system_role=system_role,
        )

    def __str__(self) -> str:
        return f"Role({self.slug})"

    def __repr__(self) -> str:
        kind = self.system_role.value if self.system_role else "custom"
        return f"Role({self.slug}, kind={kind}, permissions={len(self.permissions)})"
