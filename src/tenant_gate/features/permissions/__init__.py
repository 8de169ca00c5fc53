"""Permissions feature for tenant-gate.

Permission grammar, the wildcard matcher, tenant roles and memberships.
"""

from .entities import (
    Membership,
    MembershipRepository,
    PermissionCode,
    Role,
    RoleRepository,
    is_valid_permission,
    parse_permissions,
)
from .services import (
    RoleDefaultsMerger,
    RoleService,
    can_assign,
    matches,
    matches_all,
    matches_any,
)

__all__ = [
    "Membership",
    "MembershipRepository",
    "PermissionCode",
    "Role",
    "RoleRepository",
    "is_valid_permission",
    "parse_permissions",
    "RoleDefaultsMerger",
    "RoleService",
    "can_assign",
    "matches",
    "matches_all",
    "matches_any",
]
