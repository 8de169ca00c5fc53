"""Permission entities: grammar, roles, memberships and store protocols."""

from .membership import Membership
from .permission import PermissionCode, is_valid_permission, parse_permissions
from .protocols import MembershipRepository, RoleRepository
from .role import Role

__all__ = [
    "Membership",
    "PermissionCode",
    "is_valid_permission",
    "parse_permissions",
    "MembershipRepository",
    "RoleRepository",
    "Role",
]
