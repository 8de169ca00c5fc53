"""Permission services: matching, role management and module defaults."""

from .matcher import can_assign, matches, matches_all, matches_any, unassignable
from .role_defaults import RoleDefaultsMerger
from .role_service import RoleService

__all__ = [
    "matches",
    "matches_all",
    "matches_any",
    "unassignable",
    "can_assign",
    "RoleDefaultsMerger",
    "RoleService",
]
