"""Value objects shared across features."""

from .identifiers import MembershipId, RoleId, TenantId, UserId

__all__ = [
    "MembershipId",
    "RoleId",
    "TenantId",
    "UserId",
]
