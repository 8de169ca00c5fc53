"""Core building blocks for tenant-gate: exceptions and value objects."""

from .exceptions import TenantGateError
from .value_objects import MembershipId, RoleId, TenantId, UserId

__all__ = [
    "TenantGateError",
    "MembershipId",
    "RoleId",
    "TenantId",
    "UserId",
]
