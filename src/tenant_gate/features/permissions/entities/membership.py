"""Membership domain entity: one user in one tenant with one role."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ....core.value_objects import MembershipId, RoleId, TenantId, UserId


@dataclass(frozen=True)
class Membership:
    """Binding of a user to a tenant with a role."""

    id: MembershipId
    user_id: UserId
    tenant_id: TenantId
    role_id: RoleId
    is_active: bool = True
    pin_hash: Optional[str] = None
    joined_at: Optional[datetime] = None

    def __repr__(self) -> str:
        state = "active" if self.is_active else "inactive"
        return f"Membership(user={self.user_id}, tenant={self.tenant_id}, role={self.role_id}, {state})"
