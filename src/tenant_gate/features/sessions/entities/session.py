"""Session entities for tenant-gate sessions feature.

A session is created at login, bound to at most one tenant, and never
changed afterwards: it is either used until it expires or deleted.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Optional

from ....config.constants import AuthMethod
from ....core.value_objects import TenantId, UserId
from ...permissions.entities import Membership, Role


@dataclass(frozen=True)
class Session:
    """Stored session record. Only the SHA-256 hash of the token is kept."""

    token_hash: str
    user_id: UserId
    tenant_id: Optional[TenantId]
    expires_at: datetime
    created_at: datetime
    auth_method: AuthMethod = AuthMethod.PASSWORD
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    @property
    def has_tenant(self) -> bool:
        return self.tenant_id is not None

    def __repr__(self) -> str:
        return (
            f"Session(user={self.user_id}, tenant={self.tenant_id}, "
            f"method={self.auth_method.value}, expires_at={self.expires_at.isoformat()})"
        )


@dataclass(frozen=True)
class BoundSession:
    """A session that passed tenant binding, with the caller's membership and role.

    ``membership`` and ``role`` are None only for sessions not yet bound to
    a tenant (the tenant-selection flow).
    """

    session: Session
    membership: Optional[Membership] = None
    role: Optional[Role] = None

    @property
    def user_id(self) -> UserId:
        return self.session.user_id

    @property
    def tenant_id(self) -> Optional[TenantId]:
        return self.session.tenant_id

    @property
    def permissions(self) -> FrozenSet[str]:
        """The role's permission set, or empty when no role is bound."""
        return self.role.permissions if self.role is not None else frozenset()


@dataclass(frozen=True)
class IssuedSession:
    """A newly created session and its raw token.

    The token is returned exactly once and is never stored.
    """

    token: str
    session: Session

    def __repr__(self) -> str:
        return f"IssuedSession({self.session!r})"
