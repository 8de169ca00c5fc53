"""Session-to-tenant binding.

Every tenant-scoped request asserts a tenant (through its route) and
presents a session token. The tenant the session is bound to is the only
one the request may act under: a mismatch is answered with a redirect to
the caller's real tenant, never by serving the asserted one.
"""

import logging
from typing import Callable, Optional

from ....config.settings import TenantGateSettings, get_settings
from ....core.exceptions import InvalidSession, SessionExpired, TenantBindingMismatch, mask_token_hash
from ....core.value_objects import TenantId
from ....utils import hash_token, utc_now
from ...permissions.entities import MembershipRepository, RoleRepository
from ...tenants.entities import TenantDirectory
from ..entities import BoundSession, Session, SessionStore


logger = logging.getLogger(__name__)


class SessionBinder:
    """Resolves session tokens into tenant-bound sessions. Read-only."""

    def __init__(
        self,
        sessions: SessionStore,
        memberships: MembershipRepository,
        roles: RoleRepository,
        tenants: TenantDirectory,
        settings: Optional[TenantGateSettings] = None,
        clock: Callable = utc_now,
    ):
        self.sessions = sessions
        self.memberships = memberships
        self.roles = roles
        self.tenants = tenants
        self.settings = settings or get_settings()
        self.clock = clock

    async def resolve(self, token: Optional[str], asserted_tenant_id: Optional[TenantId] = None) -> BoundSession:
        """Resolve a token, checking it against the asserted tenant if one is given.

        Raises:
            InvalidSession: if the token is empty or unknown
            SessionExpired: if the session's lifetime has passed
            TenantBindingMismatch: if the asserted tenant is not the session's
                tenant, or the session's membership is missing or inactive
        """
        session = await self._load(token)

        if asserted_tenant_id is not None and session.tenant_id != asserted_tenant_id:
            raise await self._mismatch(session, asserted_tenant_id.value)

        return await self._bind(session)

    async def resolve_for_route(self, token: Optional[str], tenant_slug: str) -> BoundSession:
        """Resolve a token for a route addressed by tenant slug.

        The session tenant's slug must equal ``tenant_slug``.
        """
        session = await self._load(token)

        if session.tenant_id is None:
            raise await self._mismatch(session, tenant_slug)

        bound_slug = await self.tenants.get_tenant_slug_by_id(session.tenant_id)
        if bound_slug != tenant_slug:
            raise await self._mismatch(session, tenant_slug, bound_slug=bound_slug)

        return await self._bind(session)

    async def _load(self, token: Optional[str]) -> Session:
        if not token:
            raise InvalidSession("No session token presented", reason="missing_token")

        token_hash = hash_token(token)
        session = await self.sessions.find_by_token_hash(token_hash)
        if session is None:
            raise InvalidSession(token_hash=token_hash)

        if session.is_expired(self.clock()):
            logger.info(f"Rejected expired session {mask_token_hash(token_hash)}")
            raise SessionExpired(token_hash=token_hash, expired_at=session.expires_at)

        return session

    async def _bind(self, session: Session) -> BoundSession:
        if session.tenant_id is None:
            return BoundSession(session=session)

        membership = await self.memberships.get(session.user_id, session.tenant_id)
        if membership is None or not membership.is_active:
            logger.warning(
                f"Session of user {session.user_id} is bound to tenant {session.tenant_id} "
                f"without an active membership"
            )
            raise TenantBindingMismatch(
                "Session tenant membership is missing or inactive",
                bound_tenant_id=session.tenant_id.value,
                redirect_path=self.settings.select_tenant_path,
                reason="membership_inactive",
            )

        role = await self.roles.get(membership.role_id)
        if role is None:
            logger.error(f"Membership {membership.id} references missing role {membership.role_id}")

        return BoundSession(session=session, membership=membership, role=role)

    async def _mismatch(
        self,
        session: Session,
        asserted_tenant: str,
        bound_slug: Optional[str] = None,
    ) -> TenantBindingMismatch:
        """Build the redirecting rejection for a request under the wrong tenant."""
        if session.tenant_id is None:
            redirect_path = self.settings.select_tenant_path
            reason = "no_tenant_selected"
        else:
            if bound_slug is None:
                bound_slug = await self.tenants.get_tenant_slug_by_id(session.tenant_id)
            if bound_slug is None:
                redirect_path = self.settings.select_tenant_path
            else:
                redirect_path = self.settings.tenant_home(bound_slug)
            reason = "tenant_mismatch"

        logger.warning(
            f"Tenant binding violation for user {session.user_id}: asserted {asserted_tenant}, "
            f"bound {session.tenant_id}, redirecting to {redirect_path}"
        )
        return TenantBindingMismatch(
            bound_tenant_id=session.tenant_id.value if session.tenant_id else None,
            asserted_tenant=asserted_tenant,
            redirect_path=redirect_path,
            reason=reason,
        )
