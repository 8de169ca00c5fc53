"""Session issuance, tenant switching and revocation."""

import logging
from datetime import timedelta
from typing import Callable, Optional

from ....config.constants import AuditActions, AuthMethod
from ....config.settings import TenantGateSettings, get_settings
from ....core.exceptions import InvalidSession, SessionExpired, TenantBindingMismatch, mask_token_hash
from ....core.value_objects import TenantId, UserId
from ....utils import generate_token, hash_token, utc_now
from ...audit.entities import AuditLogEntry, AuditLogger
from ...permissions.entities import MembershipRepository
from ..entities import IssuedSession, Session, SessionStore


logger = logging.getLogger(__name__)


class SessionService:
    """Creates and revokes sessions.

    Sessions are immutable, so selecting a different tenant replaces the
    session rather than editing it.
    """

    def __init__(
        self,
        sessions: SessionStore,
        memberships: MembershipRepository,
        settings: Optional[TenantGateSettings] = None,
        audit: Optional[AuditLogger] = None,
        clock: Callable = utc_now,
    ):
        self.sessions = sessions
        self.memberships = memberships
        self.settings = settings or get_settings()
        self.audit = audit
        self.clock = clock

    async def issue(
        self,
        user_id: UserId,
        tenant_id: Optional[TenantId] = None,
        auth_method: AuthMethod = AuthMethod.PASSWORD,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> IssuedSession:
        """Create a session for an authenticated user.

        The lifetime is fixed by ``auth_method``. When ``tenant_id`` is given
        the user must hold an active membership in it.
        """
        if tenant_id is not None:
            await self._require_membership(user_id, tenant_id)

        now = self.clock()
        lifetime = self.settings.session_lifetimes()[auth_method]
        return await self._store(
            user_id=user_id,
            tenant_id=tenant_id,
            auth_method=auth_method,
            created_at=now,
            expires_at=now + timedelta(seconds=lifetime),
            ip_address=ip_address,
            user_agent=user_agent,
        )

    async def initial_tenant_for(self, user_id: UserId, is_super_admin: bool = False) -> Optional[TenantId]:
        """Pick the tenant to bind at login.

        A user with exactly one active membership goes straight to it;
        everyone else, and platform super admins always, select a tenant.
        """
        if is_super_admin:
            return None
        memberships = await self.memberships.list_active_for_user(user_id)
        if len(memberships) == 1:
            return memberships[0].tenant_id
        return None

    async def switch_tenant(
        self,
        token: str,
        tenant_id: TenantId,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> IssuedSession:
        """Replace the session behind ``token`` with one bound to ``tenant_id``.

        The replacement keeps the original expiry.

        Raises:
            InvalidSession: if the token is empty or unknown
            SessionExpired: if the current session has expired
            TenantBindingMismatch: if the user has no active membership in the tenant
        """
        if not token:
            raise InvalidSession("No session token presented", reason="missing_token")

        token_hash = hash_token(token)
        current = await self.sessions.find_by_token_hash(token_hash)
        if current is None:
            raise InvalidSession(token_hash=token_hash)
        if current.is_expired(self.clock()):
            raise SessionExpired(token_hash=token_hash, expired_at=current.expires_at)

        await self._require_membership(current.user_id, tenant_id)

        await self.sessions.delete(token_hash)
        issued = await self._store(
            user_id=current.user_id,
            tenant_id=tenant_id,
            auth_method=current.auth_method,
            created_at=self.clock(),
            expires_at=current.expires_at,
            ip_address=ip_address or current.ip_address,
            user_agent=user_agent or current.user_agent,
        )

        logger.info(f"User {current.user_id} switched session from tenant {current.tenant_id} to {tenant_id}")
        if self.audit is not None:
            await self.audit.record(AuditLogEntry(
                tenant_id=tenant_id,
                user_id=current.user_id,
                action=AuditActions.SESSION_TENANT_SWITCHED,
                resource_type="session",
                changes={"from_tenant_id": current.tenant_id.value if current.tenant_id else None},
                ip_address=issued.session.ip_address,
            ))
        return issued

    async def revoke(self, token: str) -> bool:
        """Delete the session behind ``token`` (logout)."""
        if not token:
            return False
        token_hash = hash_token(token)
        revoked = await self.sessions.delete(token_hash)
        if revoked:
            logger.info(f"Revoked session {mask_token_hash(token_hash)}")
        return revoked

    async def revoke_all(self, user_id: UserId) -> int:
        """Delete every session of a user."""
        return await self.sessions.delete_all_for_user(user_id)

    async def _require_membership(self, user_id: UserId, tenant_id: TenantId) -> None:
        membership = await self.memberships.get(user_id, tenant_id)
        if membership is None or not membership.is_active:
            logger.warning(f"User {user_id} has no active membership in tenant {tenant_id}")
            raise TenantBindingMismatch(
                "No active membership in the requested tenant",
                asserted_tenant=tenant_id.value,
                redirect_path=self.settings.select_tenant_path,
                reason="no_membership",
            )

    async def _store(self, **fields) -> IssuedSession:
        token = generate_token(self.settings.session_token_bytes)
        session = Session(token_hash=hash_token(token), **fields)
        await self.sessions.create(session)
        logger.debug(f"Issued session {mask_token_hash(session.token_hash)} for user {session.user_id}")
        return IssuedSession(token=token, session=session)
