"""Redis session repository for tenant-gate sessions feature."""

import json
import logging
from datetime import datetime
from typing import Callable, Optional

from ....config.constants import AuthMethod
from ....core.exceptions import StoreError, mask_token_hash
from ....core.value_objects import TenantId, UserId
from ....utils import utc_now
from ..entities import Session

logger = logging.getLogger(__name__)


class RedisSessionRepository:
    """Redis implementation of SessionStore protocol.

    Handles ONLY session storage. Each session lives under its token hash
    with a TTL matching its expiry; a per-user set indexes a user's
    sessions for bulk revocation.
    """

    def __init__(self, redis_client, key_prefix: str = "tenant_gate:session", clock: Callable = utc_now):
        """Initialize Redis session repository.

        Args:
            redis_client: ``redis.asyncio.Redis`` client instance
            key_prefix: Prefix for session keys in Redis
            clock: Returns the current aware UTC datetime
        """
        if not redis_client:
            raise ValueError("Redis client is required")
        self.redis = redis_client
        self.key_prefix = key_prefix
        self.clock = clock

    def _make_session_key(self, token_hash: str) -> str:
        return f"{self.key_prefix}:{token_hash}"

    def _make_user_sessions_key(self, user_id: UserId) -> str:
        return f"{self.key_prefix}:user:{user_id.value}"

    def _serialize_session(self, session: Session) -> str:
        """Serialize session to JSON string for Redis storage."""
        session_data = {
            "token_hash": session.token_hash,
            "user_id": session.user_id.value,
            "tenant_id": session.tenant_id.value if session.tenant_id else None,
            "auth_method": session.auth_method.value,
            "ip_address": session.ip_address,
            "user_agent": session.user_agent,
            "created_at": session.created_at.isoformat(),
            "expires_at": session.expires_at.isoformat(),
        }
        return json.dumps(session_data)

    def _deserialize_session(self, session_data) -> Session:
        """Deserialize session from JSON string."""
        if isinstance(session_data, bytes):
            session_data = session_data.decode()
        data = json.loads(session_data)
        return Session(
            token_hash=data["token_hash"],
            user_id=UserId(data["user_id"]),
            tenant_id=TenantId(data["tenant_id"]) if data.get("tenant_id") else None,
            auth_method=AuthMethod(data.get("auth_method", AuthMethod.PASSWORD.value)),
            ip_address=data.get("ip_address"),
            user_agent=data.get("user_agent"),
            created_at=datetime.fromisoformat(data["created_at"]),
            expires_at=datetime.fromisoformat(data["expires_at"]),
        )

    async def create(self, session: Session) -> None:
        """Store a new session with a TTL matching its expiry.

        Raises:
            StoreError: if the token hash is taken or Redis fails
        """
        session_key = self._make_session_key(session.token_hash)
        user_sessions_key = self._make_user_sessions_key(session.user_id)
        ttl_seconds = int((session.expires_at - self.clock()).total_seconds())
        if ttl_seconds <= 0:
            raise StoreError(
                "Cannot store an already expired session",
                details={"token_hash": mask_token_hash(session.token_hash)},
            )

        try:
            # the index must outlive every session it lists
            index_ttl = await self.redis.ttl(user_sessions_key)

            pipe = self.redis.pipeline()
            pipe.set(session_key, self._serialize_session(session), ex=ttl_seconds, nx=True)
            pipe.sadd(user_sessions_key, session.token_hash)
            if index_ttl is None or index_ttl < ttl_seconds:
                pipe.expire(user_sessions_key, ttl_seconds)
            results = await pipe.execute()

        except Exception as e:
            logger.error(f"Failed to store session {mask_token_hash(session.token_hash)}: {e}")
            raise StoreError(f"Session storage failed: {e}") from e

        if not results[0]:
            await self.redis.srem(user_sessions_key, session.token_hash)
            raise StoreError(
                "Session token hash already in use",
                details={"token_hash": mask_token_hash(session.token_hash)},
            )

        logger.debug(f"Stored session {mask_token_hash(session.token_hash)} with TTL {ttl_seconds}")

    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get session from Redis, or None if absent or expired by TTL."""
        try:
            session_data = await self.redis.get(self._make_session_key(token_hash))
        except Exception as e:
            logger.error(f"Failed to get session {mask_token_hash(token_hash)}: {e}")
            raise StoreError(f"Session lookup failed: {e}") from e

        if not session_data:
            return None

        try:
            return self._deserialize_session(session_data)
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to deserialize session {mask_token_hash(token_hash)}: {e}")
            raise StoreError("Session record is corrupt") from e

    async def delete(self, token_hash: str) -> bool:
        """Delete session from Redis.

        Returns:
            True if session was deleted, False if not found
        """
        session = await self.find_by_token_hash(token_hash)
        if session is None:
            return False

        try:
            pipe = self.redis.pipeline()
            pipe.delete(self._make_session_key(token_hash))
            pipe.srem(self._make_user_sessions_key(session.user_id), token_hash)
            results = await pipe.execute()

        except Exception as e:
            logger.error(f"Failed to delete session {mask_token_hash(token_hash)}: {e}")
            raise StoreError(f"Session deletion failed: {e}") from e

        deleted = results[0] > 0
        if deleted:
            logger.debug(f"Deleted session {mask_token_hash(token_hash)}")
        return deleted

    async def delete_all_for_user(self, user_id: UserId) -> int:
        """Delete every session indexed for a user."""
        user_sessions_key = self._make_user_sessions_key(user_id)
        try:
            token_hashes = await self.redis.smembers(user_sessions_key)
            if not token_hashes:
                return 0

            pipe = self.redis.pipeline()
            for token_hash in token_hashes:
                if isinstance(token_hash, bytes):
                    token_hash = token_hash.decode()
                pipe.delete(self._make_session_key(token_hash))
            pipe.delete(user_sessions_key)
            results = await pipe.execute()

        except Exception as e:
            logger.error(f"Failed to delete sessions for user {user_id}: {e}")
            raise StoreError(f"Session deletion failed: {e}") from e

        deleted = sum(results[:-1])
        logger.info(f"Deleted {deleted} session(s) for user {user_id}")
        return deleted
