"""Tests for the Redis session repository against a mocked client."""

import json
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from tenant_gate.config.constants import AuthMethod
from tenant_gate.core.exceptions import StoreError
from tenant_gate.core.value_objects import UserId
from tenant_gate.features.sessions.entities import Session
from tenant_gate.features.sessions.repositories import RedisSessionRepository


TOKEN_HASH = "ab" * 32


@pytest.fixture
def pipeline():
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[True, 1, True])
    return pipe


@pytest.fixture
def redis_client(pipeline):
    client = MagicMock()
    client.pipeline.return_value = pipeline
    client.ttl = AsyncMock(return_value=-2)
    client.get = AsyncMock(return_value=None)
    client.srem = AsyncMock(return_value=1)
    client.smembers = AsyncMock(return_value=set())
    return client


@pytest.fixture
def repository(redis_client, clock):
    return RedisSessionRepository(redis_client, key_prefix="test:session", clock=clock)


@pytest.fixture
def session(user_id, tenant_id, clock):
    return Session(
        token_hash=TOKEN_HASH,
        user_id=user_id,
        tenant_id=tenant_id,
        auth_method=AuthMethod.PIN,
        created_at=clock.now,
        expires_at=clock.now + timedelta(hours=4),
        ip_address="10.0.0.1",
        user_agent="pytest",
    )


class TestRedisSessionRepository:
    """Test RedisSessionRepository."""

    def test_requires_client(self):
        """Test that a client is mandatory."""
        with pytest.raises(ValueError):
            RedisSessionRepository(None)

    @pytest.mark.asyncio
    async def test_create_sets_key_with_ttl(self, repository, pipeline, session, user_id):
        """Test atomic creation with expiry and user index."""
        await repository.create(session)

        args, kwargs = pipeline.set.call_args
        assert args[0] == f"test:session:{TOKEN_HASH}"
        assert kwargs == {"ex": 4 * 60 * 60, "nx": True}
        assert json.loads(args[1])["auth_method"] == "pin"
        pipeline.sadd.assert_called_once_with(f"test:session:user:{user_id.value}", TOKEN_HASH)
        pipeline.expire.assert_called_once_with(f"test:session:user:{user_id.value}", 4 * 60 * 60)

    @pytest.mark.asyncio
    async def test_create_keeps_longer_index_ttl(self, repository, redis_client, pipeline, session):
        """Test that a short session does not shorten the user index."""
        redis_client.ttl.return_value = 30 * 24 * 60 * 60

        await repository.create(session)

        pipeline.expire.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_collision(self, repository, redis_client, pipeline, session):
        """Test that an existing hash is never overwritten."""
        pipeline.execute.return_value = [None, 0, True]

        with pytest.raises(StoreError):
            await repository.create(session)
        redis_client.srem.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_expired(self, repository, session, clock):
        """Test that expired sessions are not stored."""
        clock.advance(hours=5)
        with pytest.raises(StoreError):
            await repository.create(session)

    @pytest.mark.asyncio
    async def test_create_wraps_redis_errors(self, repository, pipeline, session):
        """Test that driver errors surface as StoreError."""
        pipeline.execute.side_effect = ConnectionError("redis down")
        with pytest.raises(StoreError):
            await repository.create(session)

    @pytest.mark.asyncio
    async def test_find_round_trip(self, repository, redis_client, session):
        """Test that a stored payload deserializes to the same session."""
        redis_client.get.return_value = repository._serialize_session(session).encode()

        found = await repository.find_by_token_hash(TOKEN_HASH)

        assert found == session
        redis_client.get.assert_awaited_once_with(f"test:session:{TOKEN_HASH}")

    @pytest.mark.asyncio
    async def test_find_missing(self, repository):
        """Test that absent keys yield None."""
        assert await repository.find_by_token_hash(TOKEN_HASH) is None

    @pytest.mark.asyncio
    async def test_find_corrupt(self, repository, redis_client):
        """Test that unreadable records raise StoreError."""
        redis_client.get.return_value = b"{not json"
        with pytest.raises(StoreError):
            await repository.find_by_token_hash(TOKEN_HASH)

    @pytest.mark.asyncio
    async def test_delete(self, repository, redis_client, pipeline, session, user_id):
        """Test deleting a session and its index entry."""
        redis_client.get.return_value = repository._serialize_session(session)
        pipeline.execute.return_value = [1, 1]

        assert await repository.delete(TOKEN_HASH) is True
        pipeline.delete.assert_called_once_with(f"test:session:{TOKEN_HASH}")
        pipeline.srem.assert_called_once_with(f"test:session:user:{user_id.value}", TOKEN_HASH)

    @pytest.mark.asyncio
    async def test_delete_missing(self, repository, redis_client):
        """Test deleting an unknown hash."""
        assert await repository.delete(TOKEN_HASH) is False
        redis_client.pipeline.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_all_for_user(self, repository, redis_client, pipeline):
        """Test bulk revocation through the user index."""
        redis_client.smembers.return_value = {b"h1", b"h2"}
        pipeline.execute.return_value = [1, 0, 1]

        deleted = await repository.delete_all_for_user(UserId("user-alice"))

        assert deleted == 1
        deleted_keys = {call.args[0] for call in pipeline.delete.call_args_list}
        assert deleted_keys == {"test:session:h1", "test:session:h2", "test:session:user:user-alice"}

    @pytest.mark.asyncio
    async def test_delete_all_without_sessions(self, repository, redis_client):
        """Test bulk revocation for a user with no sessions."""
        assert await repository.delete_all_for_user(UserId("user-alice")) == 0
        redis_client.pipeline.assert_not_called()
