"""Session repositories."""

from .memory_session_store import InMemorySessionStore
from .redis_session_repository import RedisSessionRepository

__all__ = ["InMemorySessionStore", "RedisSessionRepository"]
