"""Sessions feature for tenant-gate.

Session issuance, storage and tenant binding.
"""

from .entities import BoundSession, IssuedSession, Session, SessionStore
from .repositories import InMemorySessionStore, RedisSessionRepository
from .services import SessionBinder, SessionService

__all__ = [
    "BoundSession",
    "IssuedSession",
    "Session",
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionRepository",
    "SessionBinder",
    "SessionService",
]
