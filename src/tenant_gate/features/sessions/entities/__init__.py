"""Session entities and protocols."""

from .protocols import SessionStore
from .session import BoundSession, IssuedSession, Session

__all__ = ["BoundSession", "IssuedSession", "Session", "SessionStore"]
