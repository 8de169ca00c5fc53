"""Protocol interface for session storage."""

from abc import abstractmethod
from typing import Optional, Protocol, runtime_checkable

from ....core.value_objects import UserId
from .session import Session


@runtime_checkable
class SessionStore(Protocol):
    """Protocol for session persistence keyed by token hash."""

    @abstractmethod
    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        """Get the session stored under ``token_hash``."""
        ...

    @abstractmethod
    async def create(self, session: Session) -> None:
        """Store a new session. Fails if the hash is already in use."""
        ...

    @abstractmethod
    async def delete(self, token_hash: str) -> bool:
        """Delete a session. Returns True if one was removed."""
        ...

    @abstractmethod
    async def delete_all_for_user(self, user_id: UserId) -> int:
        """Delete every session of a user. Returns the number removed."""
        ...
