"""In-memory session store for development, testing, and single-instance deployments."""

from typing import Dict, Optional

from ....core.exceptions import StoreError
from ....core.value_objects import UserId
from ..entities import Session


class InMemorySessionStore:
    """Sessions held in a dict keyed by token hash.

    Expired records are kept until deleted; expiry is decided by the binder.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    async def find_by_token_hash(self, token_hash: str) -> Optional[Session]:
        return self._sessions.get(token_hash)

    async def create(self, session: Session) -> None:
        if session.token_hash in self._sessions:
            raise StoreError("Session token hash already in use")
        self._sessions[session.token_hash] = session

    async def delete(self, token_hash: str) -> bool:
        return self._sessions.pop(token_hash, None) is not None

    async def delete_all_for_user(self, user_id: UserId) -> int:
        hashes = [h for h, session in self._sessions.items() if session.user_id == user_id]
        for token_hash in hashes:
            del self._sessions[token_hash]
        return len(hashes)

    def __len__(self) -> int:
        return len(self._sessions)
