"""Session services."""

from .session_binder import SessionBinder
from .session_service import SessionService

__all__ = ["SessionBinder", "SessionService"]
