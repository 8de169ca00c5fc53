"""Protocol interface for audit logging."""

from abc import abstractmethod
from typing import Protocol, runtime_checkable

from .audit_entry import AuditLogEntry


@runtime_checkable
class AuditLogger(Protocol):
    """Protocol for appending audit entries."""

    @abstractmethod
    async def record(self, entry: AuditLogEntry) -> None:
        """Append an entry to the audit log."""
        ...
