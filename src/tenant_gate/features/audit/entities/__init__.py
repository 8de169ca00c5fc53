"""Audit entities."""

from .audit_entry import AuditLogEntry
from .protocols import AuditLogger

__all__ = ["AuditLogEntry", "AuditLogger"]
