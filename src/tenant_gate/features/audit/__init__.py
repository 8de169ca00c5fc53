"""Audit feature: append-only log of administrative changes."""

from .entities import AuditLogEntry, AuditLogger
from .repositories import AsyncPGAuditLogger, InMemoryAuditLogger

__all__ = ["AuditLogEntry", "AuditLogger", "AsyncPGAuditLogger", "InMemoryAuditLogger"]
