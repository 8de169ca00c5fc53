"""Audit repositories."""

from .audit_repository import AsyncPGAuditLogger, InMemoryAuditLogger

__all__ = ["AsyncPGAuditLogger", "InMemoryAuditLogger"]
