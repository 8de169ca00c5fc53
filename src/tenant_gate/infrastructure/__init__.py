"""Infrastructure adapters: locking and web framework integration."""

from .locking import InProcessTenantLocks, PostgresAdvisoryLocks, TenantLockProvider

__all__ = ["InProcessTenantLocks", "PostgresAdvisoryLocks", "TenantLockProvider"]
