"""Tenants feature: slug and id lookups used for tenant binding."""

from .entities import TenantDirectory
from .repositories import AsyncPGTenantDirectory, InMemoryTenantDirectory

__all__ = ["TenantDirectory", "AsyncPGTenantDirectory", "InMemoryTenantDirectory"]
