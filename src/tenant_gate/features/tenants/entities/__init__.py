"""Tenant entities."""

from .protocols import TenantDirectory

__all__ = ["TenantDirectory"]
