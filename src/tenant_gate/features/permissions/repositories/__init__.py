"""Permission repositories: asyncpg and in-memory implementations."""

from .memory import InMemoryMembershipRepository, InMemoryRoleRepository
from .role_repository import AsyncPGMembershipRepository, AsyncPGRoleRepository

__all__ = [
    "AsyncPGRoleRepository",
    "AsyncPGMembershipRepository",
    "InMemoryRoleRepository",
    "InMemoryMembershipRepository",
]
