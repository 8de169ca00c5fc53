"""Utility helpers for tenant-gate."""

from .datetime import ensure_utc, utc_now
from .tokens import generate_token, hash_token

__all__ = [
    "ensure_utc",
    "utc_now",
    "generate_token",
    "hash_token",
]
