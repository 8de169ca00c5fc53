"""Session token generation and hashing.

Raw tokens are handed to the client once; only their SHA-256 hex digest is
ever stored or compared.
"""
import hashlib
import secrets


def generate_token(num_bytes: int = 32) -> str:
    """Generate a random URL-safe hex token."""
    return secrets.token_hex(num_bytes)


def hash_token(token: str) -> str:
    """Hash a token for storage and lookup (SHA-256, lowercase hex)."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
