"""Session and tenant-binding exceptions."""

from typing import Any, Dict, Optional

from .base import TenantGateError


class AuthenticationError(TenantGateError):
    """Base exception for session authentication failures.

    Callers must re-authenticate (or be redirected) when one of these is raised.
    """
    pass


def mask_token_hash(token_hash: Optional[str]) -> Optional[str]:
    """Mask a token hash for safe inclusion in logs and error details."""
    if not token_hash:
        return None
    if len(token_hash) <= 12:
        return "***"
    return f"{token_hash[:6]}...{token_hash[-6:]}"


class InvalidSession(AuthenticationError):
    """Raised when no live session exists for the presented token."""

    def __init__(
        self,
        message: str = "Session is invalid",
        *,
        token_hash: Optional[str] = None,
        reason: str = "not_found",
    ) -> None:
        super().__init__(
            message,
            details={"token_hash": mask_token_hash(token_hash), "reason": reason},
        )
        self.reason = reason


class SessionExpired(AuthenticationError):
    """Raised when the session record exists but its lifetime has passed."""

    def __init__(
        self,
        message: str = "Session has expired",
        *,
        token_hash: Optional[str] = None,
        expired_at: Any = None,
    ) -> None:
        super().__init__(
            message,
            details={
                "token_hash": mask_token_hash(token_hash),
                "expired_at": expired_at.isoformat() if expired_at is not None else None,
            },
        )
        self.expired_at = expired_at


class TenantBindingMismatch(AuthenticationError):
    """Raised when the tenant asserted by a request is not the session's tenant.

    This is not a conventional auth failure: the caller holds a valid session,
    but for a different tenant (or for none). The request layer must redirect
    to ``redirect_path`` and never serve data under the asserted tenant.
    """

    def __init__(
        self,
        message: str = "Request tenant does not match the session tenant",
        *,
        bound_tenant_id: Optional[str] = None,
        asserted_tenant: Optional[str] = None,
        redirect_path: str,
        reason: str = "tenant_mismatch",
    ) -> None:
        details: Dict[str, Any] = {
            "bound_tenant_id": bound_tenant_id,
            "asserted_tenant": asserted_tenant,
            "redirect_path": redirect_path,
            "reason": reason,
        }
        super().__init__(message, details=details)
        self.bound_tenant_id = bound_tenant_id
        self.asserted_tenant = asserted_tenant
        self.redirect_path = redirect_path
        self.reason = reason
