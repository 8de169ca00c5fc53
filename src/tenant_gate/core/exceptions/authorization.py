"""Permission and role exceptions."""

from typing import Iterable, List, Optional

from .base import TenantGateError, ValidationError


class InvalidPermissionFormat(ValidationError):
    """Raised when a permission string does not satisfy the 1-3 segment grammar.

    Raised at data-entry boundaries (role save, module registration); a
    malformed permission never reaches the matcher.
    """

    def __init__(self, permissions: Iterable[str], message: Optional[str] = None) -> None:
        self.permissions: List[str] = sorted(set(permissions))
        super().__init__(
            message or f"Invalid permission format: {', '.join(repr(p) for p in self.permissions)}",
            details={"permissions": self.permissions},
        )


class AuthorizationError(TenantGateError):
    """Base exception for authorization failures."""
    pass


class PermissionDenied(AuthorizationError):
    """Raised when a caller lacks the permission an operation requires."""

    def __init__(self, required: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Missing permission: {required}", details={"required": required})
        self.required = required


class PermissionEscalation(AuthorizationError):
    """Raised when a caller tries to grant permissions they do not hold."""

    def __init__(self, permissions: Iterable[str]) -> None:
        self.permissions: List[str] = sorted(set(permissions))
        super().__init__(
            "Cannot assign permissions you do not have",
            details={"permissions": self.permissions},
        )


class RoleNotFound(AuthorizationError):
    """Raised when a role id or slug does not resolve within the tenant."""

    def __init__(self, role_ref: str, tenant_id: Optional[str] = None) -> None:
        super().__init__(
            f"Role not found: {role_ref}",
            details={"role": role_ref, "tenant_id": tenant_id},
        )


class SystemRoleImmutable(AuthorizationError):
    """Raised when a system role is edited or deleted through role management."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Cannot modify system role '{slug}'", details={"role_slug": slug})


class EmptyPermissionSet(AuthorizationError):
    """Raised when an active role would be saved without permissions."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"Role '{slug}' must grant at least one permission", details={"role_slug": slug})


class DuplicateRoleSlug(AuthorizationError):
    """Raised when a role slug is already taken within the tenant."""

    def __init__(self, slug: str, tenant_id: str) -> None:
        super().__init__(
            f"A role with slug '{slug}' already exists",
            details={"role_slug": slug, "tenant_id": tenant_id},
        )


class RoleInUse(AuthorizationError):
    """Raised when deleting a role that is still assigned to members."""

    def __init__(self, slug: str, assignments: int) -> None:
        super().__init__(
            f"Cannot delete role '{slug}' while it is assigned to {assignments} member(s)",
            details={"role_slug": slug, "assignments": assignments},
        )
