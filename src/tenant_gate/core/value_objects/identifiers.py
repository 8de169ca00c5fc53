"""Value objects for identifiers in tenant-gate.

Identifiers are immutable string-valued value objects. Database UUIDs are
carried in their canonical string form.
"""

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class UserId:
    """User identifier value object with basic validation."""
    value: str

    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError("User ID must be a non-empty string")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TenantId:
    """Tenant identifier value object with basic validation."""
    value: str

    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError("Tenant ID must be a non-empty string")

    @classmethod
    def generate(cls) -> 'TenantId':
        """Generate a new random TenantId."""
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RoleId:
    """Role identifier value object with basic validation."""
    value: str

    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError("Role ID must be a non-empty string")

    @classmethod
    def generate(cls) -> 'RoleId':
        """Generate a new random RoleId."""
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MembershipId:
    """Membership identifier value object with basic validation."""
    value: str

    def __post_init__(self):
        if not self.value or not isinstance(self.value, str):
            raise ValueError("Membership ID must be a non-empty string")

    def __str__(self) -> str:
        return self.value
