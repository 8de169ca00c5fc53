"""Audit log entry entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ....core.value_objects import TenantId, UserId
from ....utils import utc_now


@dataclass(frozen=True)
class AuditLogEntry:
    """Append-only record of a tenant-scoped administrative change."""

    tenant_id: TenantId
    action: str
    user_id: Optional[UserId] = None
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    changes: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
