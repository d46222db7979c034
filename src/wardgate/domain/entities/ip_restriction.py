"""IP restriction rule."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from wardgate.domain.value_objects import IpRuleType


@dataclass
class PermissionIpRestriction:
    """Allow or deny rule: exact address, CIDR block or ``*`` wildcard pattern."""

    id: UUID
    ip_address: str
    type: IpRuleType
    created_at: datetime
    description: str | None = None
    created_by: str | None = None
    is_active: bool = True
