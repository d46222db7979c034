"""Permission change request entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from wardgate.domain.value_objects import ChangeRequestStatus


@dataclass
class PermissionChangeRequest:
    """Requested set of override changes for a user, pending approval."""

    id: UUID
    user_id: str
    requested_by: str
    reason: str
    created_at: datetime
    permissions_to_add: list[str] = field(default_factory=list)
    permissions_to_remove: list[str] = field(default_factory=list)
    status: ChangeRequestStatus = ChangeRequestStatus.PENDING
    approved_by: str | None = None
    approved_at: datetime | None = None
    expires_at: datetime | None = None
    decision_reason: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now
