"""Temporary permission - time-bounded elevation."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class TemporaryPermission:
    """Time-bounded grant. Revoked (is_active=False) and expired are both terminal."""

    id: UUID
    user_id: str
    permission: str
    granted_by: str
    granted_at: datetime
    reason: str
    expires_at: datetime | None = None
    is_active: bool = True

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

    def is_valid(self, now: datetime) -> bool:
        """Active and not expired at ``now``. Never trusts is_active alone."""
        return self.is_active and not self.is_expired(now)
