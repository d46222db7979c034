"""Role to permission assignment."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class RolePermissionAssignment:
    """Role grants permission. Created or removed, never mutated."""

    role_id: UUID
    permission: str
    created_at: datetime
