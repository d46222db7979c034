"""Role entity for RBAC."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Role:
    """Role - named bundle of permissions with authority and session policy."""

    id: UUID
    slug: str
    name: str
    priority: int
    created_at: datetime
    description: str | None = None
    is_system: bool = False
    is_super_admin: bool = False
    session_timeout_minutes: int | None = None
    concurrent_session_limit: int | None = None
    mfa_required: bool = False
