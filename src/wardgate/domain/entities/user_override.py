"""Per-user permission override."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class UserPermissionOverride:
    """Explicit allow or deny for one user, taking precedence over role grants."""

    user_id: str
    permission: str
    allowed: bool
    updated_at: datetime
