"""Permission entity - atomic capability identified by slug."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Permission:
    """Permission definition. Slug is the stable identity used by every reference."""

    id: UUID
    slug: str
    name: str
    created_at: datetime
    description: str | None = None
    resource: str | None = None
    action: str | None = None
    requires_mfa: bool = False
