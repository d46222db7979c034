"""Audit log entry - persisted record of a permission change."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass
class AuditLogEntry:
    """Who changed what, with the values before and after."""

    id: UUID
    actor_id: str | None
    action: str
    target_type: str
    target_id: str
    created_at: datetime
    old_values: dict[str, Any] = field(default_factory=dict)
    new_values: dict[str, Any] = field(default_factory=dict)
