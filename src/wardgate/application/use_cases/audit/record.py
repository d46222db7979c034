"""Write audit log entries inside the caller's unit of work."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from wardgate.application.ports import UnitOfWork
from wardgate.domain.entities import AuditLogEntry


async def record_change(
    uow: UnitOfWork,
    now: datetime,
    actor_id: str | None,
    action: str,
    target_type: str,
    target_id: object,
    old_values: dict[str, Any] | None = None,
    new_values: dict[str, Any] | None = None,
) -> AuditLogEntry:
    """Append one entry. It commits or rolls back together with the change."""
    entry = AuditLogEntry(
        id=uuid4(),
        actor_id=actor_id,
        action=action,
        target_type=target_type,
        target_id=str(target_id),
        created_at=now,
        old_values=old_values or {},
        new_values=new_values or {},
    )
    return await uow.audit_log.add(entry)
