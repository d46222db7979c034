"""Audit log repository port."""

from __future__ import annotations

from typing import Protocol

from wardgate.domain.entities import AuditLogEntry


class AuditLogRepository(Protocol):
    """Port for the append-only permission audit trail."""

    async def add(self, entry: AuditLogEntry) -> AuditLogEntry: ...

    async def list(
        self,
        *,
        target_type: str | None = None,
        target_id: str | None = None,
        actor_id: str | None = None,
    ) -> list[AuditLogEntry]:
        """Entries oldest first, optionally filtered."""
        ...
