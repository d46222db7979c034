"""PostgreSQL audit log repository implementation."""

from __future__ import annotations

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from wardgate.domain.entities import AuditLogEntry

_COLUMNS = "id, actor_id, action, target_type, target_id, old_values, new_values, created_at"


def _to_entry(r: tuple) -> AuditLogEntry:
    return AuditLogEntry(
        id=r[0],
        actor_id=r[1],
        action=r[2],
        target_type=r[3],
        target_id=r[4],
        old_values=r[5] or {},
        new_values=r[6] or {},
        created_at=r[7],
    )


class PostgresAuditLogRepository:
    """Append-only audit log; rows are never updated or deleted."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def add(self, entry: AuditLogEntry) -> AuditLogEntry:
        await self._conn.execute(
            f"INSERT INTO audit_log ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.actor_id,
                entry.action,
                entry.target_type,
                entry.target_id,
                Jsonb(entry.old_values),
                Jsonb(entry.new_values),
                entry.created_at,
            ),
        )
        return entry

    async def list(
        self,
        *,
        target_type: str | None = None,
        target_id: str | None = None,
        actor_id: str | None = None,
    ) -> "list[AuditLogEntry]":
        """List entries oldest first, optionally filtered."""
        clauses = []
        params: list = []
        for column, value in (
            ("target_type", target_type),
            ("target_id", target_id),
            ("actor_id", actor_id),
        ):
            if value is not None:
                clauses.append(f"{column} = %s")
                params.append(value)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM audit_log{where} ORDER BY created_at, id",
            params,
        )
        rows = await cur.fetchall()
        return [_to_entry(r) for r in rows]
