"""PostgreSQL permission change request repository implementation."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from wardgate.domain.entities import PermissionChangeRequest
from wardgate.domain.value_objects import ChangeRequestStatus

_COLUMNS = (
    "id, user_id, requested_by, reason, permissions_to_add, permissions_to_remove, "
    "status, approved_by, approved_at, expires_at, decision_reason, created_at"
)


def _to_request(r: tuple) -> PermissionChangeRequest:
    return PermissionChangeRequest(
        id=r[0],
        user_id=r[1],
        requested_by=r[2],
        reason=r[3],
        permissions_to_add=list(r[4] or []),
        permissions_to_remove=list(r[5] or []),
        status=ChangeRequestStatus(r[6]),
        approved_by=r[7],
        approved_at=r[8],
        expires_at=r[9],
        decision_reason=r[10],
        created_at=r[11],
    )


class PostgresChangeRequestRepository:
    """Change request repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(
        self, request_id: UUID, for_update: bool = False
    ) -> PermissionChangeRequest | None:
        """Get request by id, optionally locking the row until commit."""
        sql = f"SELECT {_COLUMNS} FROM permission_change_request WHERE id = %s"
        if for_update:
            sql += " FOR UPDATE"
        cur = await self._conn.execute(sql, (request_id,))
        r = await cur.fetchone()
        return _to_request(r) if r else None

    async def list(
        self,
        *,
        status: ChangeRequestStatus | None = None,
        user_id: str | None = None,
    ) -> "list[PermissionChangeRequest]":
        """List requests newest first, optionally filtered."""
        clauses = []
        params: list = []
        if status is not None:
            clauses.append("status = %s")
            params.append(str(status))
        if user_id is not None:
            clauses.append("user_id = %s")
            params.append(user_id)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_change_request{where} "
            "ORDER BY created_at DESC",
            params,
        )
        rows = await cur.fetchall()
        return [_to_request(r) for r in rows]

    async def create(self, request: PermissionChangeRequest) -> PermissionChangeRequest:
        """Create request."""
        await self._conn.execute(
            f"INSERT INTO permission_change_request ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                request.id,
                request.user_id,
                request.requested_by,
                request.reason,
                request.permissions_to_add,
                request.permissions_to_remove,
                str(request.status),
                request.approved_by,
                request.approved_at,
                request.expires_at,
                request.decision_reason,
                request.created_at,
            ),
        )
        return request

    async def update(self, request: PermissionChangeRequest) -> None:
        """Persist status transition fields."""
        await self._conn.execute(
            """UPDATE permission_change_request
               SET status=%s, approved_by=%s, approved_at=%s, decision_reason=%s
               WHERE id=%s""",
            (
                str(request.status),
                request.approved_by,
                request.approved_at,
                request.decision_reason,
                request.id,
            ),
        )

    async def expire_pending(self, now: datetime) -> list[UUID]:
        """Mark pending requests past their deadline as expired."""
        cur = await self._conn.execute(
            """UPDATE permission_change_request SET status = %s
               WHERE status = %s AND expires_at IS NOT NULL AND expires_at <= %s
               RETURNING id""",
            (str(ChangeRequestStatus.EXPIRED), str(ChangeRequestStatus.PENDING), now),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]
