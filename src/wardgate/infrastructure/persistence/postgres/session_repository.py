"""PostgreSQL elevated session repository implementation."""

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from wardgate.domain.entities import PermissionSession, PermissionSessionAction

_COLUMNS = (
    "id, user_id, token, ip_address, user_agent, metadata, "
    "started_at, last_action_at, ended_at"
)
_ACTION_COLUMNS = "id, session_id, action_type, action_data, description, performed_at"

# two-key advisory lock namespace for per-user session starts
SESSION_LOCK_NAMESPACE = 0x5345


def _to_session(r: tuple) -> PermissionSession:
    return PermissionSession(
        id=r[0],
        user_id=r[1],
        token=r[2],
        ip_address=r[3],
        user_agent=r[4],
        metadata=r[5] or {},
        started_at=r[6],
        last_action_at=r[7],
        ended_at=r[8],
    )

def _to_action(r: tuple) -> PermissionSessionAction:
    return PermissionSessionAction(
        id=r[0],
        session_id=r[1],
        action_type=r[2],
        action_data=r[3] or {},
        description=r[4],
        performed_at=r[5],
    )

class PostgresSessionRepository:
    """Session and session action repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def lock_user(self, user_id: str) -> None:
        """Per-user advisory lock; released at commit or rollback."""
        await self._conn.execute(
            "SELECT pg_advisory_xact_lock(%s::int, hashtext(%s))",
            (SESSION_LOCK_NAMESPACE, user_id),
        )

    async def create(self, session: PermissionSession) -> PermissionSession:
        """Create session."""
        await self._conn.execute(
            f"INSERT INTO permission_session ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                session.id,
                session.user_id,
                session.token,
                session.ip_address,
                session.user_agent,
                Jsonb(session.metadata),
                session.started_at,
                session.last_action_at,
                session.ended_at,
            ),
        )
        return session

    async def get_by_token(
        self, token: str, for_update: bool = False
    ) -> PermissionSession | None:
        """Get session by token, optionally locking the row until commit."""
        sql = f"SELECT {_COLUMNS} FROM permission_session WHERE token = %s"
        if for_update:
            sql += " FOR UPDATE"
        cur = await self._conn.execute(sql, (token,))
        r = await cur.fetchone()
        return _to_session(r) if r else None

    async def list_unended_for_user(self, user_id: str) -> list[PermissionSession]:
        """Sessions without ended_at; callers apply the timeout policy."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_session "
            "WHERE user_id = %s AND ended_at IS NULL ORDER BY started_at",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_to_session(r) for r in rows]

    async def mark_ended(self, session_id: UUID, ended_at: datetime) -> bool:
        """Set ended_at if still open. Returns whether this call closed it."""
        cur = await self._conn.execute(
            "UPDATE permission_session SET ended_at = %s WHERE id = %s AND ended_at IS NULL",
            (ended_at, session_id),
        )
        return cur.rowcount == 1

    async def touch(self, session_id: UUID, at: datetime) -> None:
        await self._conn.execute(
            "UPDATE permission_session SET last_action_at = %s WHERE id = %s",
            (at, session_id),
        )

    async def add_action(self, action: PermissionSessionAction) -> PermissionSessionAction:
        """Append action to session log."""
        await self._conn.execute(
            f"INSERT INTO permission_session_action ({_ACTION_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            (
                action.id,
                action.session_id,
                action.action_type,
                Jsonb(action.action_data),
                action.description,
                action.performed_at,
            ),
        )
        return action

    async def list_actions(self, session_id: UUID) -> list[PermissionSessionAction]:
        """Actions of session in the order they were performed."""
        cur = await self._conn.execute(
            f"SELECT {_ACTION_COLUMNS} FROM permission_session_action "
            "WHERE session_id = %s ORDER BY performed_at, id",
            (session_id,),
        )
        rows = await cur.fetchall()
        return [_to_action(r) for r in rows]
