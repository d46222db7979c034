"""PostgreSQL user role lookup."""

from uuid import UUID

from psycopg import AsyncConnection


class PostgresUserRoleRepository:
    """Reads the user_role table maintained by the identity layer."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_role_id(self, user_id: str) -> UUID | None:
        cur = await self._conn.execute(
            "SELECT role_id FROM user_role WHERE user_id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        return r[0] if r else None

    async def count_for_role(self, role_id: UUID) -> int:
        cur = await self._conn.execute(
            "SELECT count(*) FROM user_role WHERE role_id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return r[0]
