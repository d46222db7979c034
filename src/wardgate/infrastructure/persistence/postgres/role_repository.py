"""PostgreSQL role repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection, errors

from wardgate.domain.entities import Role
from wardgate.domain.exceptions import DuplicateSlug

_COLUMNS = (
    "id, slug, name, description, priority, is_system, is_super_admin, "
    "session_timeout_minutes, concurrent_session_limit, mfa_required, created_at"
)


def _to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        slug=r[1],
        name=r[2],
        description=r[3],
        priority=r[4],
        is_system=r[5],
        is_super_admin=r[6],
        session_timeout_minutes=r[7],
        concurrent_session_limit=r[8],
        mfa_required=r[9],
        created_at=r[10],
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def get_by_slug(self, slug: str) -> Role | None:
        """Get role by slug."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE slug = %s",
            (slug,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def list_all(self) -> list[Role]:
        """List all roles."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM role")
        rows = await cur.fetchall()
        return [_to_role(r) for r in rows]

    async def create(self, role: Role) -> Role:
        """Create role. A taken slug raises DuplicateSlug."""
        try:
            await self._conn.execute(
                f"INSERT INTO role ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    role.id,
                    role.slug,
                    role.name,
                    role.description,
                    role.priority,
                    role.is_system,
                    role.is_super_admin,
                    role.session_timeout_minutes,
                    role.concurrent_session_limit,
                    role.mfa_required,
                    role.created_at,
                ),
            )
        except errors.UniqueViolation as e:
            raise DuplicateSlug("Role", role.slug) from e
        return role

    async def update(self, role: Role) -> None:
        """Update mutable role fields."""
        await self._conn.execute(
            "UPDATE role SET name=%s, description=%s, priority=%s, "
            "session_timeout_minutes=%s, concurrent_session_limit=%s, mfa_required=%s "
            "WHERE id=%s",
            (
                role.name,
                role.description,
                role.priority,
                role.session_timeout_minutes,
                role.concurrent_session_limit,
                role.mfa_required,
                role.id,
            ),
        )

    async def delete(self, role_id: UUID) -> None:
        """Delete role."""
        await self._conn.execute("DELETE FROM role WHERE id = %s", (role_id,))
