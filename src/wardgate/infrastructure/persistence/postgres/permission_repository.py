"""PostgreSQL permission repository implementation."""

from psycopg import AsyncConnection, errors

from wardgate.domain.entities import Permission
from wardgate.domain.exceptions import DuplicateSlug

_COLUMNS = "id, slug, name, description, resource, action, requires_mfa, created_at"


def _to_permission(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        slug=r[1],
        name=r[2],
        description=r[3],
        resource=r[4],
        action=r[5],
        requires_mfa=r[6],
        created_at=r[7],
    )


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_slug(self, slug: str) -> Permission | None:
        """Get permission by slug."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE slug = %s",
            (slug,),
        )
        r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def list_all(self) -> list[Permission]:
        """List all permissions."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM permission ORDER BY slug")
        rows = await cur.fetchall()
        return [_to_permission(r) for r in rows]

    async def create(self, permission: Permission) -> Permission:
        """Create permission. A taken slug raises DuplicateSlug."""
        try:
            await self._conn.execute(
                f"INSERT INTO permission ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    permission.id,
                    permission.slug,
                    permission.name,
                    permission.description,
                    permission.resource,
                    permission.action,
                    permission.requires_mfa,
                    permission.created_at,
                ),
            )
        except errors.UniqueViolation as e:
            raise DuplicateSlug("Permission", permission.slug) from e
        return permission

    async def delete(self, slug: str) -> None:
        """Delete permission."""
        await self._conn.execute("DELETE FROM permission WHERE slug = %s", (slug,))
