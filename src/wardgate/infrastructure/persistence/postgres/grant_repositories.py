"""PostgreSQL grant repositories - role assignments, overrides, temporary grants."""

from uuid import UUID

from psycopg import AsyncConnection

from wardgate.domain.entities import (
    RolePermissionAssignment,
    TemporaryPermission,
    UserPermissionOverride,
)


class PostgresRolePermissionRepository:
    """Role permission assignment repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_for_role(self, role_id: UUID) -> set[str]:
        """Permission slugs assigned to role."""
        cur = await self._conn.execute(
            "SELECT permission_slug FROM role_permission WHERE role_id = %s",
            (role_id,),
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def add(self, assignment: RolePermissionAssignment) -> None:
        """Insert assignment; duplicates are ignored."""
        await self._conn.execute(
            "INSERT INTO role_permission (role_id, permission_slug, created_at) "
            "VALUES (%s, %s, %s) ON CONFLICT DO NOTHING",
            (assignment.role_id, assignment.permission, assignment.created_at),
        )

    async def remove(self, role_id: UUID, permission: str) -> bool:
        """Delete assignment. Returns whether it existed."""
        cur = await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s AND permission_slug = %s",
            (role_id, permission),
        )
        return cur.rowcount > 0

    async def replace(self, role_id: UUID, permissions: set[str]) -> None:
        """Replace the role's assignments with exactly ``permissions``."""
        await self._conn.execute(
            "DELETE FROM role_permission WHERE role_id = %s AND NOT (permission_slug = ANY(%s))",
            (role_id, sorted(permissions)),
        )
        if permissions:
            await self._conn.execute(
                "INSERT INTO role_permission (role_id, permission_slug, created_at) "
                "SELECT %s, slug, now() FROM unnest(%s::text[]) AS slug "
                "ON CONFLICT DO NOTHING",
                (role_id, sorted(permissions)),
            )

    async def count_by_permission(self, permission: str) -> int:
        cur = await self._conn.execute(
            "SELECT count(*) FROM role_permission WHERE permission_slug = %s",
            (permission,),
        )
        r = await cur.fetchone()
        return r[0]


class PostgresUserOverrideRepository:
    """User permission override repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_for_user(self, user_id: str) -> list[UserPermissionOverride]:
        """List overrides for user."""
        cur = await self._conn.execute(
            "SELECT user_id, permission_slug, allowed, updated_at "
            "FROM user_permission_override WHERE user_id = %s",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [
            UserPermissionOverride(user_id=r[0], permission=r[1], allowed=r[2], updated_at=r[3])
            for r in rows
        ]

    async def get(self, user_id: str, permission: str) -> UserPermissionOverride | None:
        """Get override for user and permission."""
        cur = await self._conn.execute(
            "SELECT user_id, permission_slug, allowed, updated_at "
            "FROM user_permission_override WHERE user_id = %s AND permission_slug = %s",
            (user_id, permission),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return UserPermissionOverride(user_id=r[0], permission=r[1], allowed=r[2], updated_at=r[3])

    async def upsert(self, override: UserPermissionOverride) -> None:
        """Insert or replace override."""
        await self._conn.execute(
            "INSERT INTO user_permission_override (user_id, permission_slug, allowed, updated_at) "
            "VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (user_id, permission_slug) "
            "DO UPDATE SET allowed = EXCLUDED.allowed, updated_at = EXCLUDED.updated_at",
            (override.user_id, override.permission, override.allowed, override.updated_at),
        )

    async def delete(self, user_id: str, permission: str) -> bool:
        """Delete override. Returns whether it existed."""
        cur = await self._conn.execute(
            "DELETE FROM user_permission_override WHERE user_id = %s AND permission_slug = %s",
            (user_id, permission),
        )
        return cur.rowcount > 0

    async def count_by_permission(self, permission: str) -> int:
        cur = await self._conn.execute(
            "SELECT count(*) FROM user_permission_override WHERE permission_slug = %s",
            (permission,),
        )
        r = await cur.fetchone()
        return r[0]


_TEMP_COLUMNS = (
    "id, user_id, permission_slug, granted_by, granted_at, expires_at, reason, is_active"
)


def _to_temporary(r: tuple) -> TemporaryPermission:
    return TemporaryPermission(
        id=r[0],
        user_id=r[1],
        permission=r[2],
        granted_by=r[3],
        granted_at=r[4],
        expires_at=r[5],
        reason=r[6],
        is_active=r[7],
    )


class PostgresTemporaryPermissionRepository:
    """Temporary permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, grant_id: UUID) -> TemporaryPermission | None:
        """Get grant by id."""
        cur = await self._conn.execute(
            f"SELECT {_TEMP_COLUMNS} FROM temporary_permission WHERE id = %s",
            (grant_id,),
        )
        r = await cur.fetchone()
        return _to_temporary(r) if r else None

    async def list_for_user(self, user_id: str) -> list[TemporaryPermission]:
        """List every grant of user, including expired and revoked rows."""
        cur = await self._conn.execute(
            f"SELECT {_TEMP_COLUMNS} FROM temporary_permission WHERE user_id = %s",
            (user_id,),
        )
        rows = await cur.fetchall()
        return [_to_temporary(r) for r in rows]

    async def create(self, grant: TemporaryPermission) -> TemporaryPermission:
        """Create grant."""
        await self._conn.execute(
            f"INSERT INTO temporary_permission ({_TEMP_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
            (
                grant.id,
                grant.user_id,
                grant.permission,
                grant.granted_by,
                grant.granted_at,
                grant.expires_at,
                grant.reason,
                grant.is_active,
            ),
        )
        return grant

    async def update(self, grant: TemporaryPermission) -> None:
        """Update expiry and active flag."""
        await self._conn.execute(
            "UPDATE temporary_permission SET expires_at=%s, is_active=%s WHERE id=%s",
            (grant.expires_at, grant.is_active, grant.id),
        )

    async def count_by_permission(self, permission: str) -> int:
        cur = await self._conn.execute(
            "SELECT count(*) FROM temporary_permission WHERE permission_slug = %s",
            (permission,),
        )
        r = await cur.fetchone()
        return r[0]
