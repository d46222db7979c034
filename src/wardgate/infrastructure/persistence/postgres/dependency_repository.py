"""PostgreSQL permission dependency and catalog version repositories."""

from psycopg import AsyncConnection

from wardgate.domain.entities import PermissionDependency

# pg_advisory_xact_lock key shared by every catalog graph writer
GRAPH_LOCK_KEY = 0x57415244


class PostgresDependencyRepository:
    """Dependency edge repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def lock(self) -> None:
        """Take the graph advisory lock; released at commit or rollback."""
        await self._conn.execute("SELECT pg_advisory_xact_lock(%s)", (GRAPH_LOCK_KEY,))

    async def list_all(self) -> list[PermissionDependency]:
        """List all edges."""
        cur = await self._conn.execute(
            "SELECT permission_slug, depends_on_slug FROM permission_dependency"
        )
        rows = await cur.fetchall()
        return [PermissionDependency(permission=r[0], depends_on=r[1]) for r in rows]

    async def create(self, edge: PermissionDependency) -> None:
        """Insert edge."""
        await self._conn.execute(
            "INSERT INTO permission_dependency (permission_slug, depends_on_slug) "
            "VALUES (%s, %s) ON CONFLICT DO NOTHING",
            (edge.permission, edge.depends_on),
        )

    async def delete(self, edge: PermissionDependency) -> bool:
        """Delete edge. Returns whether it existed."""
        cur = await self._conn.execute(
            "DELETE FROM permission_dependency "
            "WHERE permission_slug = %s AND depends_on_slug = %s",
            (edge.permission, edge.depends_on),
        )
        return cur.rowcount > 0

    async def delete_for_permission(self, slug: str) -> None:
        """Delete outgoing edges of a permission."""
        await self._conn.execute(
            "DELETE FROM permission_dependency WHERE permission_slug = %s",
            (slug,),
        )


class PostgresCatalogVersionRepository:
    """Single-row catalog version counter."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_version(self) -> int:
        cur = await self._conn.execute("SELECT version FROM catalog_version WHERE id = 1")
        r = await cur.fetchone()
        return r[0] if r else 0

    async def bump(self) -> int:
        cur = await self._conn.execute(
            "INSERT INTO catalog_version (id, version) VALUES (1, 1) "
            "ON CONFLICT (id) DO UPDATE SET version = catalog_version.version + 1 "
            "RETURNING version"
        )
        r = await cur.fetchone()
        return r[0]
