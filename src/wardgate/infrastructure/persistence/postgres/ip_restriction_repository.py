"""PostgreSQL IP restriction repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from wardgate.domain.entities import PermissionIpRestriction
from wardgate.domain.value_objects import IpRuleType

_COLUMNS = "id, ip_address, type, description, created_by, is_active, created_at"


def _to_rule(r: tuple) -> PermissionIpRestriction:
    return PermissionIpRestriction(
        id=r[0],
        ip_address=r[1],
        type=IpRuleType(r[2]),
        description=r[3],
        created_by=r[4],
        is_active=r[5],
        created_at=r[6],
    )


class PostgresIpRestrictionRepository:
    """IP restriction repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, rule_id: UUID) -> PermissionIpRestriction | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_ip_restriction WHERE id = %s",
            (rule_id,),
        )
        r = await cur.fetchone()
        return _to_rule(r) if r else None

    async def list_all(self, active_only: bool = False) -> list[PermissionIpRestriction]:
        """List rules, oldest first."""
        sql = f"SELECT {_COLUMNS} FROM permission_ip_restriction"
        if active_only:
            sql += " WHERE is_active"
        cur = await self._conn.execute(sql + " ORDER BY created_at")
        rows = await cur.fetchall()
        return [_to_rule(r) for r in rows]

    async def create(self, rule: PermissionIpRestriction) -> PermissionIpRestriction:
        """Create rule."""
        await self._conn.execute(
            f"INSERT INTO permission_ip_restriction ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                rule.id,
                rule.ip_address,
                str(rule.type),
                rule.description,
                rule.created_by,
                rule.is_active,
                rule.created_at,
            ),
        )
        return rule

    async def update(self, rule: PermissionIpRestriction) -> None:
        await self._conn.execute(
            "UPDATE permission_ip_restriction SET description=%s, is_active=%s WHERE id=%s",
            (rule.description, rule.is_active, rule.id),
        )
