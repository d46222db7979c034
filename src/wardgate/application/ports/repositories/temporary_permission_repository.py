"""Temporary permission repository port."""

from typing import Protocol
from uuid import UUID

from wardgate.domain.entities import TemporaryPermission


class TemporaryPermissionRepository(Protocol):
    """Port for time-bounded grants. Rows are retained for audit."""

    async def get_by_id(self, grant_id: UUID) -> TemporaryPermission | None: ...

    async def list_for_user(self, user_id: str) -> list[TemporaryPermission]: ...

    async def create(self, grant: TemporaryPermission) -> TemporaryPermission: ...

    async def update(self, grant: TemporaryPermission) -> None: ...

    async def count_by_permission(self, permission: str) -> int: ...
