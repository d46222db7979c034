"""Role permission assignment repository port."""

from typing import Protocol
from uuid import UUID

from wardgate.domain.entities import RolePermissionAssignment


class RolePermissionRepository(Protocol):
    """Port for role to permission mappings."""

    async def list_for_role(self, role_id: UUID) -> set[str]: ...

    async def add(self, assignment: RolePermissionAssignment) -> None: ...

    async def remove(self, role_id: UUID, permission: str) -> bool: ...

    async def replace(self, role_id: UUID, permissions: set[str]) -> None: ...

    async def count_by_permission(self, permission: str) -> int: ...
